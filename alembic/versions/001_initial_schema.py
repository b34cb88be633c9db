"""Initial schema — routing configuration and ticket assignment columns.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Groups
    op.create_table(
        "groups",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), unique=True, nullable=False),
        sa.Column("supervisor_id", sa.String(64), nullable=True),
        sa.Column("assign_tasks_first", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    )

    # Group members
    op.create_table(
        "group_members",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "group_id", sa.String(64),
            sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    )
    op.create_index("idx_group_members_group", "group_members", ["group_id"])
    op.create_index(
        "uq_group_members_user", "group_members", ["group_id", "user_id"], unique=True
    )

    # Categories
    op.create_table(
        "categories",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("parent_id", sa.String(64), nullable=True),
        sa.Column("default_group_id", sa.String(64), nullable=True),
        sa.Column(
            "assignment_strategy", sa.String(20), nullable=False, server_default="manual"
        ),
    )
    op.create_index("idx_categories_parent", "categories", ["parent_id"])
    op.create_index("idx_categories_name", "categories", ["name"])

    # Auto-assignment rules
    op.create_table(
        "auto_assignment_rules",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("conditions", JSONB, nullable=False, server_default="[]"),
        sa.Column("assign_to_type", sa.String(20), nullable=False),
        sa.Column("assign_to_id", sa.String(64), nullable=True),
        sa.Column("priority", sa.Integer, nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("tickets_routed", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index(
        "idx_rules_active_priority", "auto_assignment_rules", ["is_active", "priority"]
    )

    # Tickets (dispatch-relevant columns only)
    op.create_table(
        "tickets",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("assigned_to", sa.String(64), nullable=True),
        sa.Column("group_id", sa.String(64), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index(
        "idx_tickets_assigned_created", "tickets", ["assigned_to", "created_at"]
    )


def downgrade() -> None:
    op.drop_table("tickets")
    op.drop_table("auto_assignment_rules")
    op.drop_table("categories")
    op.drop_table("group_members")
    op.drop_table("groups")
