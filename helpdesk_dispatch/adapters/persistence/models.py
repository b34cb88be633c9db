"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk_dispatch.adapters.persistence.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class GroupModel(Base):
    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    supervisor_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    assign_tasks_first: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    members: Mapped[list["GroupMemberModel"]] = relationship(
        back_populates="group", order_by="GroupMemberModel.id"
    )


class GroupMemberModel(Base):
    __tablename__ = "group_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("groups.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    group: Mapped["GroupModel"] = relationship(back_populates="members")

    __table_args__ = (
        Index("idx_group_members_group", "group_id"),
        Index("uq_group_members_user", "group_id", "user_id", unique=True),
    )


class CategoryModel(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # No FK: the tree is admin-edited and may be inconsistent
    parent_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    default_group_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    assignment_strategy: Mapped[str] = mapped_column(
        String(20), nullable=False, default="manual"
    )

    __table_args__ = (
        Index("idx_categories_parent", "parent_id"),
        Index("idx_categories_name", "name"),
    )


class AssignmentRuleModel(Base):
    __tablename__ = "auto_assignment_rules"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    conditions: Mapped[list[dict]] = mapped_column(JSONB, nullable=False, default=list)
    assign_to_type: Mapped[str] = mapped_column(String(20), nullable=False)
    assign_to_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    tickets_routed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("idx_rules_active_priority", "is_active", "priority"),)


class TicketModel(Base):
    """Only the columns the dispatch engine reads; intake owns the rest."""

    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    assigned_to: Mapped[str | None] = mapped_column(String(64), nullable=True)
    group_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("idx_tickets_assigned_created", "assigned_to", "created_at"),)
