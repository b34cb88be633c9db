"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from helpdesk_dispatch.adapters.persistence.models import (
    AssignmentRuleModel,
    CategoryModel,
    GroupMemberModel,
    GroupModel,
    TicketModel,
)
from helpdesk_dispatch.application.ports.category_repo import CategoryRepository
from helpdesk_dispatch.application.ports.group_repo import GroupRepository
from helpdesk_dispatch.application.ports.rule_repo import RuleRepository
from helpdesk_dispatch.application.ports.workload_repo import WorkloadRepository
from helpdesk_dispatch.domain.entities.category import Category
from helpdesk_dispatch.domain.entities.group import Group, GroupMember
from helpdesk_dispatch.domain.entities.rule import AssignmentRule, Condition
from helpdesk_dispatch.domain.value_objects.enums import AssignmentStrategy, AssignToType

logger = logging.getLogger(__name__)

# ─── Mappers ─────────────────────────────────────────────────────────


def _condition_to_domain(raw: dict) -> Condition:
    return Condition(
        field=str(raw.get("field") or ""),
        operator=str(raw.get("operator") or ""),
        value=raw.get("value") if isinstance(raw.get("value"), list) else str(raw.get("value") or ""),
    )


def _rule_to_domain(m: AssignmentRuleModel) -> AssignmentRule:
    return AssignmentRule(
        id=m.id,
        name=m.name,
        assign_to_type=AssignToType(m.assign_to_type),
        assign_to_id=m.assign_to_id,
        priority=m.priority,
        conditions=[_condition_to_domain(c) for c in (m.conditions or []) if isinstance(c, dict)],
        is_active=m.is_active,
        tickets_routed=m.tickets_routed or 0,
    )


def _rules_to_domain(models) -> list[AssignmentRule]:
    rules = []
    for m in models:
        try:
            rules.append(_rule_to_domain(m))
        except ValueError:
            logger.warning("Rule %s has unknown assign_to_type %r, skipping", m.id, m.assign_to_type)
    return rules


def _group_to_domain(m: GroupModel) -> Group:
    return Group(
        id=m.id,
        name=m.name,
        members=[GroupMember(agent_id=gm.user_id, is_active=gm.is_active) for gm in m.members],
        supervisor_id=m.supervisor_id,
        assign_tasks_first=m.assign_tasks_first,
        is_active=m.is_active,
    )


def _category_to_domain(m: CategoryModel) -> Category:
    return Category(
        id=m.id,
        name=m.name,
        parent_id=m.parent_id,
        default_group_id=m.default_group_id,
        assignment_strategy=AssignmentStrategy.parse(m.assignment_strategy),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ─── Repositories ────────────────────────────────────────────────────


class SqlRuleRepository(RuleRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_active_ordered(self) -> list[AssignmentRule]:
        result = await self._s.execute(
            select(AssignmentRuleModel)
            .where(AssignmentRuleModel.is_active.is_(True))
            .order_by(AssignmentRuleModel.priority.asc(), AssignmentRuleModel.created_at.asc())
        )
        return _rules_to_domain(result.scalars())

    async def get_all(self) -> list[AssignmentRule]:
        result = await self._s.execute(
            select(AssignmentRuleModel).order_by(
                AssignmentRuleModel.priority.asc(), AssignmentRuleModel.created_at.asc()
            )
        )
        return _rules_to_domain(result.scalars())

    async def increment_tickets_routed(self, rule_id: str) -> None:
        # SAVEPOINT: a failed counter write must not abort the request's transaction
        async with self._s.begin_nested():
            await self._s.execute(
                update(AssignmentRuleModel)
                .where(AssignmentRuleModel.id == rule_id)
                .values(
                    tickets_routed=AssignmentRuleModel.tickets_routed + 1,
                    updated_at=func.now(),
                )
            )


class SqlGroupRepository(GroupRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, group_id: str) -> Group | None:
        result = await self._s.execute(
            select(GroupModel)
            .options(selectinload(GroupModel.members))
            .where(GroupModel.id == group_id)
        )
        m = result.scalar_one_or_none()
        return _group_to_domain(m) if m else None

    async def get_active_member_ids(self, group_id: str) -> list[str]:
        result = await self._s.execute(
            select(GroupMemberModel.user_id)
            .where(
                GroupMemberModel.group_id == group_id,
                GroupMemberModel.is_active.is_(True),
            )
            .order_by(GroupMemberModel.id)
        )
        return list(result.scalars())

    async def find_active_id_by_name(self, name: str) -> str | None:
        """Same lookup as ``match_group_name``: exact (case-insensitive)
        first, then the first substring match by name."""
        wanted = name.strip().lower()
        if not wanted:
            return None
        result = await self._s.execute(
            select(GroupModel.id)
            .where(
                GroupModel.name.ilike(f"%{_escape_like(wanted)}%", escape="\\"),
                GroupModel.is_active.is_(True),
            )
            .order_by(
                (func.lower(func.trim(GroupModel.name)) == wanted).desc(),
                GroupModel.name,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()


class SqlCategoryRepository(CategoryRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, category_id: str) -> Category | None:
        m = await self._s.get(CategoryModel, category_id)
        return _category_to_domain(m) if m else None

    async def get_by_name(self, name: str) -> Category | None:
        result = await self._s.execute(
            select(CategoryModel)
            .where(func.lower(CategoryModel.name) == name.strip().lower())
            .limit(1)
        )
        m = result.scalar_one_or_none()
        return _category_to_domain(m) if m else None


class SqlWorkloadRepository(WorkloadRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def count_assigned_since(
        self, agent_ids: list[str], since: datetime
    ) -> dict[str, int]:
        if not agent_ids:
            return {}
        result = await self._s.execute(
            select(TicketModel.assigned_to, func.count(TicketModel.id))
            .where(
                TicketModel.assigned_to.in_(agent_ids),
                TicketModel.created_at >= since,
            )
            .group_by(TicketModel.assigned_to)
        )
        return {agent_id: count for agent_id, count in result.all()}
