"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk_dispatch.adapters.persistence.database import get_session
from helpdesk_dispatch.adapters.persistence.repositories import (
    SqlCategoryRepository,
    SqlGroupRepository,
    SqlRuleRepository,
    SqlWorkloadRepository,
)
from helpdesk_dispatch.application.use_cases.category_fallback import CategoryFallbackResolver
from helpdesk_dispatch.application.use_cases.default_groups import DefaultGroups
from helpdesk_dispatch.application.use_cases.dispatch_ticket import DispatchTicketUseCase
from helpdesk_dispatch.application.use_cases.match_rule import RuleMatcher
from helpdesk_dispatch.application.use_cases.select_agent import LoadBalancer
from helpdesk_dispatch.config import settings

# Re-export session dependency
get_db_session = get_session


def get_default_groups(request: Request) -> DefaultGroups:
    """Mapping resolved once in the app lifespan (empty if start-up lookup failed)."""
    return getattr(request.app.state, "default_groups", None) or DefaultGroups(
        software_types=frozenset(settings.software_types())
    )


def get_rule_repo(session: AsyncSession = Depends(get_session)) -> SqlRuleRepository:
    return SqlRuleRepository(session)


def get_group_repo(session: AsyncSession = Depends(get_session)) -> SqlGroupRepository:
    return SqlGroupRepository(session)


def get_load_balancer(session: AsyncSession = Depends(get_session)) -> LoadBalancer:
    return LoadBalancer(
        group_repo=SqlGroupRepository(session),
        workload_repo=SqlWorkloadRepository(session),
        tz=settings.tz,
    )


def get_dispatch_uc(
    session: AsyncSession = Depends(get_session),
    default_groups: DefaultGroups = Depends(get_default_groups),
) -> DispatchTicketUseCase:
    rule_repo = SqlRuleRepository(session)
    group_repo = SqlGroupRepository(session)
    return DispatchTicketUseCase(
        rule_repo=rule_repo,
        group_repo=group_repo,
        matcher=RuleMatcher(rule_repo),
        balancer=LoadBalancer(
            group_repo=group_repo,
            workload_repo=SqlWorkloadRepository(session),
            tz=settings.tz,
        ),
        fallback=CategoryFallbackResolver(
            SqlCategoryRepository(session),
            max_depth=settings.category_fallback_max_depth,
        ),
        default_groups=default_groups,
    )
