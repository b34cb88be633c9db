"""Rule and group read endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from helpdesk_dispatch.application.ports.group_repo import GroupRepository
from helpdesk_dispatch.application.ports.rule_repo import RuleRepository
from helpdesk_dispatch.application.use_cases.select_agent import LoadBalancer
from helpdesk_dispatch.domain.entities.rule import AssignmentRule
from helpdesk_dispatch.domain.policies.least_loaded import pick_least_loaded
from helpdesk_dispatch.infrastructure.api.dependencies import (
    get_group_repo,
    get_load_balancer,
    get_rule_repo,
)

router = APIRouter(tags=["rules"])


@router.get("/rules")
async def list_rules(rule_repo: RuleRepository = Depends(get_rule_repo)):
    """All rules in evaluation order with their usage counters."""
    rules = await rule_repo.get_all()
    return {
        "total": len(rules),
        "active": sum(1 for r in rules if r.is_active),
        "tickets_routed": sum(r.tickets_routed for r in rules),
        "rules": [_serialize_rule(r) for r in rules],
    }


@router.get("/groups/{group_id}/workload")
async def group_workload(
    group_id: str,
    group_repo: GroupRepository = Depends(get_group_repo),
    balancer: LoadBalancer = Depends(get_load_balancer),
):
    """Today's ticket count per active member and the next least-loaded pick."""
    group = await group_repo.get_by_id(group_id)
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")

    members, counts = await balancer.today_counts(group_id)
    return {
        "group_id": group.id,
        "group_name": group.name,
        "members": [{"agent_id": a, "tickets_today": counts[a]} for a in members],
        "next_agent": pick_least_loaded(members, counts) if members else None,
    }


def _serialize_rule(r: AssignmentRule) -> dict:
    return {
        "id": r.id,
        "name": r.name,
        "priority": r.priority,
        "is_active": r.is_active,
        "assign_to_type": r.assign_to_type.value,
        "assign_to_id": r.assign_to_id,
        "tickets_routed": r.tickets_routed,
        "conditions": [
            {"field": c.field, "operator": c.operator, "value": c.value}
            for c in r.conditions
        ],
    }
