"""DispatchTicketUseCase — rule → category fallback → hardcoded default."""

from __future__ import annotations

import logging

from helpdesk_dispatch.application.ports.group_repo import GroupRepository
from helpdesk_dispatch.application.ports.rule_repo import RuleRepository
from helpdesk_dispatch.application.use_cases.category_fallback import CategoryFallbackResolver
from helpdesk_dispatch.application.use_cases.default_groups import DefaultGroups
from helpdesk_dispatch.application.use_cases.match_rule import RuleMatcher
from helpdesk_dispatch.application.use_cases.select_agent import LoadBalancer
from helpdesk_dispatch.domain.entities.decision import AssignmentDecision, CategoryRoute
from helpdesk_dispatch.domain.entities.rule import AssignmentRule
from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.domain.policies.field_resolver import resolve_field
from helpdesk_dispatch.domain.value_objects.enums import (
    AssignmentStrategy,
    AssignToType,
    ConditionField,
    DecisionSource,
)

logger = logging.getLogger(__name__)


class DispatchTicketUseCase:
    """Decides which group and agent own a newly created ticket.

    Sources are tried in order and the first one that produces a group or
    agent wins. A fault inside a source counts as "nothing produced" and
    dispatch moves on to the next one; ``execute`` itself never raises.
    """

    def __init__(
        self,
        rule_repo: RuleRepository,
        group_repo: GroupRepository,
        matcher: RuleMatcher,
        balancer: LoadBalancer,
        fallback: CategoryFallbackResolver,
        default_groups: DefaultGroups | None = None,
    ):
        self._rules = rule_repo
        self._groups = group_repo
        self._matcher = matcher
        self._balancer = balancer
        self._fallback = fallback
        self._defaults = default_groups or DefaultGroups()

    async def execute(
        self, ticket: TicketSnapshot, record_stats: bool = True
    ) -> AssignmentDecision:
        """Route a single ticket.

        Pipeline:
        1. Assignment rules (first match in priority order)
        2. Category default group, walking up the tree
        3. Issue-bucket default group
        Pass ``record_stats=False`` for a dry run that leaves rule usage
        counters untouched.
        """
        try:
            decision = await self._from_rules(ticket, record_stats)
            if decision is not None:
                return decision
        except Exception:
            logger.exception("Rule evaluation failed, trying category fallback")

        try:
            decision = await self._from_category(ticket)
            if decision is not None:
                return decision
        except Exception:
            logger.exception("Category fallback failed, trying default groups")

        try:
            decision = self._from_defaults(ticket)
            if decision is not None:
                return decision
        except Exception:
            logger.exception("Default group lookup failed")

        logger.warning("Ticket left unassigned: no routing source produced a group or agent")
        return AssignmentDecision(reason="No routing source matched")

    # ─── Step 1: rules ───────────────────────────────────────────────

    async def _from_rules(
        self, ticket: TicketSnapshot, record_stats: bool
    ) -> AssignmentDecision | None:
        rule = await self._matcher.match(ticket)
        if rule is None:
            logger.info("No matching auto-assignment rule found")
            return None

        decision = AssignmentDecision(
            assigned=True,
            source=DecisionSource.RULE,
            rule_id=rule.id,
            rule_name=rule.name,
            reason=f"Rule {rule.name!r} ({rule.assign_to_type.value})",
        )
        if rule.assign_to_id is None:
            logger.warning("Rule %r has no assignment target", rule.name)
        elif rule.assign_to_type == AssignToType.AGENT:
            decision.agent_id = rule.assign_to_id
        elif rule.assign_to_type == AssignToType.GROUP:
            decision.group_id = rule.assign_to_id
        elif rule.assign_to_type == AssignToType.ROUND_ROBIN:
            decision.group_id = rule.assign_to_id
            decision.agent_id = await self._balancer.select_agent(rule.assign_to_id)

        logger.info(
            "Auto-assignment applied: rule %r -> group=%s, agent=%s",
            rule.name, decision.group_id, decision.agent_id,
        )

        if record_stats:
            await self._record_usage(rule)
        return decision

    async def _record_usage(self, rule: AssignmentRule) -> None:
        try:
            await self._rules.increment_tickets_routed(rule.id)
        except Exception:
            logger.warning("Could not update usage counter of rule %s", rule.id, exc_info=True)

    # ─── Step 2: category tree ───────────────────────────────────────

    async def _from_category(self, ticket: TicketSnapshot) -> AssignmentDecision | None:
        category_ref = resolve_field(ConditionField.CATEGORY.value, ticket)
        route = await self._fallback.resolve_fallback(category_ref)
        if route is None:
            return None

        decision = AssignmentDecision(
            group_id=route.group_id,
            source=DecisionSource.CATEGORY_FALLBACK,
        )
        decision.agent_id, detail = await self._agent_for_strategy(route)
        decision.reason = (
            f"Category {route.category_id} default group "
            f"({route.strategy.value}, {route.hops} hop(s)){detail}"
        )
        logger.info(
            "Category fallback applied: %s -> group=%s, agent=%s",
            category_ref, decision.group_id, decision.agent_id,
        )
        return decision

    async def _agent_for_strategy(self, route: CategoryRoute) -> tuple[str | None, str]:
        if route.strategy == AssignmentStrategy.ROUND_ROBIN:
            return await self._balancer.select_agent(route.group_id), ""

        try:
            group = await self._groups.get_by_id(route.group_id)
        except Exception:
            logger.warning("Could not load group %s", route.group_id, exc_info=True)
            return None, ""

        if group is None:
            logger.warning("Category %s points at missing group %s", route.category_id, route.group_id)
            return None, ""
        if group.routes_to_supervisor():
            return group.supervisor_id, " → supervisor"
        return None, ""

    # ─── Step 3: hardcoded default ───────────────────────────────────

    def _from_defaults(self, ticket: TicketSnapshot) -> AssignmentDecision | None:
        bucket = self._defaults.bucket_for(ticket)
        group_id = self._defaults.group_for(ticket)
        if group_id is None:
            logger.warning("No default group configured for bucket %s", bucket.value)
            return None

        logger.info("Default group applied: bucket %s -> group=%s", bucket.value, group_id)
        return AssignmentDecision(
            group_id=group_id,
            source=DecisionSource.HARDCODED_DEFAULT,
            reason=f"Default group for {bucket.value} issues",
        )
