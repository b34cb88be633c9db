"""RuleMatcher — first active rule whose conditions all hold."""

from __future__ import annotations

import logging

from helpdesk_dispatch.application.ports.rule_repo import RuleRepository
from helpdesk_dispatch.domain.entities.rule import AssignmentRule
from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.domain.policies.rule_matching import first_match

logger = logging.getLogger(__name__)


class RuleMatcher:
    def __init__(self, rule_repo: RuleRepository):
        self._rules = rule_repo

    async def match(self, ticket: TicketSnapshot) -> AssignmentRule | None:
        """Return the matching rule, or None.

        A failing or empty rule source means "no rule applies"; it is
        logged and never raised.
        """
        try:
            rules = await self._rules.get_active_ordered()
        except Exception:
            logger.exception("Could not load auto-assignment rules")
            return None

        if not rules:
            logger.info("No active auto-assignment rules found")
            return None

        logger.debug("Checking %d auto-assignment rules", len(rules))
        return first_match(rules, ticket)
