"""First matching rule in precedence order."""

from __future__ import annotations

import logging

from helpdesk_dispatch.domain.entities.rule import AssignmentRule
from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.domain.policies.condition_evaluator import matches_all

logger = logging.getLogger(__name__)


def first_match(
    rules: list[AssignmentRule],
    ticket: TicketSnapshot,
) -> AssignmentRule | None:
    """Walk *rules* in the given order and return the first full match.

    The caller supplies rules already sorted ascending by priority. No
    scoring: once a rule matches, later rules are never looked at.
    Inactive rules and rules without conditions are skipped.
    """
    for rule in rules:
        if not rule.is_active:
            continue
        if not rule.has_conditions():
            logger.debug("Rule %r has no conditions, skipping", rule.name)
            continue
        if matches_all(rule.conditions, ticket):
            logger.debug("Rule %r (priority %d): matched", rule.name, rule.priority)
            return rule
        logger.debug("Rule %r (priority %d): no match", rule.name, rule.priority)
    return None
