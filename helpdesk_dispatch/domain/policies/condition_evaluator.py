"""Evaluate one rule condition against one ticket."""

from __future__ import annotations

from helpdesk_dispatch.domain.entities.rule import Condition
from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.domain.policies.field_resolver import resolve_field
from helpdesk_dispatch.domain.value_objects.enums import ConditionOperator


def normalize(value: object) -> str:
    return str(value).strip().lower()


def split_values(value: str | list[str]) -> list[str]:
    """Normalize an ``in`` operand given as a list or as 'a, b,c'."""
    if isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        items = str(value).split(",")
    return [normalize(v) for v in items if normalize(v)]


def evaluate(condition: Condition, ticket: TicketSnapshot) -> bool:
    """Return True when *ticket* satisfies *condition*.

    Missing ticket data and unknown operators never match.
    """
    raw = resolve_field(condition.field, ticket)
    if raw is None:
        return False

    ticket_value = normalize(raw)
    operator = normalize(condition.operator)

    if operator == ConditionOperator.IN.value:
        return ticket_value in split_values(condition.value)

    if isinstance(condition.value, (list, tuple)):
        expected = ",".join(normalize(v) for v in condition.value)
    else:
        expected = normalize(condition.value)

    if operator == ConditionOperator.EQUALS.value:
        return ticket_value == expected
    if operator == ConditionOperator.NOT_EQUALS.value:
        return ticket_value != expected
    if operator == ConditionOperator.CONTAINS.value:
        return expected in ticket_value
    return False


def matches_all(conditions: list[Condition], ticket: TicketSnapshot) -> bool:
    """AND across *conditions*. An empty list never matches."""
    if not conditions:
        return False
    return all(evaluate(c, ticket) for c in conditions)
