"""Outcome of a single dispatch call."""

from dataclasses import dataclass

from helpdesk_dispatch.domain.value_objects.enums import AssignmentStrategy, DecisionSource


@dataclass
class AssignmentDecision:
    """Where a ticket should go.

    ``assigned`` is True only when an assignment rule fired. Fallback
    sources still fill ``group_id`` (and sometimes ``agent_id``) but report
    ``assigned=False`` so callers can tell rule routing from defaults.
    """

    assigned: bool = False
    group_id: str | None = None
    agent_id: str | None = None
    source: DecisionSource | None = None
    rule_id: str | None = None
    rule_name: str | None = None
    reason: str | None = None

    def is_routed(self) -> bool:
        return self.group_id is not None or self.agent_id is not None

    def to_dict(self) -> dict:
        return {
            "assigned": self.assigned,
            "group_id": self.group_id,
            "agent_id": self.agent_id,
            "source": self.source.value if self.source else None,
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class CategoryRoute:
    """Default routing found on a category (or one of its ancestors)."""

    category_id: str
    group_id: str
    strategy: AssignmentStrategy
    hops: int
