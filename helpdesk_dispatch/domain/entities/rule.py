"""Assignment rule entities."""

from dataclasses import dataclass, field

from helpdesk_dispatch.domain.value_objects.enums import AssignToType


@dataclass(frozen=True)
class Condition:
    # Kept as raw strings: unknown fields/operators must evaluate to False
    # instead of failing to load.
    field: str
    operator: str
    value: str | list[str]


@dataclass
class AssignmentRule:
    id: str
    name: str
    assign_to_type: AssignToType
    assign_to_id: str | None
    priority: int
    conditions: list[Condition] = field(default_factory=list)
    is_active: bool = True
    tickets_routed: int = 0

    def has_conditions(self) -> bool:
        return bool(self.conditions)
