"""Category tree node."""

from dataclasses import dataclass

from helpdesk_dispatch.domain.value_objects.enums import AssignmentStrategy


@dataclass
class Category:
    id: str
    name: str
    parent_id: str | None = None
    default_group_id: str | None = None
    assignment_strategy: AssignmentStrategy = AssignmentStrategy.MANUAL

    def has_default_group(self) -> bool:
        return bool(self.default_group_id and self.default_group_id.strip())
