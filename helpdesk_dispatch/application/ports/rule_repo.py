"""Port interface for assignment rule persistence."""

from abc import ABC, abstractmethod

from helpdesk_dispatch.domain.entities.rule import AssignmentRule


class RuleRepository(ABC):
    @abstractmethod
    async def get_active_ordered(self) -> list[AssignmentRule]:
        """Active rules sorted ascending by priority (lowest number first)."""
        ...

    @abstractmethod
    async def get_all(self) -> list[AssignmentRule]:
        ...

    @abstractmethod
    async def increment_tickets_routed(self, rule_id: str) -> None:
        ...
