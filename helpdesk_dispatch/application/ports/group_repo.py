"""Port interface for group and membership persistence."""

from abc import ABC, abstractmethod

from helpdesk_dispatch.domain.entities.group import Group


class GroupRepository(ABC):
    @abstractmethod
    async def get_by_id(self, group_id: str) -> Group | None:
        ...

    @abstractmethod
    async def get_active_member_ids(self, group_id: str) -> list[str]:
        """Active members of the group, in stable enumeration order."""
        ...

    @abstractmethod
    async def find_active_id_by_name(self, name: str) -> str | None:
        """Case-insensitive substring lookup among active groups."""
        ...
