"""Support group entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GroupMember:
    agent_id: str
    is_active: bool = True


@dataclass
class Group:
    id: str
    name: str
    members: list[GroupMember] = field(default_factory=list)
    supervisor_id: str | None = None
    assign_tasks_first: bool = False
    is_active: bool = True

    def active_member_ids(self) -> list[str]:
        """Active members in enumeration order."""
        return [m.agent_id for m in self.members if m.is_active]

    def routes_to_supervisor(self) -> bool:
        return self.assign_tasks_first and self.supervisor_id is not None
