"""Port interface for per-agent ticket counts."""

from abc import ABC, abstractmethod
from datetime import datetime


class WorkloadRepository(ABC):
    @abstractmethod
    async def count_assigned_since(
        self, agent_ids: list[str], since: datetime
    ) -> dict[str, int]:
        """Tickets assigned to each agent and created at or after *since*.

        Agents without tickets may be absent from the result.
        """
        ...
