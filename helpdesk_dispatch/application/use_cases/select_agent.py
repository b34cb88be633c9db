"""LoadBalancer — least-loaded agent among a group's active members.

"Round robin" in helpdesk settings means least-loaded-today, not strict
rotation. Counts are read and then acted on without any reservation, so
two tickets dispatched at the same instant can both land on the same
agent. Balance is eventual, not strict.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, tzinfo, timezone

from helpdesk_dispatch.application.ports.group_repo import GroupRepository
from helpdesk_dispatch.application.ports.workload_repo import WorkloadRepository
from helpdesk_dispatch.domain.policies.business_day import start_of_day
from helpdesk_dispatch.domain.policies.least_loaded import pick_least_loaded

logger = logging.getLogger(__name__)


class LoadBalancer:
    def __init__(
        self,
        group_repo: GroupRepository,
        workload_repo: WorkloadRepository,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] | None = None,
    ):
        self._groups = group_repo
        self._workload = workload_repo
        self._tz = tz
        self._clock = clock or (lambda: datetime.now(self._tz))

    async def today_counts(self, group_id: str) -> tuple[list[str], dict[str, int]]:
        """Active members and their same-day counts (zero-filled)."""
        members = await self._groups.get_active_member_ids(group_id)
        if not members:
            return [], {}
        since = start_of_day(self._clock(), self._tz)
        raw = await self._workload.count_assigned_since(members, since)
        counts = {agent_id: 0 for agent_id in members}
        for agent_id, count in raw.items():
            if agent_id in counts:
                counts[agent_id] = count
        return members, counts

    async def select_agent(self, group_id: str | None) -> str | None:
        """Pick the member with the fewest tickets today, or None."""
        if not group_id:
            return None
        try:
            members, counts = await self.today_counts(group_id)
            if not members:
                logger.warning("Group %s has no active members", group_id)
                return None
            chosen = pick_least_loaded(members, counts)
        except Exception:
            logger.exception("Error in least-loaded selection for group %s", group_id)
            return None

        logger.info(
            "Group %s: picked agent %s (%d tickets today)",
            group_id, chosen, counts[chosen],
        )
        return chosen
