"""Last-resort routing: issue bucket → named group, resolved at start-up."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from helpdesk_dispatch.application.ports.group_repo import GroupRepository
from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.domain.policies.issue_bucket import (
    DEFAULT_SOFTWARE_ISSUE_TYPES,
    classify_issue,
)
from helpdesk_dispatch.domain.value_objects.enums import IssueBucket

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultGroups:
    groups: dict[IssueBucket, str] = field(default_factory=dict)
    software_types: frozenset[str] = frozenset(DEFAULT_SOFTWARE_ISSUE_TYPES)

    def bucket_for(self, ticket: TicketSnapshot) -> IssueBucket:
        return classify_issue(ticket, set(self.software_types))

    def group_for(self, ticket: TicketSnapshot) -> str | None:
        return self.groups.get(self.bucket_for(ticket))


async def resolve_default_groups(
    group_repo: GroupRepository,
    names: dict[IssueBucket, str],
    software_types: set[str],
) -> DefaultGroups:
    """Look up each bucket's group by name once.

    Unresolvable names are left out of the mapping (the bucket then
    routes nowhere) and reported as warnings.
    """
    groups: dict[IssueBucket, str] = {}
    for bucket, name in names.items():
        try:
            group_id = await group_repo.find_active_id_by_name(name)
        except Exception:
            logger.warning("Could not resolve default group %r", name, exc_info=True)
            continue
        if group_id is None:
            logger.warning("Default group %r for bucket %s not found", name, bucket.value)
            continue
        groups[bucket] = group_id

    logger.info(
        "Default groups: %s",
        {b.value: gid for b, gid in groups.items()} or "none",
    )
    return DefaultGroups(
        groups=groups,
        software_types=frozenset(t.strip().lower() for t in software_types if t.strip()),
    )
