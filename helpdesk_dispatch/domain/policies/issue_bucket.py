"""Coarse issue-type buckets for last-resort routing."""

from __future__ import annotations

from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.domain.value_objects.enums import IssueBucket

DEFAULT_SOFTWARE_ISSUE_TYPES = ("software", "application")


def _stripped(value: str | None) -> str:
    return (value or "").strip()


def classify_issue(ticket: TicketSnapshot, software_types: set[str]) -> IssueBucket:
    """Software issues go to the software bucket, everything else
    (hardware, network, other, unknown) to the endpoint bucket."""
    issue = (_stripped(ticket.issue_type) or _stripped(ticket.category)).lower()
    if issue and issue in software_types:
        return IssueBucket.SOFTWARE
    return IssueBucket.ENDPOINT


def match_group_name(name: str, candidates: dict[str, str]) -> str | None:
    """Resolve a configured group name against ``{group_name: group_id}``.

    Case-insensitive; exact match first, then the first substring match
    in name order (so "Endpoint" finds "Endpoint Support L1").
    """
    wanted = name.strip().lower()
    if not wanted:
        return None
    ordered = sorted(candidates.items())
    for known, gid in ordered:
        if known.strip().lower() == wanted:
            return gid
    for known, gid in ordered:
        if wanted in known.lower():
            return gid
    return None
