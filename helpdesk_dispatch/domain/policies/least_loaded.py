"""LeastLoadedPolicy — pick the group member with the fewest tickets today."""

from __future__ import annotations


def pick_least_loaded(member_ids: list[str], counts: dict[str, int]) -> str:
    """Return the member with the minimum same-day ticket count.

    1. Every member starts at zero, so members missing from *counts* are
       eligible (and preferred).
    2. Ties go to the member enumerated first.

    Counts for ids outside *member_ids* are ignored.

    Raises:
        ValueError: if member_ids is empty.
    """
    if not member_ids:
        raise ValueError("Cannot pick from an empty member list")

    chosen = member_ids[0]
    chosen_count = counts.get(chosen, 0)
    for agent_id in member_ids[1:]:
        count = counts.get(agent_id, 0)
        # Strict comparison keeps the first-seen member on ties
        if count < chosen_count:
            chosen, chosen_count = agent_id, count
    return chosen
