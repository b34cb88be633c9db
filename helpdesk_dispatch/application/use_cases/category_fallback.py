"""CategoryFallbackResolver — default group from the category tree."""

from __future__ import annotations

import logging

from helpdesk_dispatch.application.ports.category_repo import CategoryRepository
from helpdesk_dispatch.domain.entities.category import Category
from helpdesk_dispatch.domain.entities.decision import CategoryRoute

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 5


class CategoryFallbackResolver:
    def __init__(self, category_repo: CategoryRepository, max_depth: int = DEFAULT_MAX_DEPTH):
        self._categories = category_repo
        self._max_depth = max_depth

    async def _lookup_start(self, category_ref: str) -> Category | None:
        # Tickets carry either the category id or its display name
        category = await self._categories.get_by_id(category_ref)
        if category is None:
            category = await self._categories.get_by_name(category_ref)
        return category

    async def resolve_fallback(self, category_ref: str | None) -> CategoryRoute | None:
        """Walk from *category_ref* towards the root for a default group.

        At most ``max_depth`` categories are inspected, which also bounds
        cyclic or broken parent chains. Returns None when the chain runs
        out; lookup failures are logged and also yield None.
        """
        if not category_ref:
            return None

        try:
            current = await self._lookup_start(category_ref)
            for hop in range(self._max_depth):
                if current is None:
                    return None
                if current.has_default_group():
                    logger.info(
                        "Category %s: default group %s via %s (%d hop(s), strategy=%s)",
                        category_ref, current.default_group_id, current.id,
                        hop, current.assignment_strategy.value,
                    )
                    return CategoryRoute(
                        category_id=current.id,
                        group_id=current.default_group_id,
                        strategy=current.assignment_strategy,
                        hops=hop,
                    )
                if current.parent_id is None or hop == self._max_depth - 1:
                    break
                current = await self._categories.get_by_id(current.parent_id)
        except Exception:
            logger.exception("Error walking category chain from %s", category_ref)
            return None

        logger.warning(
            "Category %s: no default group within %d level(s)",
            category_ref, self._max_depth,
        )
        return None
