"""Dispatch endpoints — route a freshly created ticket."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk_dispatch.adapters.persistence.database import get_session
from helpdesk_dispatch.application.use_cases.dispatch_ticket import DispatchTicketUseCase
from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.infrastructure.api.dependencies import get_dispatch_uc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dispatch", tags=["dispatch"])


# ── Request schema ──────────────────────────────────────────────────

class TicketSnapshotIn(BaseModel):
    category: str | None = None
    priority: str | None = None
    department: str | None = None
    user_type: str | None = None
    subject: str | None = None
    source: str | None = None
    issue_type: str | None = None
    ticket_type: str | None = None

    def to_domain(self) -> TicketSnapshot:
        return TicketSnapshot(**self.model_dump())


# ── Endpoints ───────────────────────────────────────────────────────

@router.post("")
async def dispatch_ticket(
    body: TicketSnapshotIn,
    dispatch_uc: DispatchTicketUseCase = Depends(get_dispatch_uc),
    session: AsyncSession = Depends(get_session),
):
    """Decide group/agent for a new ticket and record rule usage.

    Always answers 200: an unroutable ticket comes back unassigned.
    """
    decision = await dispatch_uc.execute(body.to_domain())
    try:
        await session.commit()
    except Exception:
        logger.warning("Could not commit rule usage statistics", exc_info=True)
        await session.rollback()
    return decision.to_dict()


@router.post("/preview")
async def preview_dispatch(
    body: TicketSnapshotIn,
    dispatch_uc: DispatchTicketUseCase = Depends(get_dispatch_uc),
):
    """Dry run: same decision, no usage counters touched."""
    decision = await dispatch_uc.execute(body.to_domain(), record_stats=False)
    return decision.to_dict()
