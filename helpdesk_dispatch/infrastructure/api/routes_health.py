"""Health check endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk_dispatch.adapters.persistence.database import get_session

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request, session: AsyncSession = Depends(get_session)):
    """Check API and database connectivity."""
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"

    defaults = getattr(request.app.state, "default_groups", None)
    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "default_groups": {b.value: gid for b, gid in defaults.groups.items()} if defaults else {},
        "service": "Helpdesk Dispatch Engine",
    }
