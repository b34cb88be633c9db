"""Helpdesk Dispatch Engine — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from helpdesk_dispatch.adapters.persistence.database import async_session_factory, engine
from helpdesk_dispatch.adapters.persistence.repositories import SqlGroupRepository
from helpdesk_dispatch.application.use_cases.default_groups import (
    DefaultGroups,
    resolve_default_groups,
)
from helpdesk_dispatch.config import settings
from helpdesk_dispatch.domain.value_objects.enums import IssueBucket
from helpdesk_dispatch.infrastructure.api.routes_dispatch import router as dispatch_router
from helpdesk_dispatch.infrastructure.api.routes_health import router as health_router
from helpdesk_dispatch.infrastructure.api.routes_processing import router as processing_router
from helpdesk_dispatch.infrastructure.api.routes_rules import router as rules_router

logger = logging.getLogger(__name__)


async def _load_default_groups() -> DefaultGroups:
    async with async_session_factory() as session:
        return await resolve_default_groups(
            SqlGroupRepository(session),
            names={
                IssueBucket.SOFTWARE: settings.software_group_name,
                IssueBucket.ENDPOINT: settings.endpoint_group_name,
            },
            software_types=settings.software_types(),
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
        app.state.default_groups = await _load_default_groups()
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
        app.state.default_groups = DefaultGroups(
            software_types=frozenset(settings.software_types())
        )
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Helpdesk Dispatch Engine",
        description="Rule-based ticket routing with least-loaded agent selection",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(dispatch_router, prefix="/api")
    app.include_router(rules_router, prefix="/api")
    app.include_router(processing_router, prefix="/api")

    return app


app = create_app()
