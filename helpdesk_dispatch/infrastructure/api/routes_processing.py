"""Processing endpoints — ingest routing configuration from CSV."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException

from helpdesk_dispatch.config import settings
from helpdesk_dispatch.tools.seed_db import seed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/process", tags=["processing"])


@router.post("/ingest")
async def ingest_csv(drop: bool = False):
    """Load groups, members, categories and rules from the CSV directory.

    Default-group mapping is resolved at start-up; restart the service
    after renaming the fallback groups.
    """
    data_dir = Path(settings.csv_data_path)
    if not data_dir.exists():
        raise HTTPException(status_code=400, detail=f"Data directory not found: {data_dir}")

    try:
        counts = await seed(data_dir, drop=drop)
    except FileNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Error ingesting CSV data")
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "status": "ok",
        "message": "Routing configuration ingested successfully",
        "counts": counts,
        "drop": drop,
    }
