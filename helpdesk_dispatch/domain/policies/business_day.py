"""Business-day boundary for same-day workload counts."""

from __future__ import annotations

from datetime import datetime, tzinfo


def start_of_day(moment: datetime, tz: tzinfo) -> datetime:
    """Midnight of *moment*'s calendar day in *tz*, timezone-aware.

    Naive datetimes are taken to already be in *tz*.
    """
    if moment.tzinfo is None:
        local = moment.replace(tzinfo=tz)
    else:
        local = moment.astimezone(tz)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)
