"""Time utilities in the configured local zone (APP_TIMEZONE)."""

import os
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from typing import Optional


def local_tz(name: Optional[str] = None) -> tzinfo:
    """Return the configured zone, or the system zone when tzdata lacks it."""
    name = name or os.getenv("APP_TIMEZONE", "UTC")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return datetime.now().astimezone().tzinfo


def now_local() -> datetime:
    """Return timezone-aware datetime in the configured zone."""
    return datetime.now(local_tz())


def now_local_naive() -> datetime:
    """Return naive datetime representing local time in the configured zone."""
    return now_local().replace(tzinfo=None)

