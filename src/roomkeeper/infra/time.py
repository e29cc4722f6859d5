"""Time utilities for consistent timestamp handling."""

import logging
import os
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def hotel_timezone() -> ZoneInfo:
    """Timezone that defines the hotel's calendar day (HOTEL_TIMEZONE, default UTC)."""
    tz_name = os.environ.get("HOTEL_TIMEZONE", DEFAULT_TIMEZONE)
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid HOTEL_TIMEZONE %s, falling back to %s", tz_name, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


def hotel_today() -> date:
    """Return today's date in the hotel's local timezone."""
    return utc_now().astimezone(hotel_timezone()).date()
