"""Clock and formatting helpers bound to the ``APP_TIMEZONE`` setting."""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from notification_service.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the zone notifications are stamped and displayed in.

    Unknown zone names fall back to UTC.
    """

    tz_name = (get_settings().app_timezone or "").strip()
    if not tz_name:
        return timezone.utc
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown APP_TIMEZONE %r, using UTC", tz_name)
        return timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default for ``created_at``/``updated_at`` (stored without offset)."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the app zone; naive values are taken as local."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    # SQLite DATETIME columns drop the offset, so rows hold app-local wall time.
    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized else None


def format_app_date(value: datetime | None) -> str | None:
    """``YYYY-MM-DD`` of ``value`` in the app zone."""

    localized = ensure_app_timezone(value)
    return localized.date().isoformat() if localized else None


def format_app_time(value: datetime | None) -> str | None:
    """``HH:MM:SS`` of ``value`` in the app zone."""

    localized = ensure_app_timezone(value)
    return localized.strftime("%H:%M:%S") if localized else None
