"""Timezone helpers shared by the domain and the persistence layer.

Domain code always handles aware datetimes in the application timezone.
Database columns store the same wall-clock time without an offset.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from notification_center.config import get_settings

logger = logging.getLogger(__name__)

_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=16)
def resolve_timezone(name: str | None) -> tzinfo:
    """Turn an IANA name or a ``UTC+05:30`` style offset into a ``tzinfo``.

    Blank names mean UTC. Unknown names log a warning and fall back to UTC.
    """

    tz_name = (name or "").strip()
    if not tz_name or tz_name.upper() in {"UTC", "GMT", "Z"}:
        return timezone.utc

    match = _OFFSET_PATTERN.match(tz_name)
    if match:
        sign = -1 if match.group("sign") == "-" else 1
        offset = timedelta(
            hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
        )
        return timezone(sign * offset)

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone '%s'; falling back to UTC", tz_name)
        return timezone.utc


def get_app_timezone() -> tzinfo:
    """Return the timezone configured through ``APP_TIMEZONE``."""

    return resolve_timezone(get_settings().app_timezone)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current wall-clock time in the app timezone, as stored in the database."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach (naive input) or convert to (aware input) the app timezone."""

    if value is None:
        return None
    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return the storage form of ``value``: app timezone wall time, no ``tzinfo``."""

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)
