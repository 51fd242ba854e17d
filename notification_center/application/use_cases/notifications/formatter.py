"""Presentation helpers turning stored notifications into client views."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from notification_center.domain.entities import Notification
from notification_center.domain.payload import decode_payload
from notification_center.utils import ensure_app_timezone, now_in_app_timezone

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY


def _pluralize(value: int, unit: str) -> str:
    suffix = "s" if value > 1 else ""
    return f"{value} {unit}{suffix} ago"


def time_ago(created_at: datetime, *, now: datetime | None = None) -> str:
    """Return a human friendly age for ``created_at``.

    Ages under a week are relative ("3 hours ago"); older notifications show
    the absolute date, e.g. ``"Dec 15, 2025"``.
    """

    created = ensure_app_timezone(created_at)
    reference = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    age = int(reference.timestamp() - created.timestamp())

    if age < _MINUTE:
        return "Just now"
    if age < _HOUR:
        return _pluralize(age // _MINUTE, "minute")
    if age < _DAY:
        return _pluralize(age // _HOUR, "hour")
    if age < _WEEK:
        return _pluralize(age // _DAY, "day")
    return f"{created:%b} {created.day}, {created.year}"


def _iso_or_none(value: datetime | None) -> str | None:
    localized = ensure_app_timezone(value)
    return localized.isoformat() if localized else None


def format_notification(
    notification: Notification, *, now: datetime | None = None
) -> dict[str, Any]:
    """Return the JSON-serializable view of ``notification``."""

    return {
        "id": notification.id,
        "type": notification.type,
        "priority": notification.priority,
        "title": notification.title,
        "message": notification.message,
        "data": decode_payload(notification.data),
        "is_read": bool(notification.is_read),
        "read_at": _iso_or_none(notification.read_at),
        "created_at": _iso_or_none(notification.created_at),
        "time_ago": time_ago(notification.created_at, now=now),
        "expires_at": _iso_or_none(notification.expires_at),
    }


__all__ = ["format_notification", "time_ago"]
