"""Domain entities representing user notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

PRIORITY_LOW = "low"
PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"
PRIORITY_CRITICAL = "critical"

PRIORITIES = (PRIORITY_LOW, PRIORITY_NORMAL, PRIORITY_HIGH, PRIORITY_CRITICAL)

TYPE_SYSTEM_ALERT = "system_alert"
TYPE_APPOINTMENT_REMINDER = "appointment_reminder"
TYPE_PRESCRIPTION_ALERT = "prescription_alert"
TYPE_LAB_RESULT = "lab_result"
TYPE_PATIENT_UPDATE = "patient_update"
TYPE_CRITICAL_ALERT = "critical_alert"
TYPE_MAINTENANCE = "maintenance"


@dataclass
class NotificationDraft:
    """Fully resolved values for a notification that is about to be stored."""

    user_id: str
    type: str
    title: str
    message: str | None = None
    priority: str = PRIORITY_NORMAL
    data: dict[str, Any] = field(default_factory=dict)
    expires_at: datetime | None = None
    created_at: datetime | None = None


@dataclass
class NotificationTemplate:
    """Content shared by every notification of a role broadcast."""

    type: str
    title: str
    message: str | None = None
    priority: str = PRIORITY_NORMAL
    data: dict[str, Any] = field(default_factory=dict)
    expires_at: datetime | None = None
    created_at: datetime | None = None

    def for_user(self, user_id: str) -> NotificationDraft:
        """Return the draft addressed to ``user_id``."""

        return NotificationDraft(
            user_id=user_id,
            type=self.type,
            title=self.title,
            message=self.message,
            priority=self.priority,
            data=dict(self.data),
            expires_at=self.expires_at,
            created_at=self.created_at,
        )


@dataclass
class Notification:
    """Persisted notification record as returned by the store.

    ``data`` keeps the encoded text blob exactly as stored; decoding happens
    when the record is formatted for presentation.
    """

    id: str
    user_id: str
    type: str
    priority: str
    title: str
    message: str | None
    data: str | None
    is_read: bool
    read_at: datetime | None
    created_at: datetime
    expires_at: datetime | None = None


@dataclass(frozen=True)
class NotificationCounts:
    """Aggregate counters for the notifications of a single user."""

    total: int = 0
    unread: int = 0


__all__ = [
    "Notification",
    "NotificationCounts",
    "NotificationDraft",
    "NotificationTemplate",
    "PRIORITIES",
    "PRIORITY_CRITICAL",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_NORMAL",
    "TYPE_APPOINTMENT_REMINDER",
    "TYPE_CRITICAL_ALERT",
    "TYPE_LAB_RESULT",
    "TYPE_MAINTENANCE",
    "TYPE_PATIENT_UPDATE",
    "TYPE_PRESCRIPTION_ALERT",
    "TYPE_SYSTEM_ALERT",
]
