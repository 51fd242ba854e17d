"""Retention windows applied to notifications by type."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from .entities import (
    TYPE_APPOINTMENT_REMINDER,
    TYPE_CRITICAL_ALERT,
    TYPE_LAB_RESULT,
    TYPE_MAINTENANCE,
    TYPE_PATIENT_UPDATE,
    TYPE_PRESCRIPTION_ALERT,
    TYPE_SYSTEM_ALERT,
)

if TYPE_CHECKING:  # pragma: no cover
    from notification_center.config import Settings

DEFAULT_EXPIRATION_DAYS: Final[int] = 30

DEFAULT_EXPIRATION_TABLE: Final[Mapping[str, int]] = MappingProxyType(
    {
        TYPE_SYSTEM_ALERT: 30,
        TYPE_APPOINTMENT_REMINDER: 7,
        TYPE_PRESCRIPTION_ALERT: 14,
        TYPE_LAB_RESULT: 90,
        TYPE_PATIENT_UPDATE: 30,
        TYPE_CRITICAL_ALERT: 7,
        TYPE_MAINTENANCE: 7,
    }
)


@dataclass(frozen=True)
class ExpirationPolicy:
    """Map a notification type to the number of days it is retained.

    Types missing from ``days_by_type`` fall back to ``default_days``, so new
    producers work without touching the table.
    """

    days_by_type: Mapping[str, int] = field(
        default_factory=lambda: DEFAULT_EXPIRATION_TABLE
    )
    default_days: int = DEFAULT_EXPIRATION_DAYS

    def __post_init__(self) -> None:
        if self.default_days <= 0:
            raise ValueError("default_days must be positive")
        for notification_type, days in self.days_by_type.items():
            if days <= 0:
                raise ValueError(
                    f"Retention for '{notification_type}' must be a positive number of days"
                )
        object.__setattr__(
            self, "days_by_type", MappingProxyType(dict(self.days_by_type))
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ExpirationPolicy":
        """Return the default table with the configured overrides applied."""

        table = dict(DEFAULT_EXPIRATION_TABLE)
        table.update(settings.notification_expiration_days)
        return cls(
            days_by_type=table,
            default_days=settings.notification_default_expiration_days,
        )

    def days_for(self, notification_type: str) -> int:
        return self.days_by_type.get(notification_type, self.default_days)

    def expires_at(self, notification_type: str, created_at: datetime) -> datetime:
        """Return the expiration instant for a notification created at ``created_at``."""

        return created_at + timedelta(days=self.days_for(notification_type))


__all__ = ["DEFAULT_EXPIRATION_DAYS", "DEFAULT_EXPIRATION_TABLE", "ExpirationPolicy"]
