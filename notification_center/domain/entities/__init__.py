"""Domain entities exposed by the application."""

from .notification import (
    PRIORITIES,
    PRIORITY_CRITICAL,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_NORMAL,
    TYPE_APPOINTMENT_REMINDER,
    TYPE_CRITICAL_ALERT,
    TYPE_LAB_RESULT,
    TYPE_MAINTENANCE,
    TYPE_PATIENT_UPDATE,
    TYPE_PRESCRIPTION_ALERT,
    TYPE_SYSTEM_ALERT,
    Notification,
    NotificationCounts,
    NotificationDraft,
    NotificationTemplate,
)

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
