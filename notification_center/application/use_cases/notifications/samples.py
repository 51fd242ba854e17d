"""Illustrative notifications used to populate empty inboxes in demos."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from notification_center.domain.entities import (
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_NORMAL,
    TYPE_APPOINTMENT_REMINDER,
    TYPE_LAB_RESULT,
    TYPE_PATIENT_UPDATE,
    TYPE_PRESCRIPTION_ALERT,
    TYPE_SYSTEM_ALERT,
)


def sample_notifications(today: date) -> list[dict[str, Any]]:
    """Return the keyword arguments of the five demo notifications."""

    tomorrow = today + timedelta(days=1)
    return [
        {
            "notification_type": TYPE_LAB_RESULT,
            "priority": PRIORITY_HIGH,
            "title": "Critical Lab Result",
            "message": "Patient John Doe has critical lab values requiring immediate attention.",
            "data": {"patient_id": "sample-patient-1", "lab_id": "lab-001"},
        },
        {
            "notification_type": TYPE_APPOINTMENT_REMINDER,
            "priority": PRIORITY_NORMAL,
            "title": "Upcoming Appointments",
            "message": "You have 3 appointments scheduled for tomorrow.",
            "data": {"count": 3, "date": tomorrow.isoformat()},
        },
        {
            "notification_type": TYPE_SYSTEM_ALERT,
            "priority": PRIORITY_LOW,
            "title": "System Maintenance",
            "message": "Scheduled maintenance will occur this weekend from 2 AM to 4 AM.",
            "data": {"maintenance_window": "2025-12-15 02:00:00"},
        },
        {
            "notification_type": TYPE_PATIENT_UPDATE,
            "priority": PRIORITY_NORMAL,
            "title": "Patient Status Update",
            "message": "Patient Jane Smith has been discharged from the ER.",
            "data": {"patient_id": "sample-patient-2", "status": "discharged"},
        },
        {
            "notification_type": TYPE_PRESCRIPTION_ALERT,
            "priority": PRIORITY_HIGH,
            "title": "Prescription Renewal Required",
            "message": "5 patients have prescriptions expiring within the next 7 days.",
            "data": {"count": 5, "urgent": True},
        },
    ]


__all__ = ["sample_notifications"]
