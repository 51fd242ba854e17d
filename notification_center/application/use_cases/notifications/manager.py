"""Notification lifecycle orchestration on top of a :class:`NotificationStore`."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from notification_center.domain.entities import (
    PRIORITIES,
    PRIORITY_CRITICAL,
    PRIORITY_HIGH,
    PRIORITY_NORMAL,
    TYPE_APPOINTMENT_REMINDER,
    TYPE_CRITICAL_ALERT,
    TYPE_LAB_RESULT,
    TYPE_PRESCRIPTION_ALERT,
    TYPE_SYSTEM_ALERT,
    NotificationDraft,
    NotificationTemplate,
)
from notification_center.domain.exceptions import ValidationError
from notification_center.domain.expiration import ExpirationPolicy
from notification_center.domain.store import NotificationStore
from notification_center.utils import ensure_app_timezone, now_in_app_timezone

from .formatter import format_notification
from .samples import sample_notifications

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
DEFAULT_TYPE_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _require_text(value: str | None, field: str, label: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required", field=field)
    return value


class NotificationManager:
    """Create, list, read and expire user notifications.

    Every public operation validates its input, derives defaults, performs the
    store calls and formats the result. Store failures propagate unchanged.
    The manager keeps no state between calls besides its collaborators.
    """

    def __init__(
        self,
        store: NotificationStore,
        *,
        policy: ExpirationPolicy | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self.store = store
        self.policy = policy or ExpirationPolicy()
        self._clock = clock
        self.max_page_size = max_page_size

    def ensure_storage(self) -> None:
        """Create the backing storage when it does not exist yet."""

        self.store.create_table_if_not_exists()

    def _now(self) -> datetime:
        return ensure_app_timezone(self._clock())

    # Creation

    def _build_draft(
        self,
        *,
        user_id: str,
        notification_type: str,
        title: str,
        message: str | None = None,
        priority: str | None = None,
        data: Mapping[str, Any] | None = None,
        expires_at: datetime | None = None,
    ) -> NotificationDraft:
        _require_text(user_id, "user_id", "User ID")
        _require_text(notification_type, "type", "Notification type")
        _require_text(title, "title", "Notification title")
        priority = self._resolve_priority(priority)

        now = self._now()
        if expires_at is None:
            expires_at = self.policy.expires_at(notification_type, now)
        else:
            expires_at = ensure_app_timezone(expires_at)
            if expires_at < now:
                raise ValidationError(
                    "Expiration must not be earlier than the creation time",
                    field="expires_at",
                )

        return NotificationDraft(
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            priority=priority,
            data=dict(data or {}),
            expires_at=expires_at,
            created_at=now,
        )

    @staticmethod
    def _resolve_priority(priority: str | None) -> str:
        if priority is None:
            return PRIORITY_NORMAL
        if priority not in PRIORITIES:
            raise ValidationError(
                f"Priority must be one of: {', '.join(PRIORITIES)}", field="priority"
            )
        return priority

    def create_notification(
        self,
        *,
        user_id: str,
        notification_type: str,
        title: str,
        message: str | None = None,
        priority: str | None = None,
        data: Mapping[str, Any] | None = None,
        expires_at: datetime | None = None,
    ) -> str:
        """Validate, complete and persist a single notification.

        ``priority`` defaults to ``normal`` and ``expires_at`` to the retention
        window of ``notification_type``. Returns the identifier assigned by
        the store. Nothing is written when validation fails.
        """

        draft = self._build_draft(
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
            priority=priority,
            data=data,
            expires_at=expires_at,
        )
        notification_id = self.store.create(draft)
        logger.info(
            "Created %s notification %s for user %s",
            draft.type,
            notification_id,
            draft.user_id,
        )
        return notification_id

    def create_critical_notification(
        self,
        user_id: str,
        title: str,
        message: str,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        return self.create_notification(
            user_id=user_id,
            notification_type=TYPE_CRITICAL_ALERT,
            priority=PRIORITY_CRITICAL,
            title=title,
            message=message,
            data=data,
        )

    def create_lab_result_notification(
        self,
        user_id: str,
        patient_id: str,
        *,
        is_critical: bool = False,
        lab_id: str | None = None,
        test_name: str | None = None,
        message: str | None = None,
    ) -> str:
        """Notify ``user_id`` that lab results for ``patient_id`` are ready."""

        return self.create_notification(
            user_id=user_id,
            notification_type=TYPE_LAB_RESULT,
            priority=PRIORITY_HIGH if is_critical else PRIORITY_NORMAL,
            title="Critical Lab Result" if is_critical else "New Lab Result Available",
            message=message if message is not None else "Lab results are ready for review",
            data={"patient_id": patient_id, "lab_id": lab_id, "test_name": test_name},
        )

    def create_appointment_reminder(
        self,
        user_id: str,
        *,
        appointment_id: str | None = None,
        appointment_time: str | None = None,
        patient_name: str | None = None,
        message: str | None = None,
    ) -> str:
        return self.create_notification(
            user_id=user_id,
            notification_type=TYPE_APPOINTMENT_REMINDER,
            priority=PRIORITY_NORMAL,
            title="Upcoming Appointment",
            message=message if message is not None else "You have an upcoming appointment",
            data={
                "appointment_id": appointment_id,
                "appointment_time": appointment_time,
                "patient_name": patient_name,
            },
        )

    def create_prescription_alert(
        self,
        user_id: str,
        message: str,
        *,
        is_urgent: bool = False,
        title: str | None = None,
        prescription_ids: Iterable[str] | None = None,
        patient_count: int = 0,
    ) -> str:
        """Ask ``user_id`` to act on one or more prescriptions."""

        return self.create_notification(
            user_id=user_id,
            notification_type=TYPE_PRESCRIPTION_ALERT,
            priority=PRIORITY_HIGH if is_urgent else PRIORITY_NORMAL,
            title=title or "Prescription Action Required",
            message=message,
            data={
                "prescription_ids": list(prescription_ids or []),
                "patient_count": patient_count,
            },
        )

    def create_system_notification_for_role(
        self,
        role: str,
        title: str,
        message: str,
        priority: str = PRIORITY_NORMAL,
    ) -> int:
        """Broadcast a ``system_alert`` to every user currently holding ``role``.

        Returns the number of notifications the store actually created.
        """

        _require_text(role, "role", "Role")
        _require_text(title, "title", "Notification title")
        priority = self._resolve_priority(priority)
        now = self._now()
        template = NotificationTemplate(
            type=TYPE_SYSTEM_ALERT,
            title=title,
            message=message,
            priority=priority,
            expires_at=self.policy.expires_at(TYPE_SYSTEM_ALERT, now),
            created_at=now,
        )
        created = self.store.create_for_role(role, template)
        logger.info("Broadcast system notification to %s user(s) with role %s", created, role)
        return created

    # Retrieval

    def _clamp_limit(self, limit: int) -> int:
        clamped = min(max(limit, 1), self.max_page_size)
        if clamped != limit:
            logger.debug("Clamped notification page size from %s to %s", limit, clamped)
        return clamped

    def get_user_notifications(
        self,
        user_id: str,
        *,
        unread_only: bool = False,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> dict[str, Any]:
        """Return one page of notifications together with the user's counters.

        ``limit`` is clamped into ``[1, max_page_size]`` and ``offset`` to zero
        or more. The page and the counters come from two separate store reads
        and may disagree under concurrent writes.
        """

        limit = self._clamp_limit(limit)
        offset = max(offset, 0)

        records = self.store.get_for_user(
            user_id, unread_only=unread_only, limit=limit, offset=offset
        )
        counts = self.store.get_counts(user_id)
        now = self._now()
        return {
            "notifications": [format_notification(record, now=now) for record in records],
            "total": counts.total,
            "unread": counts.unread,
            "limit": limit,
            "offset": offset,
            "has_more": (offset + limit) < counts.total,
        }

    def get_notifications_by_type(
        self,
        user_id: str,
        notification_type: str,
        *,
        limit: int = DEFAULT_TYPE_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        records = self.store.get_by_type(
            user_id, notification_type, limit=self._clamp_limit(limit)
        )
        now = self._now()
        return [format_notification(record, now=now) for record in records]

    def has_unread_notifications(self, user_id: str) -> bool:
        return self.store.get_counts(user_id).unread > 0

    # Read state

    def mark_as_read(self, user_id: str, notification_ids: Iterable[str] | str) -> int:
        """Mark the listed notifications as read and return how many changed.

        Identifiers owned by other users or already read are ignored, which
        makes repeated calls harmless. A single identifier may be passed as a
        plain string.
        """

        if isinstance(notification_ids, str):
            notification_ids = [notification_ids]
        unique_ids = list(dict.fromkeys(i for i in notification_ids if i))
        if not unique_ids:
            return 0
        updated = self.store.mark_as_read(user_id, unique_ids)
        logger.info(
            "Marked %s of %s notification(s) as read for user %s",
            updated,
            len(unique_ids),
            user_id,
        )
        return updated

    def mark_all_as_read(self, user_id: str) -> int:
        updated = self.store.mark_all_as_read(user_id)
        logger.info("Marked %s notification(s) as read for user %s", updated, user_id)
        return updated

    # Maintenance

    def cleanup_expired_notifications(self) -> int:
        """Delete every expired notification regardless of owner or read state."""

        deleted = self.store.delete_expired()
        logger.info("Deleted %s expired notification(s)", deleted)
        return deleted

    def create_sample_notifications(self, user_id: str) -> int:
        """Seed the demo notifications for a user that has none.

        The existence check and the batch insert are separate store calls, so
        concurrent calls for the same new user can both seed.
        """

        if self.store.has_notifications(user_id):
            return 0

        today = self._now().date()
        drafts = [
            self._build_draft(user_id=user_id, **sample)
            for sample in sample_notifications(today)
        ]
        created = self.store.create_batch(drafts)
        logger.info("Seeded %s sample notification(s) for user %s", len(created), user_id)
        return len(created)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_TYPE_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "NotificationManager",
]
