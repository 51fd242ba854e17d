"""Persistence capability consumed by the notification manager."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .entities import (
    Notification,
    NotificationCounts,
    NotificationDraft,
    NotificationTemplate,
)


@runtime_checkable
class NotificationStore(Protocol):
    """Storage operations required by :class:`NotificationManager`.

    Implementations assign ``id`` and ``created_at`` on insert, return records
    newest first and raise :class:`~notification_center.domain.exceptions.StoreError`
    when the underlying storage fails. Reads only consider notifications that
    have not expired yet.
    """

    def create_table_if_not_exists(self) -> None:
        """Make sure the backing storage exists."""

    def create(self, draft: NotificationDraft) -> str:
        """Persist ``draft`` and return the identifier assigned to it."""

    def create_batch(self, drafts: Sequence[NotificationDraft]) -> list[str]:
        """Persist every draft and return the identifiers in input order."""

    def create_for_role(self, role: str, template: NotificationTemplate) -> int:
        """Create one notification per active user holding ``role``."""

    def get_for_user(
        self, user_id: str, *, unread_only: bool, limit: int, offset: int
    ) -> Sequence[Notification]:
        """Return one page of the user's notifications."""

    def get_by_type(
        self, user_id: str, notification_type: str, *, limit: int
    ) -> Sequence[Notification]:
        """Return the user's most recent notifications of ``notification_type``."""

    def get_counts(self, user_id: str) -> NotificationCounts:
        """Return the total and unread counters for ``user_id``."""

    def mark_as_read(self, user_id: str, notification_ids: Sequence[str]) -> int:
        """Mark the user's unread notifications in ``notification_ids`` as read."""

    def mark_all_as_read(self, user_id: str) -> int:
        """Mark every unread notification of ``user_id`` as read."""

    def has_notifications(self, user_id: str) -> bool:
        """Return ``True`` when the user owns at least one notification."""

    def delete_expired(self) -> int:
        """Delete every notification whose expiration is in the past."""


__all__ = ["NotificationStore"]
