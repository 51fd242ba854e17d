"""Errors raised by the notification core."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for notification failures."""


class ValidationError(NotificationError, ValueError):
    """Input rejected before anything is written to the store."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class StoreError(NotificationError, RuntimeError):
    """The persistence layer failed to complete an operation."""


__all__ = ["NotificationError", "StoreError", "ValidationError"]
