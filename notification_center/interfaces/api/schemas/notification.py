"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

Priority = Literal["low", "normal", "high", "critical"]


class NotificationCreate(BaseModel):
    """Payload used to create a notification for a single user."""

    user_id: str = Field(..., description="Recipient user identifier")
    type: str = Field(..., description="Notification type, e.g. lab_result")
    title: str
    message: str | None = None
    priority: Priority | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    expires_at: datetime | None = None


class NotificationCreated(BaseModel):
    notification_id: str


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[str] = Field(..., min_length=1, description="Notification identifiers")


class NotificationMarkReadResponse(BaseModel):
    updated: int
    requested: int | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    type: str
    priority: str
    title: str
    message: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime
    time_ago: str
    expires_at: datetime | None = None


class NotificationPage(BaseModel):
    """One page of notifications plus the user's aggregate counters."""

    notifications: list[NotificationRead]
    total: int
    unread: int
    limit: int
    offset: int
    has_more: bool


class NotificationTypeList(BaseModel):
    notifications: list[NotificationRead]
    type: str
    count: int


class UnreadStatus(BaseModel):
    has_unread: bool


class RoleBroadcastRequest(BaseModel):
    """Payload used to send a system notification to every member of a role."""

    role: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    message: str
    priority: Priority = "normal"


class RoleBroadcastResponse(BaseModel):
    created: int


__all__ = [
    "NotificationCreate",
    "NotificationCreated",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationPage",
    "NotificationRead",
    "NotificationTypeList",
    "RoleBroadcastRequest",
    "RoleBroadcastResponse",
    "UnreadStatus",
]
