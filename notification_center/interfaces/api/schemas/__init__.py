from .notification import (
    NotificationCreate,
    NotificationCreated,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationPage,
    NotificationRead,
    NotificationTypeList,
    RoleBroadcastRequest,
    RoleBroadcastResponse,
    UnreadStatus,
)

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
