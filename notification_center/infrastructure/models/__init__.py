"""ORM models used by the application infrastructure."""

from .recipient import RoleModel, UserModel
from .notification import NotificationModel

__all__ = [
    "NotificationModel",
    "RoleModel",
    "UserModel",
]
