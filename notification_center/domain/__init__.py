"""Domain layer: entities, policies and the storage contract."""

from .exceptions import NotificationError, StoreError, ValidationError
from .expiration import ExpirationPolicy
from .store import NotificationStore

__all__ = [
    "ExpirationPolicy",
    "NotificationError",
    "NotificationStore",
    "StoreError",
    "ValidationError",
]
