"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from notification_center.application.use_cases.notifications import NotificationManager
from notification_center.config import Settings, get_settings
from notification_center.domain import ExpirationPolicy
from notification_center.infrastructure.database import get_db
from notification_center.infrastructure.repositories import NotificationRepository


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Return the identifier of the calling user.

    Authentication happens upstream; the gateway forwards the resolved user in
    the ``X-User-Id`` header.
    """

    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user identity",
        )
    return x_user_id.strip()


def get_notification_manager(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> NotificationManager:
    """Build a manager bound to the request's database session."""

    return NotificationManager(
        NotificationRepository(db),
        policy=ExpirationPolicy.from_settings(settings),
        max_page_size=settings.notification_max_page_size,
    )


__all__ = ["get_current_user_id", "get_notification_manager"]
