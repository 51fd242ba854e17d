"""Endpoints exposing the notification inbox of the calling user."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from notification_center.application.use_cases.notifications import NotificationManager
from notification_center.application.use_cases.notifications.manager import DEFAULT_TYPE_PAGE_SIZE
from notification_center.config import Settings, get_settings
from notification_center.domain import ValidationError
from notification_center.interfaces.api.dependencies import (
    get_current_user_id,
    get_notification_manager,
)
from notification_center.interfaces.api.schemas import (
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

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)


def _bad_request(exc: ValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _page_size(limit: int | None, default: int, settings: Settings) -> int:
    maximum = settings.notification_max_page_size
    if limit is None:
        return min(default, maximum)
    if limit > maximum:
        raise HTTPException(
            status_code=422,
            detail=f"limit must be less than or equal to {maximum}",
        )
    return limit


@router.get("/", response_model=NotificationPage)
def list_notifications(
    unread_only: bool = False,
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_current_user_id),
    manager: NotificationManager = Depends(get_notification_manager),
    settings: Settings = Depends(get_settings),
) -> NotificationPage:
    """Return a page of the caller's notifications with total and unread counts."""

    page_size = _page_size(limit, settings.notification_default_page_size, settings)
    page = manager.get_user_notifications(
        user_id, unread_only=unread_only, limit=page_size, offset=offset
    )
    if page["total"] == 0 and settings.seed_sample_notifications:
        if manager.create_sample_notifications(user_id):
            page = manager.get_user_notifications(
                user_id, unread_only=unread_only, limit=page_size, offset=offset
            )
    return NotificationPage.model_validate(page)


@router.post("/", response_model=NotificationCreated, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    _: str = Depends(get_current_user_id),
    manager: NotificationManager = Depends(get_notification_manager),
) -> NotificationCreated:
    """Create a notification for ``payload.user_id``."""

    try:
        notification_id = manager.create_notification(
            user_id=payload.user_id,
            notification_type=payload.type,
            title=payload.title,
            message=payload.message,
            priority=payload.priority,
            data=payload.data,
            expires_at=payload.expires_at,
        )
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    return NotificationCreated(notification_id=notification_id)


@router.post("/read", response_model=NotificationMarkReadResponse)
def mark_notifications_as_read(
    payload: NotificationMarkReadRequest,
    user_id: str = Depends(get_current_user_id),
    manager: NotificationManager = Depends(get_notification_manager),
) -> NotificationMarkReadResponse:
    """Mark the listed notifications as read."""

    updated = manager.mark_as_read(user_id, payload.ids)
    return NotificationMarkReadResponse(updated=updated, requested=len(payload.ids))


@router.post("/read-all", response_model=NotificationMarkReadResponse)
def mark_all_notifications_as_read(
    user_id: str = Depends(get_current_user_id),
    manager: NotificationManager = Depends(get_notification_manager),
) -> NotificationMarkReadResponse:
    updated = manager.mark_all_as_read(user_id)
    return NotificationMarkReadResponse(updated=updated)


@router.get("/unread", response_model=UnreadStatus)
def read_unread_status(
    user_id: str = Depends(get_current_user_id),
    manager: NotificationManager = Depends(get_notification_manager),
) -> UnreadStatus:
    return UnreadStatus(has_unread=manager.has_unread_notifications(user_id))


@router.get("/types/{notification_type}", response_model=NotificationTypeList)
def list_notifications_by_type(
    notification_type: str,
    limit: int | None = Query(default=None, ge=1),
    user_id: str = Depends(get_current_user_id),
    manager: NotificationManager = Depends(get_notification_manager),
    settings: Settings = Depends(get_settings),
) -> NotificationTypeList:
    """Return the caller's most recent notifications of ``notification_type``."""

    notifications = manager.get_notifications_by_type(
        user_id,
        notification_type,
        limit=_page_size(limit, DEFAULT_TYPE_PAGE_SIZE, settings),
    )
    return NotificationTypeList(
        notifications=[NotificationRead.model_validate(item) for item in notifications],
        type=notification_type,
        count=len(notifications),
    )


@router.post("/broadcast", response_model=RoleBroadcastResponse)
def broadcast_to_role(
    payload: RoleBroadcastRequest,
    user_id: str = Depends(get_current_user_id),
    manager: NotificationManager = Depends(get_notification_manager),
) -> RoleBroadcastResponse:
    """Send a system notification to every active user holding ``payload.role``."""

    try:
        created = manager.create_system_notification_for_role(
            payload.role, payload.title, payload.message, priority=payload.priority
        )
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    logger.info("User %s broadcast '%s' to role %s", user_id, payload.title, payload.role)
    return RoleBroadcastResponse(created=created)


__all__ = ["router"]
