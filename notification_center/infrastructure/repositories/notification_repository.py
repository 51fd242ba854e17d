"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import case, false, func, or_, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from notification_center.domain.entities import (
    Notification,
    NotificationCounts,
    NotificationDraft,
    NotificationTemplate,
)
from notification_center.domain.exceptions import StoreError
from notification_center.domain.payload import encode_payload
from notification_center.infrastructure.database import Base
from notification_center.infrastructure.models import (
    NotificationModel,
    RoleModel,
    UserModel,
)
from notification_center.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)


class NotificationRepository:
    """SQLAlchemy implementation of :class:`NotificationStore`.

    Writes commit immediately. Any ``SQLAlchemyError`` rolls the session back
    and is re-raised as :class:`StoreError`.
    """

    def __init__(
        self,
        session: Session,
        *,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self.session = session
        self._clock = clock

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Notification store failed to %s", operation)
            raise StoreError(f"Failed to {operation}") from exc

    def _now(self) -> datetime:
        return ensure_app_naive_datetime(self._clock())

    def _live(self, query: Query, now: datetime) -> Query:
        return query.filter(
            or_(NotificationModel.expires_at.is_(None), NotificationModel.expires_at > now)
        )

    def create_table_if_not_exists(self) -> None:
        with self._guard("create notification tables"):
            Base.metadata.create_all(bind=self.session.get_bind(), checkfirst=True)

    def create(self, draft: NotificationDraft) -> str:
        model = self._draft_to_model(draft)
        notification_id = model.id
        with self._guard("create notification"):
            self.session.add(model)
            self.session.commit()
        return notification_id

    def create_batch(self, drafts: Sequence[NotificationDraft]) -> list[str]:
        models = [self._draft_to_model(draft) for draft in drafts]
        if not models:
            return []
        notification_ids = [model.id for model in models]
        with self._guard("create notification batch"):
            self.session.add_all(models)
            self.session.commit()
        return notification_ids

    def create_for_role(self, role: str, template: NotificationTemplate) -> int:
        normalized = role.strip().lower()
        with self._guard("create notifications for role"):
            user_ids = [
                user_id
                for (user_id,) in self.session.query(UserModel.id)
                .join(RoleModel, UserModel.role_id == RoleModel.id)
                .filter(
                    or_(
                        func.lower(RoleModel.alias) == normalized,
                        func.lower(RoleModel.name) == normalized,
                    ),
                    UserModel.is_active == true(),
                    UserModel.deleted == false(),
                )
                .order_by(UserModel.id)
                .all()
            ]
            self.session.add_all(
                self._draft_to_model(template.for_user(user_id)) for user_id in user_ids
            )
            self.session.commit()
        return len(user_ids)

    def get_for_user(
        self, user_id: str, *, unread_only: bool, limit: int, offset: int
    ) -> Sequence[Notification]:
        with self._guard("list notifications"):
            query = self._live(
                self.session.query(NotificationModel).filter(
                    NotificationModel.user_id == user_id
                ),
                self._now(),
            )
            if unread_only:
                query = query.filter(NotificationModel.is_read == false())
            query = (
                query.order_by(
                    NotificationModel.created_at.desc(), NotificationModel.id.desc()
                )
                .offset(offset)
                .limit(limit)
            )
            return [self._to_entity(model) for model in query.all()]

    def get_by_type(
        self, user_id: str, notification_type: str, *, limit: int
    ) -> Sequence[Notification]:
        with self._guard("list notifications by type"):
            query = self._live(
                self.session.query(NotificationModel).filter(
                    NotificationModel.user_id == user_id,
                    NotificationModel.type == notification_type,
                ),
                self._now(),
            )
            query = query.order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            ).limit(limit)
            return [self._to_entity(model) for model in query.all()]

    def get_counts(self, user_id: str) -> NotificationCounts:
        unread_case = case((NotificationModel.is_read == false(), 1), else_=0)
        with self._guard("count notifications"):
            query = self._live(
                self.session.query(
                    func.count(NotificationModel.id),
                    func.coalesce(func.sum(unread_case), 0),
                ).filter(NotificationModel.user_id == user_id),
                self._now(),
            )
            total, unread = query.one()
        return NotificationCounts(total=int(total or 0), unread=int(unread or 0))

    def mark_as_read(self, user_id: str, notification_ids: Sequence[str]) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id]
        if not ids:
            return 0
        with self._guard("mark notifications as read"):
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.id.in_(ids),
                    NotificationModel.user_id == user_id,
                    NotificationModel.is_read == false(),
                )
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.read_at: self._now(),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return updated

    def mark_all_as_read(self, user_id: str) -> int:
        with self._guard("mark all notifications as read"):
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.user_id == user_id,
                    NotificationModel.is_read == false(),
                )
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.read_at: self._now(),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return updated

    def has_notifications(self, user_id: str) -> bool:
        with self._guard("check notifications"):
            query = self._live(
                self.session.query(NotificationModel.id).filter(
                    NotificationModel.user_id == user_id
                ),
                self._now(),
            )
            return query.first() is not None

    def delete_expired(self) -> int:
        with self._guard("delete expired notifications"):
            deleted = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.expires_at.isnot(None),
                    NotificationModel.expires_at < self._now(),
                )
                .delete(synchronize_session=False)
            )
            self.session.commit()
        return deleted

    def _draft_to_model(self, draft: NotificationDraft) -> NotificationModel:
        return NotificationModel(
            id=str(uuid.uuid4()),
            user_id=draft.user_id,
            type=draft.type,
            priority=draft.priority,
            title=draft.title,
            message=draft.message,
            data=encode_payload(draft.data),
            is_read=False,
            read_at=None,
            created_at=ensure_app_naive_datetime(draft.created_at) or self._now(),
            expires_at=ensure_app_naive_datetime(draft.expires_at),
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            priority=model.priority,
            title=model.title,
            message=model.message,
            data=model.data,
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
            created_at=ensure_app_timezone(model.created_at),
            expires_at=ensure_app_timezone(model.expires_at),
        )


__all__ = ["NotificationRepository"]
