"""SQLAlchemy model for persisted notifications."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.sql import expression

from notification_center.infrastructure.database import Base
from notification_center.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "user_notification"
    __table_args__ = (
        Index("idx_user_unread", "user_id", "is_read", "created_at"),
        Index("idx_expires", "expires_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("user.id"), nullable=False)
    type = Column(String(64), nullable=False)
    priority = Column(String(16), nullable=False, default="normal")
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=True)
    data = Column(Text, nullable=True)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    read_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    expires_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
