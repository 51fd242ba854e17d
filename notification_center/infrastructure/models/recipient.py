"""Directory tables consulted when a notification is broadcast to a role.

The notification service does not own users or roles; it maps just enough of
both tables to resolve the active members of a role.
"""

import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from notification_center.infrastructure.database import Base


class RoleModel(Base):
    """Named role; broadcasts match either ``name`` or ``alias``."""

    __tablename__ = "role"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), nullable=False, unique=True)
    alias = Column(String(50), nullable=False, unique=True)


class UserModel(Base):
    """Potential notification recipient."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    role_id = Column(Integer, ForeignKey("role.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    deleted = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )

    role = relationship(RoleModel, lazy="joined")


__all__ = ["RoleModel", "UserModel"]
