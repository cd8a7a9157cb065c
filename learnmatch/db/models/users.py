"""
User and completion tables.

Completed modules are rows keyed by ``(user_id, module_id)``: completing a
module twice collides on the primary key instead of adding a second row.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_id, utcnow


class Role(str, Enum):
    """User roles."""

    LEARNER = "learner"
    MENTOR = "mentor"
    ADMIN = "admin"


class User(Base):
    """Platform user. Credentials are owned by the auth gateway, not stored here."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    name: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(Text, unique=True)
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, native_enum=False, length=16, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.LEARNER,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    completions: Mapped[list[CompletedModule]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="CompletedModule.completed_at",
    )


class CompletedModule(Base):
    """One module a user has completed."""

    __tablename__ = "user_completed_modules"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    module_id: Mapped[str] = mapped_column(
        ForeignKey("modules.id", ondelete="CASCADE"), primary_key=True
    )
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    user: Mapped[User] = relationship(back_populates="completions")
