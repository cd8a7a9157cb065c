"""
Content module table.

Catalog order is creation order: ``created_at`` ascending with ``id`` as the
tie-breaker. Quiz distractors depend on it.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id, utcnow


class Module(Base):
    """A unit of learning content."""

    __tablename__ = "modules"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    content_url: Mapped[str | None] = mapped_column(Text)
    duration: Mapped[str | None] = mapped_column(Text)  # free text, e.g. "45 minutes"
    difficulty: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
