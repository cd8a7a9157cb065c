"""Declarative base and shared column helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all learnmatch tables."""


def new_id() -> str:
    """Generate a primary key for a new row."""
    return str(uuid4())


def utcnow() -> datetime:
    """Timestamp default with microsecond resolution (keeps catalog order stable)."""
    return datetime.now(timezone.utc)
