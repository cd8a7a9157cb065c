"""Verified caller identity handed to the services by the auth boundary."""

from __future__ import annotations

from dataclasses import dataclass

from learnmatch.db.models import Role, User
from learnmatch.errors import ForbiddenError


@dataclass(frozen=True)
class Principal:
    """Who is calling. Produced by the auth boundary, never by the services."""

    user_id: str
    role: Role
    email: str | None = None

    @classmethod
    def from_user(cls, user: User) -> Principal:
        return cls(user_id=user.id, role=user.role, email=user.email)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def require(self, role: Role, message: str | None = None) -> None:
        """Raise ForbiddenError unless the principal has ``role``."""
        if self.role is not role:
            raise ForbiddenError(message or f"{role.value.capitalize()} access required")
