"""
Learner progress.

Progress is the share of catalog modules a user has completed, as a whole
percentage rounded half up. Completion is idempotent: completing a module
twice leaves the completed set unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from learnmatch.db.models import Role
from learnmatch.db.repository import Repository
from learnmatch.errors import ForbiddenError, NotFoundError
from learnmatch.principal import Principal


def compute_progress(completed_count: int, total_modules: int) -> int:
    """
    Completion percentage, rounded half up.

    Returns 0 for an empty catalog instead of dividing by zero.
    """
    if total_modules <= 0:
        return 0
    # round(100 * c / t) with halves rounded up, in integer arithmetic
    return (200 * completed_count + total_modules) // (2 * total_modules)


@dataclass(frozen=True)
class ProgressSnapshot:
    """A user's completed modules and the derived percentage."""

    user_id: str
    completed_modules: tuple[str, ...]
    total_modules: int
    progress: int

    @property
    def completed_count(self) -> int:
        return len(self.completed_modules)


@dataclass(frozen=True)
class LearnerProgress:
    """Roster row: one user with their progress."""

    user_id: str
    name: str | None
    email: str | None
    role: Role
    completed_count: int
    total_modules: int
    progress: int
    created_at: datetime | None = field(default=None)


class ProgressTracker:
    """Records completions and derives progress inside the caller's transaction."""

    def __init__(self, session: Session):
        self.repo = Repository(session)

    def _snapshot(self, user_id: str) -> ProgressSnapshot:
        completed = tuple(self.repo.get_completed_modules(user_id))
        total = self.repo.count_modules()
        return ProgressSnapshot(
            user_id=user_id,
            completed_modules=completed,
            total_modules=total,
            progress=compute_progress(len(completed), total),
        )

    def snapshot(self, user_id: str) -> ProgressSnapshot:
        if self.repo.get_user(user_id) is None:
            raise NotFoundError("User not found")
        return self._snapshot(user_id)

    def mark_complete(self, user_id: str, module_id: str) -> ProgressSnapshot:
        """
        Add a module to the user's completed set.

        Already-completed modules are a no-op. A concurrent completion of the
        same module collides on the (user_id, module_id) key; the savepoint
        is rolled back and the call returns the existing completion. Losing
        that race is deliberately read as the idempotent case, never as a
        ConflictError.
        """
        if self.repo.get_module(module_id) is None:
            raise NotFoundError("Module not found")
        if self.repo.get_user(user_id) is None:
            raise NotFoundError("User not found")

        if module_id in self.repo.get_completed_modules(user_id):
            logger.debug(f"Module {module_id} already completed by {user_id}")
        else:
            try:
                with self.repo.session.begin_nested():
                    self.repo.add_completed_module(user_id, module_id)
                logger.info(f"Module {module_id} completed by {user_id}")
            except IntegrityError:
                logger.warning(f"Concurrent completion of {module_id} by {user_id}; keeping existing row")

        return self._snapshot(user_id)

    def reset(self, actor: Principal, user_id: str) -> ProgressSnapshot:
        """Clear a user's completed set. Users may reset themselves; admins anyone."""
        if actor.user_id != user_id and not actor.is_admin:
            raise ForbiddenError("Not authorized to reset this user's progress")
        if self.repo.get_user(user_id) is None:
            raise NotFoundError("User not found")
        self.repo.set_completed_modules(user_id, [])
        logger.info(f"Progress reset for {user_id} by {actor.user_id}")
        return self._snapshot(user_id)

    def users_with_progress(self, role: Role | None = None) -> list[LearnerProgress]:
        """Every user (optionally one role) with progress, newest users first."""
        total = self.repo.count_modules()
        counts = self.repo.completion_counts()
        return [
            LearnerProgress(
                user_id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                completed_count=counts.get(user.id, 0),
                total_modules=total,
                progress=compute_progress(counts.get(user.id, 0), total),
                created_at=user.created_at,
            )
            for user in self.repo.list_users(role)
        ]

    def top_learners(self, limit: int = 10) -> list[LearnerProgress]:
        """Learners ordered by progress, highest first."""
        learners = self.users_with_progress(Role.LEARNER)
        learners.sort(key=lambda learner: learner.progress, reverse=True)
        return learners[:limit]
