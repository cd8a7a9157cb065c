"""
Persistence collaborator.

Thin query layer over one SQLAlchemy session. It never commits: the caller
owns the transaction, so ``update_opportunity_status`` and ``insert_match``
compose into one atomic unit of work.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from learnmatch.db.models import (
    CompletedModule,
    Match,
    MentorshipRequest,
    Module,
    Opportunity,
    Role,
    User,
)
from learnmatch.mentorship.states import OpportunityStatus


class Repository:
    """Database access for catalog, users, opportunities and matches."""

    def __init__(self, session: Session):
        self.session = session

    # ========================================
    # Modules
    # ========================================

    def get_module(self, module_id: str) -> Module | None:
        return self.session.get(Module, module_id)

    def list_modules(self, newest_first: bool = False) -> Sequence[Module]:
        """Return modules in catalog order (creation order), or newest first for display."""
        if newest_first:
            order = (Module.created_at.desc(), Module.id.desc())
        else:
            order = (Module.created_at.asc(), Module.id.asc())
        return self.session.scalars(select(Module).order_by(*order)).all()

    def count_modules(self) -> int:
        return int(self.session.scalar(select(func.count()).select_from(Module)) or 0)

    def add_module(self, module: Module) -> Module:
        self.session.add(module)
        self.session.flush()
        return module

    def delete_module(self, module_id: str) -> int:
        """Delete a module and every completion row that references it.

        Returns the number of completion rows removed.
        """
        removed = self.session.execute(
            delete(CompletedModule).where(CompletedModule.module_id == module_id)
        ).rowcount
        self.session.execute(delete(Module).where(Module.id == module_id))
        return int(removed or 0)

    # ========================================
    # Users and completions
    # ========================================

    def get_user(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)

    def get_user_in_role(self, user_id: str, role: Role) -> User | None:
        user = self.get_user(user_id)
        if user is None or user.role != role:
            return None
        return user

    def list_users(self, role: Role | None = None) -> Sequence[User]:
        query = select(User).order_by(User.created_at.desc(), User.id)
        if role is not None:
            query = query.where(User.role == role)
        return self.session.scalars(query).all()

    def get_completed_modules(self, user_id: str) -> list[str]:
        rows = self.session.scalars(
            select(CompletedModule.module_id)
            .where(CompletedModule.user_id == user_id)
            .order_by(CompletedModule.completed_at, CompletedModule.module_id)
        )
        return list(rows)

    def completion_counts(self) -> dict[str, int]:
        """Completed-module count per user id (users with none are absent)."""
        rows = self.session.execute(
            select(CompletedModule.user_id, func.count()).group_by(CompletedModule.user_id)
        )
        return {user_id: int(count) for user_id, count in rows}

    def add_completed_module(self, user_id: str, module_id: str) -> None:
        self.session.add(CompletedModule(user_id=user_id, module_id=module_id))
        self.session.flush()

    def set_completed_modules(self, user_id: str, module_ids: Iterable[str]) -> None:
        """Replace a user's completed set."""
        self.session.execute(delete(CompletedModule).where(CompletedModule.user_id == user_id))
        for module_id in dict.fromkeys(module_ids):
            self.session.add(CompletedModule(user_id=user_id, module_id=module_id))
        self.session.flush()

    # ========================================
    # Opportunities and matches
    # ========================================

    def get_opportunity(self, opportunity_id: str, for_update: bool = False) -> Opportunity | None:
        """Load an opportunity, optionally locking its row until the transaction ends."""
        query = select(Opportunity).where(Opportunity.id == opportunity_id)
        if for_update:
            query = query.with_for_update()
        return self.session.scalars(query).one_or_none()

    def add_opportunity(self, opportunity: Opportunity) -> Opportunity:
        self.session.add(opportunity)
        self.session.flush()
        return opportunity

    def list_opportunities(
        self,
        mentor_id: str | None = None,
        visible_to_learner: str | None = None,
    ) -> Sequence[Opportunity]:
        query = select(Opportunity).order_by(Opportunity.created_at.desc(), Opportunity.id)
        if mentor_id is not None:
            query = query.where(Opportunity.mentor_id == mentor_id)
        if visible_to_learner is not None:
            query = query.where(
                (Opportunity.learner_id.is_(None)) | (Opportunity.learner_id == visible_to_learner)
            )
        return self.session.scalars(query).all()

    def update_opportunity_status(
        self,
        opportunity_id: str,
        expected: OpportunityStatus,
        new: OpportunityStatus,
    ) -> bool:
        """Compare-and-set the status. Returns False when the row was not in ``expected``."""
        result = self.session.execute(
            update(Opportunity)
            .where(Opportunity.id == opportunity_id, Opportunity.status == expected)
            .values(status=new, version=Opportunity.version + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def insert_match(self, mentor_id: str, learner_id: str, opportunity_id: str) -> Match:
        match = Match(mentor_id=mentor_id, learner_id=learner_id, opportunity_id=opportunity_id)
        self.session.add(match)
        self.session.flush()
        return match

    def list_matches(
        self,
        mentor_id: str | None = None,
        learner_id: str | None = None,
    ) -> Sequence[Match]:
        query = select(Match).order_by(Match.created_at.desc(), Match.id)
        if mentor_id is not None:
            query = query.where(Match.mentor_id == mentor_id)
        if learner_id is not None:
            query = query.where(Match.learner_id == learner_id)
        return self.session.scalars(query).all()

    def count_matches(self, opportunity_id: str) -> int:
        return int(
            self.session.scalar(
                select(func.count()).select_from(Match).where(Match.opportunity_id == opportunity_id)
            )
            or 0
        )

    # ========================================
    # Mentorship requests
    # ========================================

    def get_request(self, request_id: str) -> MentorshipRequest | None:
        return self.session.get(MentorshipRequest, request_id)

    def add_request(self, request: MentorshipRequest) -> MentorshipRequest:
        self.session.add(request)
        self.session.flush()
        return request

    def list_requests(
        self,
        learner_id: str | None = None,
        mentor_id: str | None = None,
        recommendations_only: bool = False,
    ) -> Sequence[MentorshipRequest]:
        query = select(MentorshipRequest).order_by(
            MentorshipRequest.created_at.desc(), MentorshipRequest.id
        )
        if learner_id is not None:
            query = query.where(MentorshipRequest.learner_id == learner_id)
        if mentor_id is not None:
            query = query.where(MentorshipRequest.mentor_id == mentor_id)
        if recommendations_only:
            query = query.where(MentorshipRequest.admin_id.is_not(None))
        return self.session.scalars(query).all()

    def user_names(self, user_ids: Iterable[str]) -> dict[str, str | None]:
        ids = set(user_ids)
        if not ids:
            return {}
        rows = self.session.execute(select(User.id, User.name).where(User.id.in_(ids)))
        return {user_id: name for user_id, name in rows}
