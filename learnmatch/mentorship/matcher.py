"""
Opportunity lifecycle and match creation.

Accepting an opportunity changes its status and inserts the match in one
transaction (the caller's session). The open state acts as a mutual
exclusion gate, enforced three ways:

- the row is read ``FOR UPDATE`` (PostgreSQL; SQLite serializes with
  BEGIN IMMEDIATE instead),
- the status change is a compare-and-set ``UPDATE ... WHERE status = 'open'``,
- ``matches.opportunity_id`` is unique.

A caller that loses the race gets ConflictError and the transaction is
rolled back by the session scope, so nothing is partially written.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from learnmatch.db.models import Match, Opportunity, Role
from learnmatch.db.repository import Repository
from learnmatch.errors import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from learnmatch.mentorship.states import Decision, OpportunityStatus, ensure_transition
from learnmatch.principal import Principal


@dataclass(frozen=True)
class ResponseOutcome:
    """Result of a learner's response."""

    opportunity: Opportunity
    match: Match | None = None


class OpportunityMatcher:
    """Creates opportunities, applies learner responses and lists matches."""

    def __init__(self, session: Session):
        self.repo = Repository(session)

    def create_opportunity(
        self,
        actor: Principal,
        title: str | None,
        description: str | None,
        learner_id: str | None = None,
    ) -> Opportunity:
        actor.require(Role.MENTOR, "Only mentors can create opportunities")
        if not (title or "").strip() or not (description or "").strip():
            raise InvalidInputError("Title and description are required")
        if learner_id and self.repo.get_user_in_role(learner_id, Role.LEARNER) is None:
            raise NotFoundError("Learner not found")

        opportunity = self.repo.add_opportunity(
            Opportunity(
                mentor_id=actor.user_id,
                title=title.strip(),
                description=description.strip(),
                learner_id=learner_id or None,
                status=OpportunityStatus.OPEN,
            )
        )
        target = f"learner {learner_id}" if learner_id else "any learner"
        logger.info(f"Opportunity {opportunity.id} created by mentor {actor.user_id} for {target}")
        return opportunity

    def list_opportunities(self, actor: Principal) -> Sequence[Opportunity]:
        if actor.role is Role.MENTOR:
            return self.repo.list_opportunities(mentor_id=actor.user_id)
        if actor.role is Role.LEARNER:
            return self.repo.list_opportunities(visible_to_learner=actor.user_id)
        return self.repo.list_opportunities()

    def respond(
        self,
        actor: Principal,
        opportunity_id: str,
        decision: Decision | str,
    ) -> ResponseOutcome:
        """
        Accept or decline an open opportunity.

        Raises:
            ForbiddenError: actor is not a learner, or the offer targets someone else
            InvalidInputError: decision is not accept/decline
            NotFoundError: opportunity does not exist
            ConflictError: opportunity is no longer open
        """
        actor.require(Role.LEARNER, "Only learners can respond to opportunities")
        if not isinstance(decision, Decision):
            decision = Decision.parse(decision)

        opportunity = self.repo.get_opportunity(opportunity_id, for_update=True)
        if opportunity is None:
            raise NotFoundError("Opportunity not found")
        if opportunity.learner_id and opportunity.learner_id != actor.user_id:
            raise ForbiddenError("Not authorized for this opportunity")

        target = decision.target_status
        ensure_transition(opportunity.status, target)

        if not self.repo.update_opportunity_status(opportunity.id, OpportunityStatus.OPEN, target):
            logger.warning(f"Opportunity {opportunity.id} left the open state before {actor.user_id} responded")
            raise ConflictError("Opportunity is no longer open")

        match = None
        if target is OpportunityStatus.ACCEPTED:
            try:
                with self.repo.session.begin_nested():
                    match = self.repo.insert_match(
                        mentor_id=opportunity.mentor_id,
                        learner_id=actor.user_id,
                        opportunity_id=opportunity.id,
                    )
            except IntegrityError:
                logger.warning(f"Duplicate match rejected for opportunity {opportunity.id}")
                raise ConflictError("Opportunity already has a match") from None

        self.repo.session.refresh(opportunity)
        logger.info(f"Opportunity {opportunity.id} {target.value} by learner {actor.user_id}")
        return ResponseOutcome(opportunity=opportunity, match=match)

    def list_matches(self, actor: Principal) -> Sequence[Match]:
        if actor.role is Role.MENTOR:
            return self.repo.list_matches(mentor_id=actor.user_id)
        if actor.role is Role.LEARNER:
            return self.repo.list_matches(learner_id=actor.user_id)
        return self.repo.list_matches()
