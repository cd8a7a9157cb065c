"""
Mentorship requests and admin recommendations.

Learners ask a mentor for mentorship on a topic; mentors accept or decline.
Admins can recommend a learner to a mentor, which creates a request with
status ``recommended`` and the admin recorded on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from loguru import logger
from sqlalchemy.orm import Session

from learnmatch.db.models import MentorshipRequest, Role
from learnmatch.db.repository import Repository
from learnmatch.errors import ForbiddenError, InvalidInputError, NotFoundError
from learnmatch.mentorship.states import UPDATABLE_REQUEST_STATUSES, RequestStatus
from learnmatch.principal import Principal


@dataclass(frozen=True)
class RequestView:
    """A mentorship request with the participants' display names."""

    id: str
    learner_id: str
    mentor_id: str
    topic: str
    status: RequestStatus
    admin_id: str | None
    created_at: datetime | None
    learner_name: str | None = None
    mentor_name: str | None = None


class MentorshipRequestService:
    """Request lifecycle inside the caller's transaction."""

    def __init__(self, session: Session):
        self.repo = Repository(session)

    def _view(self, request: MentorshipRequest, names: dict[str, str | None]) -> RequestView:
        return RequestView(
            id=request.id,
            learner_id=request.learner_id,
            mentor_id=request.mentor_id,
            topic=request.topic,
            status=request.status,
            admin_id=request.admin_id,
            created_at=request.created_at,
            learner_name=names.get(request.learner_id),
            mentor_name=names.get(request.mentor_id),
        )

    def _views(self, requests: list[MentorshipRequest]) -> list[RequestView]:
        names = self.repo.user_names(
            {r.learner_id for r in requests} | {r.mentor_id for r in requests}
        )
        return [self._view(request, names) for request in requests]

    def request_mentorship(self, actor: Principal, mentor_id: str | None, topic: str | None) -> MentorshipRequest:
        if not mentor_id or not (topic or "").strip():
            raise InvalidInputError("Mentor ID and topic are required")
        if self.repo.get_user_in_role(mentor_id, Role.MENTOR) is None:
            raise NotFoundError("Mentor not found")

        request = self.repo.add_request(
            MentorshipRequest(
                learner_id=actor.user_id,
                mentor_id=mentor_id,
                topic=topic.strip(),
                status=RequestStatus.PENDING,
            )
        )
        logger.info(f"Mentorship request {request.id}: {actor.user_id} -> mentor {mentor_id}")
        return request

    def list_requests(self, actor: Principal) -> list[RequestView]:
        if actor.role is Role.LEARNER:
            requests = self.repo.list_requests(learner_id=actor.user_id)
        elif actor.role is Role.MENTOR:
            requests = self.repo.list_requests(mentor_id=actor.user_id)
        else:
            requests = self.repo.list_requests()
        return self._views(list(requests))

    def update_request(self, actor: Principal, request_id: str, status: str | None) -> MentorshipRequest:
        try:
            new_status = RequestStatus(status)
        except ValueError:
            raise InvalidInputError("Invalid status") from None
        if new_status not in UPDATABLE_REQUEST_STATUSES:
            raise InvalidInputError("Invalid status")

        request = self.repo.get_request(request_id)
        if request is None:
            raise NotFoundError("Request not found")
        participant = {Role.MENTOR: request.mentor_id, Role.LEARNER: request.learner_id}.get(actor.role)
        if participant is not None and participant != actor.user_id:
            raise ForbiddenError("Not authorized to update this request")

        request.status = new_status
        self.repo.session.flush()
        logger.info(f"Mentorship request {request_id} set to {new_status.value} by {actor.user_id}")
        return request

    def recommend(
        self,
        actor: Principal,
        learner_id: str | None,
        mentor_id: str | None,
        message: str | None = None,
    ) -> MentorshipRequest:
        actor.require(Role.ADMIN)
        if not learner_id or not mentor_id:
            raise InvalidInputError("learnerId and mentorId are required")
        if self.repo.get_user_in_role(learner_id, Role.LEARNER) is None:
            raise NotFoundError("Learner not found")
        if self.repo.get_user_in_role(mentor_id, Role.MENTOR) is None:
            raise NotFoundError("Mentor not found")

        topic = (message or "").strip() or f"Recommended by admin {actor.email or actor.user_id}"
        request = self.repo.add_request(
            MentorshipRequest(
                learner_id=learner_id,
                mentor_id=mentor_id,
                topic=topic,
                status=RequestStatus.RECOMMENDED,
                admin_id=actor.user_id,
            )
        )
        logger.info(f"Admin {actor.user_id} recommended learner {learner_id} to mentor {mentor_id}")
        return request

    def list_recommendations(self, actor: Principal) -> list[RequestView]:
        actor.require(Role.ADMIN)
        return self._views(list(self.repo.list_requests(recommendations_only=True)))
