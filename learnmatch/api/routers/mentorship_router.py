"""
Mentorship router.

Endpoints for:
- Opportunities (mentor create, role-filtered list, learner respond)
- Matches
- Mentor directory and top learners
- Mentorship requests
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config import get_settings
from learnmatch.api.auth import get_principal, require_role
from learnmatch.api.schemas import (
    LearnerProgressResponse,
    MatchResponse,
    MentorResponse,
    MentorshipRequestCreate,
    MentorshipRequestMutationResponse,
    MentorshipRequestResponse,
    MentorshipRequestUpdate,
    OpportunityCreateRequest,
    OpportunityMutationResponse,
    OpportunityRespondRequest,
    OpportunityResponse,
)
from learnmatch.db.database import get_session
from learnmatch.db.models import Match, MentorshipRequest, Opportunity, Role
from learnmatch.db.repository import Repository
from learnmatch.mentorship.matcher import OpportunityMatcher
from learnmatch.mentorship.requests import MentorshipRequestService, RequestView
from learnmatch.principal import Principal
from learnmatch.progress import ProgressTracker

router = APIRouter()


def opportunity_response(opportunity: Opportunity) -> OpportunityResponse:
    return OpportunityResponse(
        id=opportunity.id,
        mentor_id=opportunity.mentor_id,
        title=opportunity.title,
        description=opportunity.description,
        learner_id=opportunity.learner_id,
        status=opportunity.status.value,
        created_at=opportunity.created_at,
    )


def match_response(match: Match) -> MatchResponse:
    return MatchResponse(
        id=match.id,
        mentor_id=match.mentor_id,
        learner_id=match.learner_id,
        opportunity_id=match.opportunity_id,
        created_at=match.created_at,
    )


def request_response(request: MentorshipRequest) -> MentorshipRequestResponse:
    return MentorshipRequestResponse(
        id=request.id,
        learner_id=request.learner_id,
        mentor_id=request.mentor_id,
        topic=request.topic,
        status=request.status.value,
        admin_id=request.admin_id,
        created_at=request.created_at,
    )


def request_view_response(view: RequestView) -> MentorshipRequestResponse:
    return MentorshipRequestResponse(
        id=view.id,
        learner_id=view.learner_id,
        mentor_id=view.mentor_id,
        topic=view.topic,
        status=view.status.value,
        admin_id=view.admin_id,
        created_at=view.created_at,
        learner_name=view.learner_name,
        mentor_name=view.mentor_name,
    )


# ========================================
# Opportunities
# ========================================


@router.post(
    "/opportunities",
    response_model=OpportunityMutationResponse,
    status_code=201,
    summary="Create opportunity",
)
def create_opportunity(
    payload: OpportunityCreateRequest,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> OpportunityMutationResponse:
    """Create an opportunity (mentor only). Omit learnerId to open it to any learner."""
    opportunity = OpportunityMatcher(db).create_opportunity(
        principal, payload.title, payload.description, payload.learner_id
    )
    return OpportunityMutationResponse(
        message="Opportunity created", opportunity=opportunity_response(opportunity)
    )


@router.get("/opportunities", response_model=List[OpportunityResponse], summary="List opportunities")
def list_opportunities(
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> List[OpportunityResponse]:
    """Mentors see their own; learners see open-to-all plus those targeted at them."""
    return [opportunity_response(o) for o in OpportunityMatcher(db).list_opportunities(principal)]


@router.post(
    "/opportunities/{opportunity_id}/respond",
    response_model=OpportunityMutationResponse,
    summary="Respond to opportunity",
)
def respond_to_opportunity(
    opportunity_id: str,
    payload: OpportunityRespondRequest,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> OpportunityMutationResponse:
    """
    Accept or decline an open opportunity (learner only).

    Accepting creates the match in the same transaction. Returns 409 when the
    opportunity has already been answered.
    """
    outcome = OpportunityMatcher(db).respond(principal, opportunity_id, payload.status)
    return OpportunityMutationResponse(
        message="Response recorded", opportunity=opportunity_response(outcome.opportunity)
    )


@router.get("/matches", response_model=List[MatchResponse], summary="List matches")
def list_matches(
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> List[MatchResponse]:
    return [match_response(m) for m in OpportunityMatcher(db).list_matches(principal)]


# ========================================
# Mentors
# ========================================


@router.get("/mentors", response_model=List[MentorResponse], summary="List mentors")
def list_mentors(db: Session = Depends(get_session)) -> List[MentorResponse]:
    return [
        MentorResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            created_at=user.created_at,
        )
        for user in Repository(db).list_users(Role.MENTOR)
    ]


@router.get(
    "/mentors/top-learners",
    response_model=List[LearnerProgressResponse],
    summary="Top learners by progress",
)
def top_learners(
    principal: Principal = Depends(require_role(Role.MENTOR)),
    db: Session = Depends(get_session),
) -> List[LearnerProgressResponse]:
    rows = ProgressTracker(db).top_learners(limit=get_settings().top_learners_limit)
    return [
        LearnerProgressResponse(
            id=row.user_id,
            name=row.name,
            email=row.email,
            role=row.role.value,
            completed_count=row.completed_count,
            total_modules=row.total_modules,
            progress=row.progress,
            created_at=row.created_at,
        )
        for row in rows
    ]


# ========================================
# Mentorship Requests
# ========================================


@router.post(
    "/mentorship/requests",
    response_model=MentorshipRequestMutationResponse,
    status_code=201,
    summary="Request mentorship",
)
def create_request(
    payload: MentorshipRequestCreate,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> MentorshipRequestMutationResponse:
    request = MentorshipRequestService(db).request_mentorship(principal, payload.mentor_id, payload.topic)
    return MentorshipRequestMutationResponse(
        message="Mentorship request created", request=request_response(request)
    )


@router.get(
    "/mentorship/requests",
    response_model=List[MentorshipRequestResponse],
    summary="List mentorship requests",
)
def list_requests(
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> List[MentorshipRequestResponse]:
    return [request_view_response(v) for v in MentorshipRequestService(db).list_requests(principal)]


@router.put(
    "/mentorship/requests/{request_id}",
    response_model=MentorshipRequestMutationResponse,
    summary="Update mentorship request status",
)
def update_request(
    request_id: str,
    payload: MentorshipRequestUpdate,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> MentorshipRequestMutationResponse:
    request = MentorshipRequestService(db).update_request(principal, request_id, payload.status)
    return MentorshipRequestMutationResponse(
        message="Request updated successfully", request=request_response(request)
    )
