"""
Admin router.

Endpoints for:
- User roster with progress
- Recommending learners to mentors
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from learnmatch.api.auth import require_role
from learnmatch.api.routers.mentorship_router import request_response, request_view_response
from learnmatch.api.schemas import (
    LearnerProgressResponse,
    MentorshipRequestMutationResponse,
    MentorshipRequestResponse,
    RecommendRequest,
)
from learnmatch.db.database import get_session
from learnmatch.db.models import Role
from learnmatch.mentorship.requests import MentorshipRequestService
from learnmatch.principal import Principal
from learnmatch.progress import ProgressTracker

router = APIRouter()


@router.get("/users", response_model=List[LearnerProgressResponse], summary="List users with progress")
def list_users(
    principal: Principal = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_session),
) -> List[LearnerProgressResponse]:
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
        for row in ProgressTracker(db).users_with_progress()
    ]


@router.post(
    "/recommend",
    response_model=MentorshipRequestMutationResponse,
    status_code=201,
    summary="Recommend a learner to a mentor",
)
def recommend(
    payload: RecommendRequest,
    principal: Principal = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_session),
) -> MentorshipRequestMutationResponse:
    request = MentorshipRequestService(db).recommend(
        principal, payload.learner_id, payload.mentor_id, payload.message
    )
    return MentorshipRequestMutationResponse(
        message="Learner recommended to mentor", request=request_response(request)
    )


@router.get(
    "/recommendations",
    response_model=List[MentorshipRequestResponse],
    summary="List admin recommendations",
)
def list_recommendations(
    principal: Principal = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_session),
) -> List[MentorshipRequestResponse]:
    return [request_view_response(v) for v in MentorshipRequestService(db).list_recommendations(principal)]
