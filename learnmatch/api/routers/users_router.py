"""
User router.

Profile with progress, and progress reset (self or admin).
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from learnmatch.api.auth import get_principal
from learnmatch.api.schemas import UserProfileResponse
from learnmatch.db.database import get_session
from learnmatch.db.repository import Repository
from learnmatch.errors import NotFoundError
from learnmatch.principal import Principal
from learnmatch.progress import ProgressSnapshot, ProgressTracker

router = APIRouter()


def _profile(db: Session, snapshot: ProgressSnapshot) -> UserProfileResponse:
    user = Repository(db).get_user(snapshot.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserProfileResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        completed_modules=list(snapshot.completed_modules),
        completed_count=snapshot.completed_count,
        progress=snapshot.progress,
        total_modules=snapshot.total_modules,
        created_at=user.created_at,
    )


@router.get("/{user_id}", response_model=UserProfileResponse, summary="Get user profile")
def get_user(
    user_id: str,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> UserProfileResponse:
    """User profile with completed modules and progress percentage."""
    return _profile(db, ProgressTracker(db).snapshot(user_id))


@router.post("/{user_id}/reset-progress", summary="Reset user progress")
def reset_progress(
    user_id: str,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> Dict[str, Any]:
    """Clear completed modules. Users may reset their own progress; admins anyone's."""
    snapshot = ProgressTracker(db).reset(principal, user_id)
    profile = _profile(db, snapshot)
    return {"message": "Progress reset successfully", "user": profile.model_dump(by_alias=True, mode="json")}
