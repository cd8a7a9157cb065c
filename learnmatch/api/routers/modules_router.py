"""
Module router.

Endpoints for:
- Catalog listing and admin create/edit/delete
- Module completion (progress)
- Generated quiz retrieval and submission
"""

from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.orm import Session

from learnmatch.api.auth import get_principal, require_role
from learnmatch.api.schemas import (
    GradeResponse,
    ModuleCreateRequest,
    ModuleMutationResponse,
    ModuleResponse,
    ModuleUpdateRequest,
    ProgressResponse,
    PublicQuizResponse,
    QuestionResultResponse,
    QuizSubmitRequest,
)
from learnmatch.catalog import CatalogService
from learnmatch.db.database import get_session
from learnmatch.db.models import Module, Role
from learnmatch.principal import Principal
from learnmatch.progress import ProgressTracker
from learnmatch.quiz import QuizService

router = APIRouter()


def _module_response(module: Module) -> ModuleResponse:
    return ModuleResponse(
        id=module.id,
        title=module.title,
        description=module.description,
        content_url=module.content_url,
        duration=module.duration,
        difficulty=module.difficulty,
        created_at=module.created_at,
    )


# ========================================
# Catalog Endpoints
# ========================================


@router.get("", response_model=List[ModuleResponse], summary="List modules")
def list_modules(db: Session = Depends(get_session)) -> List[ModuleResponse]:
    """List all modules, newest first."""
    return [_module_response(m) for m in CatalogService(db).list_modules()]


@router.get("/{module_id}", response_model=ModuleResponse, summary="Get module")
def get_module(module_id: str, db: Session = Depends(get_session)) -> ModuleResponse:
    return _module_response(CatalogService(db).get_module(module_id))


@router.post("", response_model=ModuleMutationResponse, status_code=201, summary="Create module")
def create_module(
    payload: ModuleCreateRequest,
    principal: Principal = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_session),
) -> ModuleMutationResponse:
    """Create a module (admin only). New modules go to the end of the catalog."""
    module = CatalogService(db).create_module(
        title=payload.title,
        description=payload.description,
        content_url=payload.content_url,
        duration=payload.duration,
        difficulty=payload.difficulty,
    )
    return ModuleMutationResponse(message="Module created", module=_module_response(module))


@router.patch("/{module_id}", response_model=ModuleMutationResponse, summary="Edit module")
def update_module(
    module_id: str,
    payload: ModuleUpdateRequest,
    principal: Principal = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_session),
) -> ModuleMutationResponse:
    """Edit module fields (admin only). Only fields present in the body change."""
    changes = payload.model_dump(exclude_unset=True)
    module = CatalogService(db).update_module(module_id, **changes)
    return ModuleMutationResponse(message="Module updated", module=_module_response(module))


@router.delete("/{module_id}", summary="Delete module")
def delete_module(
    module_id: str,
    principal: Principal = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_session),
) -> Dict[str, str]:
    """Delete a module and remove it from every user's completed modules."""
    CatalogService(db).delete_module(module_id)
    logger.info(f"Module {module_id} deleted by admin {principal.user_id}")
    return {"message": "Module deleted"}


# ========================================
# Progress Endpoints
# ========================================


@router.post("/{module_id}/complete", response_model=ProgressResponse, summary="Mark module complete")
def complete_module(
    module_id: str,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> ProgressResponse:
    snapshot = ProgressTracker(db).mark_complete(principal.user_id, module_id)
    return ProgressResponse(
        message="Module marked as complete",
        completed_modules=list(snapshot.completed_modules),
        progress=snapshot.progress,
        total_modules=snapshot.total_modules,
    )


# ========================================
# Quiz Endpoints
# ========================================


@router.get("/{module_id}/quiz", response_model=PublicQuizResponse, summary="Get module quiz")
def get_quiz(
    module_id: str,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> PublicQuizResponse:
    """Generated quiz without answer keys."""
    quiz = QuizService(db).quiz_for(module_id)
    return PublicQuizResponse.model_validate(quiz.public())


@router.post("/{module_id}/quiz/submit", response_model=GradeResponse, summary="Submit quiz answers")
def submit_quiz(
    module_id: str,
    payload: QuizSubmitRequest,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_session),
) -> GradeResponse:
    """
    Grade answers against the quiz regenerated from the current catalog.

    Body: ``{"answers": {"0": 0, "1": 2}}`` or ``{"answers": [0, 2, null, 1]}``.
    """
    result = QuizService(db).submit(module_id, payload.answers)
    return GradeResponse(
        score=result.score,
        total=result.total,
        passed=result.passed,
        results=[
            QuestionResultResponse(
                question=r.question,
                selected_index=r.selected_index,
                correct_index=r.correct_index,
                correct=r.correct,
            )
            for r in result.results
        ],
    )
