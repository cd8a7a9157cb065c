"""
Request/response models shared by the routers.

JSON bodies use camelCase keys (``contentUrl``, ``learnerId``); snake_case is
accepted on input too.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases and ORM attribute loading."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ========================================
# Modules
# ========================================


class ModuleResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    content_url: Optional[str] = None
    duration: Optional[str] = None
    difficulty: Optional[str] = None
    created_at: Optional[datetime] = None


class ModuleCreateRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    content_url: Optional[str] = None
    duration: Optional[str] = None
    difficulty: Optional[str] = None


class ModuleUpdateRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    content_url: Optional[str] = None
    duration: Optional[str] = None
    difficulty: Optional[str] = None


class ModuleMutationResponse(CamelModel):
    message: str
    module: ModuleResponse


class ProgressResponse(CamelModel):
    message: Optional[str] = None
    completed_modules: List[str]
    progress: int
    total_modules: int


# ========================================
# Quiz
# ========================================


class PublicQuestion(CamelModel):
    question: str
    options: List[str]


class PublicQuizResponse(CamelModel):
    title: str
    questions: List[PublicQuestion]


class QuizSubmitRequest(CamelModel):
    answers: Optional[Union[Dict[str, Any], List[Any]]] = Field(
        default=None,
        description="Question index -> selected option index (object) or selections by position (list)",
    )


class QuestionResultResponse(CamelModel):
    question: str
    selected_index: Optional[int]
    correct_index: int
    correct: bool


class GradeResponse(CamelModel):
    score: int
    total: int
    passed: bool
    results: List[QuestionResultResponse]


# ========================================
# Users
# ========================================


class UserProfileResponse(CamelModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str
    completed_modules: List[str]
    completed_count: int
    progress: int
    total_modules: int
    created_at: Optional[datetime] = None


class LearnerProgressResponse(CamelModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str
    completed_count: int
    total_modules: int
    progress: int
    created_at: Optional[datetime] = None


class MentorResponse(CamelModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None


# ========================================
# Opportunities and matches
# ========================================


class OpportunityCreateRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    learner_id: Optional[str] = None


class OpportunityRespondRequest(CamelModel):
    status: Optional[str] = Field(default=None, description="accept/accepted or decline/declined")


class OpportunityResponse(CamelModel):
    id: str
    mentor_id: str
    title: str
    description: str
    learner_id: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


class OpportunityMutationResponse(CamelModel):
    message: str
    opportunity: OpportunityResponse


class MatchResponse(CamelModel):
    id: str
    mentor_id: str
    learner_id: str
    opportunity_id: str
    created_at: Optional[datetime] = None


# ========================================
# Mentorship requests
# ========================================


class MentorshipRequestCreate(CamelModel):
    mentor_id: Optional[str] = None
    topic: Optional[str] = None


class MentorshipRequestUpdate(CamelModel):
    status: Optional[str] = None


class RecommendRequest(CamelModel):
    learner_id: Optional[str] = None
    mentor_id: Optional[str] = None
    message: Optional[str] = None


class MentorshipRequestResponse(CamelModel):
    id: str
    learner_id: str
    mentor_id: str
    topic: str
    status: str
    admin_id: Optional[str] = None
    created_at: Optional[datetime] = None
    learner_name: Optional[str] = None
    mentor_name: Optional[str] = None


class MentorshipRequestMutationResponse(CamelModel):
    message: str
    request: MentorshipRequestResponse
