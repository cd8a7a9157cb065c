"""Quiz retrieval and submission against the current catalog snapshot."""

from __future__ import annotations

from loguru import logger
from sqlalchemy.orm import Session

from learnmatch.catalog.service import CatalogService
from learnmatch.quiz.generator import generate_quiz
from learnmatch.quiz.grader import SubmittedAnswers, grade_quiz
from learnmatch.quiz.models import GradeResult, Quiz


class QuizService:
    """
    Generates quizzes per request and grades submissions.

    A submission is graded against a quiz regenerated from the catalog as it
    is at submission time. If modules were added or removed since the learner
    fetched the quiz, the regenerated answers can differ from what was shown.
    """

    def __init__(self, session: Session):
        self.catalog = CatalogService(session)

    def quiz_for(self, module_id: str) -> Quiz:
        return generate_quiz(module_id, self.catalog.snapshot())

    def submit(self, module_id: str, answers: SubmittedAnswers) -> GradeResult:
        quiz = self.quiz_for(module_id)
        result = grade_quiz(quiz, answers)
        logger.info(
            f"Quiz graded for module {module_id}: {result.score}/{result.total} "
            f"({'passed' if result.passed else 'failed'})"
        )
        return result
