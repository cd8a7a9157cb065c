"""
Quiz module: deterministic generation and grading.

This module provides:
- generate_quiz: module + catalog snapshot -> Quiz (pure)
- grade_quiz: Quiz + submitted answers -> GradeResult (pure)
- QuizService: both, wired to the current catalog

Quizzes have 4 or 5 four-option questions; passing is ceil(60%) correct.
"""

from .generator import generate_quiz
from .grader import grade_quiz, passing_score
from .models import GradeResult, Question, QuestionResult, Quiz
from .service import QuizService

__all__ = [
    "GradeResult",
    "Question",
    "QuestionResult",
    "Quiz",
    "QuizService",
    "generate_quiz",
    "grade_quiz",
    "passing_score",
]
