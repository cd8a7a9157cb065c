"""
Quiz grading.

Submissions are compared with each question's ``answer_index`` from a
freshly generated quiz, never with option text or order.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from fractions import Fraction
from typing import Any, Union

from learnmatch.errors import InvalidInputError
from learnmatch.quiz.models import GradeResult, QuestionResult, Quiz

PASSING_RATIO = Fraction(3, 5)

SubmittedAnswers = Union[Mapping[Any, Any], Sequence[Any], None]


def passing_score(total: int) -> int:
    """Minimum correct answers needed to pass: ceil(0.6 * total)."""
    return math.ceil(PASSING_RATIO * total)


def _lookup(answers: SubmittedAnswers, index: int) -> Any:
    if answers is None:
        return None
    if isinstance(answers, Mapping):
        if index in answers:
            return answers[index]
        return answers.get(str(index))
    if isinstance(answers, (str, bytes)):
        raise InvalidInputError("Answers must be an object or a list")
    return answers[index] if index < len(answers) else None


def _coerce_selection(value: Any, index: int) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInputError(f"Answer for question {index} must be an option index")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidInputError(f"Answer for question {index} must be an option index") from None


def grade_quiz(quiz: Quiz, answers: SubmittedAnswers) -> GradeResult:
    """
    Grade a submission against a quiz.

    Args:
        quiz: Quiz regenerated for the submission
        answers: Question index -> selected option index. A mapping may use
            int or numeric-string keys; a list is indexed by position.
            Missing entries and None count as unanswered.

    Returns:
        GradeResult with per-question outcome and pass/fail

    Raises:
        InvalidInputError: a selection is not an integer
    """
    if answers is not None and not isinstance(answers, (Mapping, Sequence)):
        raise InvalidInputError("Answers must be an object or a list")

    results: list[QuestionResult] = []
    for index, question in enumerate(quiz.questions):
        selected = _coerce_selection(_lookup(answers, index), index)
        results.append(
            QuestionResult(
                question=question.question,
                selected_index=selected,
                correct_index=question.answer_index,
                correct=selected is not None and selected == question.answer_index,
            )
        )

    score = sum(1 for result in results if result.correct)
    total = len(results)
    return GradeResult(
        score=score,
        total=total,
        passed=score >= passing_score(total),
        results=tuple(results),
    )
