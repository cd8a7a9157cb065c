"""
Quiz value types.

Quizzes are derived on every request and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

OPTION_COUNT = 4


@dataclass(frozen=True)
class Question:
    """One multiple-choice question with exactly four options."""

    question: str
    options: tuple[str, ...]
    answer_index: int = 0

    @property
    def correct_option(self) -> str:
        return self.options[self.answer_index]

    def public(self) -> dict[str, Any]:
        """Learner-facing form: option order kept, answer index removed."""
        return {"question": self.question, "options": list(self.options)}


@dataclass(frozen=True)
class Quiz:
    """Generated quiz for one module."""

    module_id: str
    title: str
    questions: tuple[Question, ...]

    def __len__(self) -> int:
        return len(self.questions)

    def public(self) -> dict[str, Any]:
        return {"title": self.title, "questions": [q.public() for q in self.questions]}


@dataclass(frozen=True)
class QuestionResult:
    """Grading outcome for one question."""

    question: str
    selected_index: int | None
    correct_index: int
    correct: bool


@dataclass(frozen=True)
class GradeResult:
    """Aggregate grading outcome."""

    score: int
    total: int
    passed: bool
    results: tuple[QuestionResult, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "total": self.total,
            "passed": self.passed,
            "results": [
                {
                    "question": r.question,
                    "selectedIndex": r.selected_index,
                    "correctIndex": r.correct_index,
                    "correct": r.correct,
                }
                for r in self.results
            ],
        }
