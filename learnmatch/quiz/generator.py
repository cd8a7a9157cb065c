"""
Deterministic quiz generator.

Builds a multiple-choice quiz from a module's own fields and its position in
the catalog. There is no question bank and no randomness: the same module and
the same catalog snapshot always give the same quiz, option order included.

Questions, in order:
1. Title       - distractors are other module titles, walking the catalog
                 circularly from the next position
2. Duration    - only when the duration text contains a non-zero integer
3. Difficulty  - Beginner / Intermediate / Advanced
4. Topic       - keyword rules over the description
5. Source type - YouTube / external link / none

The correct option is always first (``answer_index == 0``); options are then
padded with "None of the above" to exactly four.
"""

from __future__ import annotations

import re

from learnmatch.catalog.snapshot import PLACEHOLDER_OPTION, Difficulty, ModuleCatalog, ModuleRecord
from learnmatch.quiz.models import OPTION_COUNT, Question, Quiz

DISTRACTOR_COUNT = OPTION_COUNT - 1

TITLE_QUESTION = "Which of the following is the title of this module?"
DURATION_QUESTION = "What is the reported duration of this module?"
DIFFICULTY_QUESTION = "What difficulty level is this module categorized as?"
TOPIC_QUESTION = "Which of these topics does this module primarily cover?"
SOURCE_QUESTION = "What type of resource is linked for this module?"

DIFFICULTY_LEVELS: tuple[str, ...] = tuple(level.value for level in Difficulty)

DEFAULT_TOPIC = "General Digital Skills"
# First matching rule wins.
TOPIC_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("internet",), "Internet & Online Safety"),
    (("coding", "code"), "Coding / Programming"),
    (("product", "docs"), "Productivity Tools"),
    (("career", "cv", "interview"), "Career Readiness"),
)
TOPICS: tuple[str, ...] = tuple(topic for _, topic in TOPIC_RULES) + (DEFAULT_TOPIC,)

SOURCE_YOUTUBE = "YouTube Video"
SOURCE_EXTERNAL = "External Resource"
SOURCE_NONE = "No external resource"
SOURCE_TYPES: tuple[str, ...] = (SOURCE_YOUTUBE, SOURCE_EXTERNAL, SOURCE_NONE)

DURATION_OFFSETS: tuple[int, ...] = (10, -5, 20)
DURATION_FLOOR = 10
DURATION_FALLBACK_OFFSET = 30

_DIGITS = re.compile(r"\d+")


def _build_question(text: str, correct: str, distractors: list[str]) -> Question:
    options = [correct, *distractors][:OPTION_COUNT]
    while len(options) < OPTION_COUNT:
        options.append(PLACEHOLDER_OPTION)
    return Question(question=text, options=tuple(options), answer_index=0)


def pick_title_distractors(module: ModuleRecord, catalog: ModuleCatalog) -> list[str]:
    """Up to three other titles, walking the catalog circularly from the next position."""
    start = catalog.index_of(module.id)
    size = len(catalog)
    distractors: list[str] = []
    for step in range(1, size):
        if len(distractors) == DISTRACTOR_COUNT:
            break
        candidate = catalog[(start + step) % size]
        if candidate.title != module.title:
            distractors.append(candidate.title)
    return distractors


def parse_duration(duration: str | None) -> int | None:
    """First run of digits in the duration text; None when absent or zero."""
    match = _DIGITS.search(duration or "")
    if match is None:
        return None
    value = int(match.group(0))
    return value or None


def duration_options(minutes: int) -> list[int]:
    """Correct value followed by the three fixed-offset distractors."""
    values = [minutes]
    for offset in DURATION_OFFSETS:
        value = minutes + offset
        if offset < 0:
            value = max(DURATION_FLOOR, value)
        if value == minutes:
            value = minutes + DURATION_FALLBACK_OFFSET
        values.append(value)
    return values


def classify_difficulty(difficulty: str | None) -> str:
    return difficulty if difficulty in DIFFICULTY_LEVELS else Difficulty.BEGINNER.value


def classify_topic(description: str | None) -> str:
    text = (description or "").lower()
    for keywords, topic in TOPIC_RULES:
        if any(keyword in text for keyword in keywords):
            return topic
    return DEFAULT_TOPIC


def classify_source(content_url: str | None) -> str:
    url = (content_url or "").lower()
    if "youtube" in url:
        return SOURCE_YOUTUBE
    if url:
        return SOURCE_EXTERNAL
    return SOURCE_NONE


def _others(values: tuple[str, ...], correct: str) -> list[str]:
    return [value for value in values if value != correct][:DISTRACTOR_COUNT]


def generate_quiz(module_id: str, catalog: ModuleCatalog) -> Quiz:
    """
    Generate the quiz for a module.

    Args:
        module_id: Module to quiz on; must be present in ``catalog``
        catalog: Ordered catalog snapshot (drives title distractors)

    Returns:
        Quiz with 4 or 5 questions (5 when a duration is present)

    Raises:
        NotFoundError: module_id is not in the catalog
    """
    module = catalog.get(module_id)
    questions: list[Question] = [
        _build_question(TITLE_QUESTION, module.title, pick_title_distractors(module, catalog))
    ]

    minutes = parse_duration(module.duration)
    if minutes is not None:
        labels = [f"{value} minutes" for value in duration_options(minutes)]
        questions.append(_build_question(DURATION_QUESTION, labels[0], labels[1:]))

    difficulty = classify_difficulty(module.difficulty)
    questions.append(
        _build_question(DIFFICULTY_QUESTION, difficulty, _others(DIFFICULTY_LEVELS, difficulty))
    )

    topic = classify_topic(module.description)
    questions.append(_build_question(TOPIC_QUESTION, topic, _others(TOPICS, topic)))

    source = classify_source(module.content_url)
    questions.append(_build_question(SOURCE_QUESTION, source, _others(SOURCE_TYPES, source)))

    return Quiz(module_id=module.id, title=module.title, questions=tuple(questions))
