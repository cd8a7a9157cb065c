"""
Unit tests for the deterministic quiz generator.

Tests question order, option construction and classification rules against
an in-memory catalog snapshot.
"""

import pytest

from learnmatch.catalog import ModuleCatalog, ModuleRecord
from learnmatch.errors import NotFoundError
from learnmatch.quiz.generator import (
    DIFFICULTY_QUESTION,
    DURATION_QUESTION,
    PLACEHOLDER_OPTION,
    SOURCE_QUESTION,
    TITLE_QUESTION,
    TOPIC_QUESTION,
    classify_difficulty,
    classify_source,
    classify_topic,
    duration_options,
    generate_quiz,
    parse_duration,
)


# ============================================================================
# Full quiz
# ============================================================================


class TestGenerateQuiz:
    """Tests for generate_quiz over the sample catalog."""

    def test_full_quiz_for_first_module(self, sample_catalog):
        quiz = generate_quiz("mod-001", sample_catalog)

        assert quiz.title == "Internet Safety Basics"
        assert [q.question for q in quiz.questions] == [
            TITLE_QUESTION,
            DURATION_QUESTION,
            DIFFICULTY_QUESTION,
            TOPIC_QUESTION,
            SOURCE_QUESTION,
        ]
        assert [list(q.options) for q in quiz.questions] == [
            ["Internet Safety Basics", "Intro to Coding", "Docs and Spreadsheets", "Career Launch"],
            ["45 minutes", "55 minutes", "40 minutes", "65 minutes"],
            ["Beginner", "Intermediate", "Advanced", PLACEHOLDER_OPTION],
            ["Internet & Online Safety", "Coding / Programming", "Productivity Tools", "Career Readiness"],
            ["YouTube Video", "External Resource", "No external resource", PLACEHOLDER_OPTION],
        ]

    def test_every_question_has_four_options_and_answer_first(self, sample_catalog):
        for module_id in sample_catalog.ids:
            quiz = generate_quiz(module_id, sample_catalog)
            for question in quiz.questions:
                assert len(question.options) == 4
                assert question.answer_index == 0

    def test_title_distractors_wrap_around_the_catalog(self, sample_catalog):
        quiz = generate_quiz("mod-005", sample_catalog)

        assert list(quiz.questions[0].options) == [
            "Digital Citizenship",
            "Internet Safety Basics",
            "Intro to Coding",
            "Docs and Spreadsheets",
        ]

    def test_zero_duration_omits_duration_question(self, sample_catalog):
        quiz = generate_quiz("mod-005", sample_catalog)

        assert len(quiz) == 4
        assert DURATION_QUESTION not in [q.question for q in quiz.questions]

    def test_missing_duration_omits_duration_question(self, sample_catalog):
        quiz = generate_quiz("mod-003", sample_catalog)

        assert len(quiz) == 4

    def test_unknown_difficulty_falls_back_to_beginner(self, sample_catalog):
        quiz = generate_quiz("mod-005", sample_catalog)
        difficulty = next(q for q in quiz.questions if q.question == DIFFICULTY_QUESTION)

        assert difficulty.correct_option == "Beginner"

    def test_single_module_catalog_pads_title_options(self):
        catalog = ModuleCatalog([ModuleRecord(id="only", title="Only Module")])

        quiz = generate_quiz("only", catalog)

        assert list(quiz.questions[0].options) == [
            "Only Module",
            PLACEHOLDER_OPTION,
            PLACEHOLDER_OPTION,
            PLACEHOLDER_OPTION,
        ]

    def test_duplicate_titles_are_not_used_as_distractors(self):
        catalog = ModuleCatalog(
            [
                ModuleRecord(id="a", title="Same"),
                ModuleRecord(id="b", title="Same"),
                ModuleRecord(id="c", title="Other"),
            ]
        )

        quiz = generate_quiz("a", catalog)

        assert list(quiz.questions[0].options) == ["Same", "Other", PLACEHOLDER_OPTION, PLACEHOLDER_OPTION]

    def test_unknown_module_raises_not_found(self, sample_catalog):
        with pytest.raises(NotFoundError):
            generate_quiz("missing", sample_catalog)

    def test_generation_is_deterministic(self, sample_catalog):
        assert generate_quiz("mod-002", sample_catalog) == generate_quiz("mod-002", sample_catalog)

    def test_public_form_hides_answer_index(self, sample_catalog):
        public = generate_quiz("mod-001", sample_catalog).public()

        assert public["title"] == "Internet Safety Basics"
        assert set(public["questions"][0]) == {"question", "options"}


# ============================================================================
# Duration
# ============================================================================


class TestDuration:
    """Tests for duration parsing and distractors."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("45 minutes", 45),
            ("about 1 hour", 1),
            ("90", 90),
            ("0 minutes", None),
            ("self-paced", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_duration(self, text, expected):
        assert parse_duration(text) == expected

    def test_offsets(self):
        assert duration_options(12) == [12, 22, 10, 32]

    def test_negative_offset_is_floored(self):
        assert duration_options(3) == [3, 13, 10, 23]

    def test_floor_collision_at_ten_is_replaced(self):
        options = duration_options(10)

        assert options == [10, 20, 40, 30]
        assert options.count(10) == 1


# ============================================================================
# Classification
# ============================================================================


class TestClassification:
    """Tests for difficulty, topic and source rules."""

    @pytest.mark.parametrize("level", ["Beginner", "Intermediate", "Advanced"])
    def test_known_difficulty_kept(self, level):
        assert classify_difficulty(level) == level

    @pytest.mark.parametrize("level", ["", None, "beginner", "Expert"])
    def test_other_difficulty_is_beginner(self, level):
        assert classify_difficulty(level) == "Beginner"

    @pytest.mark.parametrize(
        "description,topic",
        [
            ("Browsing the INTERNET safely", "Internet & Online Safety"),
            ("Learn to code in Python", "Coding / Programming"),
            ("Coding for beginners", "Coding / Programming"),
            ("Shared docs for teams", "Productivity Tools"),
            ("Product thinking", "Productivity Tools"),
            ("Prepare for an interview", "Career Readiness"),
            ("Write a strong CV", "Career Readiness"),
            ("Career planning", "Career Readiness"),
            ("Responsible technology use", "General Digital Skills"),
            (None, "General Digital Skills"),
        ],
    )
    def test_topic_rules(self, description, topic):
        assert classify_topic(description) == topic

    def test_first_matching_topic_rule_wins(self):
        assert classify_topic("Internet code for your career") == "Internet & Online Safety"

    @pytest.mark.parametrize(
        "url,source",
        [
            ("https://www.YouTube.com/watch?v=1", "YouTube Video"),
            ("https://example.com/lesson", "External Resource"),
            ("", "No external resource"),
            (None, "No external resource"),
        ],
    )
    def test_source_rules(self, url, source):
        assert classify_source(url) == source
