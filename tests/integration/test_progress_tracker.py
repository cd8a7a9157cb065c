"""
Integration tests for progress tracking and catalog mutations.

Runs against a temporary SQLite database seeded with the sample catalog.
"""

import pytest

from learnmatch.catalog import CatalogService
from learnmatch.db.database import session_scope
from learnmatch.db.models import Role
from learnmatch.errors import ForbiddenError, InvalidInputError, NotFoundError
from learnmatch.progress import ProgressTracker
from learnmatch.quiz import QuizService


class TestMarkComplete:
    """Tests for ProgressTracker.mark_complete."""

    def test_adds_module_and_updates_progress(self, db_session):
        snapshot = ProgressTracker(db_session).mark_complete("learner-1", "mod-002")

        assert snapshot.completed_modules == ("mod-001", "mod-002")
        assert snapshot.total_modules == 5
        assert snapshot.progress == 40

    def test_is_idempotent(self, db_session):
        tracker = ProgressTracker(db_session)

        first = tracker.mark_complete("learner-1", "mod-001")
        second = tracker.mark_complete("learner-1", "mod-001")

        assert first == second
        assert second.completed_modules == ("mod-001",)
        assert second.progress == 20

    def test_lost_completion_race_is_a_no_op(self, db_session, monkeypatch):
        tracker = ProgressTracker(db_session)
        real_completed = tracker.repo.get_completed_modules
        calls = []

        def stale_completed(user_id):
            # First read misses the row another request already committed.
            calls.append(user_id)
            return [] if len(calls) == 1 else real_completed(user_id)

        monkeypatch.setattr(tracker.repo, "get_completed_modules", stale_completed)

        snapshot = tracker.mark_complete("learner-1", "mod-001")

        assert snapshot.completed_modules == ("mod-001",)
        assert snapshot.progress == 20

    def test_unknown_module(self, db_session):
        with pytest.raises(NotFoundError, match="Module not found"):
            ProgressTracker(db_session).mark_complete("learner-1", "mod-999")

    def test_unknown_user(self, db_session):
        with pytest.raises(NotFoundError, match="User not found"):
            ProgressTracker(db_session).mark_complete("ghost", "mod-001")

    def test_progress_survives_new_session(self, seeded):
        with session_scope(seeded) as session:
            ProgressTracker(session).mark_complete("learner-2", "mod-003")

        with session_scope(seeded) as session:
            snapshot = ProgressTracker(session).snapshot("learner-2")

        assert snapshot.completed_modules == ("mod-003",)


class TestReset:
    """Tests for ProgressTracker.reset."""

    def test_user_resets_own_progress(self, db_session, learner):
        snapshot = ProgressTracker(db_session).reset(learner, "learner-1")

        assert snapshot.completed_modules == ()
        assert snapshot.progress == 0

    def test_admin_resets_anyone(self, db_session, admin):
        assert ProgressTracker(db_session).reset(admin, "learner-1").progress == 0

    def test_other_learner_forbidden(self, db_session, other_learner):
        with pytest.raises(ForbiddenError):
            ProgressTracker(db_session).reset(other_learner, "learner-1")

        assert ProgressTracker(db_session).snapshot("learner-1").completed_modules == ("mod-001",)

    def test_admin_reset_unknown_user(self, db_session, admin):
        with pytest.raises(NotFoundError):
            ProgressTracker(db_session).reset(admin, "ghost")


class TestRoster:
    """Tests for roster and top learners."""

    def test_top_learners_sorted_by_progress(self, db_session):
        tracker = ProgressTracker(db_session)
        tracker.mark_complete("learner-2", "mod-002")
        tracker.mark_complete("learner-2", "mod-003")

        top = tracker.top_learners()

        assert [row.user_id for row in top] == ["learner-2", "learner-1"]
        assert [row.progress for row in top] == [40, 20]
        assert all(row.role is Role.LEARNER for row in top)

    def test_top_learners_limit(self, db_session):
        assert len(ProgressTracker(db_session).top_learners(limit=1)) == 1

    def test_users_with_progress_includes_every_role(self, db_session):
        rows = ProgressTracker(db_session).users_with_progress()

        assert {row.user_id for row in rows} == {"learner-1", "learner-2", "mentor-1", "mentor-2", "admin-1"}
        assert next(row for row in rows if row.user_id == "mentor-1").progress == 0


class TestCatalogMutations:
    """Tests for CatalogService and its effect on progress and quizzes."""

    def test_delete_module_cascades_into_completions(self, db_session):
        CatalogService(db_session).delete_module("mod-001")

        snapshot = ProgressTracker(db_session).snapshot("learner-1")
        assert snapshot.completed_modules == ()
        assert snapshot.total_modules == 4
        assert snapshot.progress == 0

    def test_delete_unknown_module(self, db_session):
        with pytest.raises(NotFoundError):
            CatalogService(db_session).delete_module("mod-999")

    def test_new_module_joins_end_of_catalog(self, db_session):
        service = CatalogService(db_session)
        created = service.create_module(title="  Spreadsheet Formulas ", duration="20 minutes")

        assert created.title == "Spreadsheet Formulas"
        assert service.snapshot().ids[-1] == created.id
        assert service.list_modules()[0].id == created.id

    def test_new_module_changes_title_distractors(self, db_session):
        service = CatalogService(db_session)
        service.delete_module("mod-002")
        service.delete_module("mod-003")
        service.delete_module("mod-004")

        quiz = QuizService(db_session).quiz_for("mod-005")
        assert list(quiz.questions[0].options) == [
            "Digital Citizenship",
            "Internet Safety Basics",
            "None of the above",
            "None of the above",
        ]

    def test_create_requires_title(self, db_session):
        with pytest.raises(InvalidInputError, match="Title required"):
            CatalogService(db_session).create_module(title="   ")

    @pytest.mark.parametrize("title", ["None of the above", "  none of the above "])
    def test_create_rejects_quiz_padding_title(self, db_session, title):
        with pytest.raises(InvalidInputError, match="reserved"):
            CatalogService(db_session).create_module(title=title)

    def test_update_rejects_quiz_padding_title(self, db_session):
        service = CatalogService(db_session)
        with pytest.raises(InvalidInputError, match="reserved"):
            service.update_module("mod-002", title="None of the above")

        assert service.get_module("mod-002").title == "Intro to Coding"

    def test_update_changes_only_given_fields(self, db_session):
        module = CatalogService(db_session).update_module("mod-002", difficulty="Advanced")

        assert module.difficulty == "Advanced"
        assert module.title == "Intro to Coding"
        assert module.duration == "60 minutes"

    def test_update_rejects_unknown_fields(self, db_session):
        with pytest.raises(InvalidInputError):
            CatalogService(db_session).update_module("mod-002", owner="someone")
