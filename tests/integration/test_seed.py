"""Integration tests for JSON seeding."""

import json

import pytest

from learnmatch.catalog import CatalogService
from learnmatch.db.database import session_scope
from learnmatch.db.repository import Repository
from learnmatch.db.seed import seed_from_data, seed_from_file
from learnmatch.errors import InvalidInputError
from learnmatch.mentorship import OpportunityStatus
from learnmatch.mentorship.matcher import OpportunityMatcher


def test_file_order_becomes_catalog_order(db_session, sample_modules):
    assert CatalogService(db_session).snapshot().ids == tuple(m["id"] for m in sample_modules)


def test_seeding_twice_merges_by_id(seeded, sample_modules, sample_users):
    with session_scope(seeded) as session:
        result = seed_from_data(session, {"modules": sample_modules, "users": sample_users})

    assert result.modules == 5
    with session_scope(seeded) as session:
        repo = Repository(session)
        assert repo.count_modules() == 5
        assert len(repo.list_users()) == 5
        assert repo.get_completed_modules("learner-1") == ["mod-001"]


def test_unknown_completed_modules_are_skipped(session_factory):
    data = {
        "modules": [{"id": "m1", "title": "One"}],
        "users": [{"id": "u1", "email": "u1@example.com", "role": "learner", "completed_modules": ["m1", "gone"]}],
    }
    with session_scope(session_factory) as session:
        seed_from_data(session, data)
        assert Repository(session).get_completed_modules("u1") == ["m1"]


def test_opportunities_are_seeded(session_factory):
    data = {
        "users": [{"id": "m1", "email": "m@example.com", "role": "mentor"}],
        "opportunities": [{"id": "o1", "mentorId": "m1", "title": "T", "description": "D"}],
    }
    with session_scope(session_factory) as session:
        result = seed_from_data(session, data)
        assert result.opportunities == 1
        assert Repository(session).get_opportunity("o1").status.value == "open"


@pytest.mark.parametrize("status", ["accepted", "declined", "closed"])
def test_answered_opportunities_rejected(seeded, status):
    record = {"id": "o1", "mentorId": "mentor-1", "title": "T", "description": "D", "status": status}

    with pytest.raises(InvalidInputError, match="only open opportunities"):
        with session_scope(seeded) as session:
            seed_from_data(session, {"opportunities": [record]})

    with session_scope(seeded) as session:
        assert Repository(session).get_opportunity("o1") is None
        assert Repository(session).count_matches("o1") == 0


def test_reseeding_keeps_accepted_opportunity(seeded, learner):
    record = {"id": "o1", "mentorId": "mentor-1", "title": "T", "description": "D"}
    with session_scope(seeded) as session:
        seed_from_data(session, {"opportunities": [record]})
    with session_scope(seeded) as session:
        OpportunityMatcher(session).respond(learner, "o1", "accept")

    with session_scope(seeded) as session:
        result = seed_from_data(session, {"opportunities": [record]})

    assert result.opportunities == 0
    with session_scope(seeded) as session:
        repo = Repository(session)
        opportunity = repo.get_opportunity("o1")
        assert opportunity.status is OpportunityStatus.ACCEPTED
        assert opportunity.version == 2
        assert repo.count_matches("o1") == 1


def test_unknown_role_rejected(session_factory):
    with pytest.raises(InvalidInputError):
        with session_scope(session_factory) as session:
            seed_from_data(session, {"users": [{"id": "x", "role": "superuser"}]})


def test_module_without_title_rejected(session_factory):
    with pytest.raises(InvalidInputError):
        with session_scope(session_factory) as session:
            seed_from_data(session, {"modules": [{"id": "m1"}]})


def test_module_with_reserved_title_rejected(session_factory):
    with pytest.raises(InvalidInputError, match="Module #0: .*reserved"):
        with session_scope(session_factory) as session:
            seed_from_data(session, {"modules": [{"id": "m1", "title": "None of the above"}]})


def test_seed_from_file(session_factory, tmp_path, sample_modules):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps({"modules": sample_modules[:2]}), encoding="utf-8")

    with session_scope(session_factory) as session:
        assert seed_from_file(session, path).modules == 2


def test_seed_file_must_be_an_object(session_factory, tmp_path):
    path = tmp_path / "seed.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(InvalidInputError):
        with session_scope(session_factory) as session:
            seed_from_file(session, path)


def test_missing_seed_file(session_factory, tmp_path):
    with pytest.raises(FileNotFoundError):
        with session_scope(session_factory) as session:
            seed_from_file(session, tmp_path / "absent.json")
