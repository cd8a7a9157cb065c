"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import os
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Settings are read once at import time; keep tests off PostgreSQL and the log file.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", "")

from learnmatch.catalog import ModuleCatalog, ModuleRecord  # noqa: E402
from learnmatch.db.database import build_engine, build_session_factory, init_db, session_scope  # noqa: E402
from learnmatch.db.models import Role  # noqa: E402
from learnmatch.db.seed import seed_from_data  # noqa: E402
from learnmatch.principal import Principal  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (temporary SQLite database)")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


# ============================================================================
# Sample data
# ============================================================================

SAMPLE_MODULES = [
    {
        "id": "mod-001",
        "title": "Internet Safety Basics",
        "description": "Stay safe on the internet",
        "contentUrl": "https://www.youtube.com/watch?v=abc123",
        "duration": "45 minutes",
        "difficulty": "Beginner",
    },
    {
        "id": "mod-002",
        "title": "Intro to Coding",
        "description": "Write your first code",
        "contentUrl": "https://example.com/coding",
        "duration": "60 minutes",
        "difficulty": "Intermediate",
    },
    {
        "id": "mod-003",
        "title": "Docs and Spreadsheets",
        "description": "Productivity with docs",
        "contentUrl": "",
        "difficulty": "Advanced",
    },
    {
        "id": "mod-004",
        "title": "Career Launch",
        "description": "Build a CV and practise interview answers",
        "duration": "30 mins",
        "difficulty": "",
    },
    {
        "id": "mod-005",
        "title": "Digital Citizenship",
        "description": "Responsible technology use",
        "duration": "0 minutes",
        "difficulty": "Expert",
    },
]

SAMPLE_USERS = [
    {
        "id": "learner-1",
        "name": "Ada",
        "email": "ada@example.com",
        "role": "learner",
        "completedModules": ["mod-001"],
    },
    {"id": "learner-2", "name": "Grace", "email": "grace@example.com", "role": "learner"},
    {"id": "mentor-1", "name": "Alan", "email": "alan@example.com", "role": "mentor"},
    {"id": "mentor-2", "name": "Barbara", "email": "barbara@example.com", "role": "mentor"},
    {"id": "admin-1", "name": "Root", "email": "admin@example.com", "role": "admin"},
]


@pytest.fixture
def sample_modules():
    return [dict(m) for m in SAMPLE_MODULES]


@pytest.fixture
def sample_users():
    return [dict(u) for u in SAMPLE_USERS]


@pytest.fixture
def sample_catalog():
    """Five-module catalog snapshot in creation order."""
    return ModuleCatalog(
        ModuleRecord(
            id=m["id"],
            title=m["title"],
            description=m.get("description", ""),
            content_url=m.get("contentUrl", ""),
            duration=m.get("duration", ""),
            difficulty=m.get("difficulty", ""),
        )
        for m in SAMPLE_MODULES
    )


# ============================================================================
# Database
# ============================================================================


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite engine (threads share it, unlike :memory:)."""
    engine = build_engine(f"sqlite:///{tmp_path / 'learnmatch.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def seeded(session_factory):
    """Seed sample users and modules and commit."""
    with session_scope(session_factory) as session:
        seed_from_data(session, {"modules": SAMPLE_MODULES, "users": SAMPLE_USERS})
    return session_factory


@pytest.fixture
def db_session(seeded):
    """Session over the seeded database, committed on teardown."""
    with session_scope(seeded) as session:
        yield session


@pytest.fixture
def learner():
    return Principal(user_id="learner-1", role=Role.LEARNER, email="ada@example.com")


@pytest.fixture
def other_learner():
    return Principal(user_id="learner-2", role=Role.LEARNER, email="grace@example.com")


@pytest.fixture
def mentor():
    return Principal(user_id="mentor-1", role=Role.MENTOR, email="alan@example.com")


@pytest.fixture
def other_mentor():
    return Principal(user_id="mentor-2", role=Role.MENTOR, email="barbara@example.com")


@pytest.fixture
def admin():
    return Principal(user_id="admin-1", role=Role.ADMIN, email="admin@example.com")
