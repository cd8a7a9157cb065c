"""
Load users, modules and opportunities from a JSON export.

Expected shape::

    {
        "users": [{"id": "...", "name": "...", "email": "...", "role": "learner",
                   "completedModules": ["mod-001"]}],
        "modules": [{"id": "mod-001", "title": "...", "description": "...",
                     "contentUrl": "...", "duration": "45 minutes", "difficulty": "Beginner"}],
        "opportunities": [{"id": "...", "mentorId": "...", "title": "...",
                           "description": "...", "learnerId": null, "status": "open"}]
    }

Users and modules are merged by id, so seeding twice is safe. Modules are
inserted in file order, which becomes catalog order. Opportunities must be
open; an id that already exists is left as it is, so re-seeding never
rewinds an answered opportunity.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

from loguru import logger
from sqlalchemy.orm import Session

from learnmatch.catalog.snapshot import validate_title
from learnmatch.db.models import Module, Opportunity, Role, User
from learnmatch.db.models.base import utcnow
from learnmatch.db.repository import Repository
from learnmatch.errors import InvalidInputError
from learnmatch.mentorship.states import OpportunityStatus


@dataclass
class SeedResult:
    """Counts of rows written by a seed run."""

    users: int = 0
    modules: int = 0
    opportunities: int = 0


def _pick(record: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def seed_from_data(session: Session, data: dict[str, Any]) -> SeedResult:
    """Merge seed records into the database (caller commits)."""
    repo = Repository(session)
    result = SeedResult()
    base_time = utcnow()

    for position, raw in enumerate(data.get("modules") or []):
        try:
            title = validate_title(raw.get("title"))
        except InvalidInputError as exc:
            raise InvalidInputError(f"Module #{position}: {exc}") from None
        existing = repo.get_module(raw["id"]) if raw.get("id") else None
        module = existing or Module(created_at=base_time + timedelta(microseconds=position))
        if raw.get("id"):
            module.id = raw["id"]
        module.title = title
        module.description = raw.get("description")
        module.content_url = _pick(raw, "contentUrl", "content_url")
        module.duration = raw.get("duration")
        module.difficulty = raw.get("difficulty")
        session.merge(module)
        result.modules += 1
    session.flush()

    completions: dict[str, list[str]] = {}
    for raw in data.get("users") or []:
        try:
            role = Role(raw.get("role") or Role.LEARNER.value)
        except ValueError:
            raise InvalidInputError(f"Unknown role for user {raw.get('id')}: {raw.get('role')}") from None
        user = User(name=raw.get("name"), email=raw.get("email"), role=role)
        if raw.get("id"):
            user.id = raw["id"]
        user = session.merge(user)
        session.flush()
        completions[user.id] = list(_pick(raw, "completedModules", "completed_modules") or [])
        result.users += 1

    for user_id, module_ids in completions.items():
        known = [module_id for module_id in module_ids if repo.get_module(module_id) is not None]
        if len(known) != len(module_ids):
            logger.warning(f"Skipping {len(module_ids) - len(known)} unknown completed modules for {user_id}")
        repo.set_completed_modules(user_id, known)

    # Only open opportunities are seeded: accepted and declined ones only arise
    # through OpportunityMatcher.respond, which also writes the match.
    for raw in data.get("opportunities") or []:
        status = raw.get("status") or OpportunityStatus.OPEN.value
        if status != OpportunityStatus.OPEN.value:
            raise InvalidInputError(
                f"Opportunity {raw.get('id')} has status {status!r}; only open opportunities can be seeded"
            )
        if raw.get("id") and repo.get_opportunity(raw["id"]) is not None:
            logger.debug(f"Opportunity {raw['id']} already exists; leaving it unchanged")
            continue
        opportunity = Opportunity(
            mentor_id=_pick(raw, "mentorId", "mentor_id"),
            title=raw.get("title") or "",
            description=raw.get("description") or "",
            learner_id=_pick(raw, "learnerId", "learner_id"),
            status=OpportunityStatus.OPEN,
        )
        if raw.get("id"):
            opportunity.id = raw["id"]
        session.add(opportunity)
        result.opportunities += 1
    session.flush()

    logger.info(
        f"Seeded {result.modules} modules, {result.users} users, {result.opportunities} opportunities"
    )
    return result


def seed_from_file(session: Session, path: Path) -> SeedResult:
    """Read a JSON seed file and merge it."""
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise InvalidInputError("Seed file must contain a JSON object")
    return seed_from_data(session, data)
