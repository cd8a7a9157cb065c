"""
Catalog management: admin CRUD over content modules.

Deleting a module also removes it from every learner's completed set in the
same transaction, so later progress figures use the reduced catalog.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger
from sqlalchemy.orm import Session

from learnmatch.catalog.snapshot import ModuleCatalog, validate_title
from learnmatch.db.models import Module
from learnmatch.db.repository import Repository
from learnmatch.errors import InvalidInputError, NotFoundError

EDITABLE_FIELDS = ("title", "description", "content_url", "duration", "difficulty")


class CatalogService:
    """Reads and mutates the module catalog inside the caller's transaction."""

    def __init__(self, session: Session):
        self.repo = Repository(session)

    def snapshot(self) -> ModuleCatalog:
        """Ordered immutable copy of the catalog for quiz generation."""
        return ModuleCatalog.from_rows(self.repo.list_modules())

    def list_modules(self) -> Sequence[Module]:
        """Modules for display, newest first."""
        return self.repo.list_modules(newest_first=True)

    def get_module(self, module_id: str) -> Module:
        module = self.repo.get_module(module_id)
        if module is None:
            raise NotFoundError("Module not found")
        return module

    def create_module(
        self,
        title: str | None,
        description: str | None = None,
        content_url: str | None = None,
        duration: str | None = None,
        difficulty: str | None = None,
        module_id: str | None = None,
    ) -> Module:
        module = Module(
            title=validate_title(title),
            description=description or None,
            content_url=content_url or None,
            duration=duration or None,
            difficulty=difficulty or None,
        )
        if module_id:
            module.id = module_id
        self.repo.add_module(module)
        logger.info(f"Module created: {module.id} ({module.title})")
        return module

    def update_module(self, module_id: str, **changes: str | None) -> Module:
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise InvalidInputError(f"Unknown module fields: {', '.join(sorted(unknown))}")
        if "title" in changes:
            changes["title"] = validate_title(changes["title"])

        module = self.get_module(module_id)
        for field_name, value in changes.items():
            setattr(module, field_name, value if field_name == "title" else (value or None))
        self.repo.session.flush()
        logger.info(f"Module updated: {module_id} ({', '.join(sorted(changes)) or 'no changes'})")
        return module

    def delete_module(self, module_id: str) -> None:
        self.get_module(module_id)
        removed = self.repo.delete_module(module_id)
        logger.info(f"Module deleted: {module_id} (removed from {removed} completed sets)")
