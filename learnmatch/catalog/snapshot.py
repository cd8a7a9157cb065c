"""
Immutable catalog snapshot used as quiz-generation input.

The snapshot is taken once per request and passed explicitly, so quiz
generation never iterates a structure that another request can mutate.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from learnmatch.errors import InvalidInputError, NotFoundError

if TYPE_CHECKING:
    from learnmatch.db.models import Module

# Quiz padding option. A module may not use it as its title, or its correct
# answer would be indistinguishable from the padding.
PLACEHOLDER_OPTION = "None of the above"


def validate_title(title: str | None) -> str:
    """Stripped module title; raises InvalidInputError when empty or reserved."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise InvalidInputError("Title required")
    if cleaned.casefold() == PLACEHOLDER_OPTION.casefold():
        raise InvalidInputError(f"\"{PLACEHOLDER_OPTION}\" is reserved and cannot be a module title")
    return cleaned


class Difficulty(str, Enum):
    """Difficulty levels, in display order."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


@dataclass(frozen=True)
class ModuleRecord:
    """Read-only copy of one module's quiz-relevant fields."""

    id: str
    title: str
    description: str = ""
    content_url: str = ""
    duration: str = ""
    difficulty: str = ""

    @classmethod
    def from_row(cls, row: Module) -> ModuleRecord:
        return cls(
            id=row.id,
            title=row.title,
            description=row.description or "",
            content_url=row.content_url or "",
            duration=row.duration or "",
            difficulty=row.difficulty or "",
        )


class ModuleCatalog:
    """Ordered, immutable sequence of modules (creation order)."""

    __slots__ = ("_modules", "_index")

    def __init__(self, modules: Iterable[ModuleRecord] = ()):
        self._modules: tuple[ModuleRecord, ...] = tuple(modules)
        self._index: dict[str, int] = {}
        for position, module in enumerate(self._modules):
            self._index.setdefault(module.id, position)

    @classmethod
    def from_rows(cls, rows: Iterable[Module]) -> ModuleCatalog:
        return cls(ModuleRecord.from_row(row) for row in rows)

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[ModuleRecord]:
        return iter(self._modules)

    def __getitem__(self, position: int) -> ModuleRecord:
        return self._modules[position]

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleCatalog):
            return NotImplemented
        return self._modules == other._modules

    def __hash__(self) -> int:
        return hash(self._modules)

    def __repr__(self) -> str:
        return f"ModuleCatalog({len(self._modules)} modules)"

    def index_of(self, module_id: str) -> int:
        """Position of a module in the catalog; raises NotFoundError if absent."""
        try:
            return self._index[module_id]
        except KeyError:
            raise NotFoundError("Module not found") from None

    def get(self, module_id: str) -> ModuleRecord:
        return self._modules[self.index_of(module_id)]

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(module.id for module in self._modules)
