"""
Catalog module: the ordered set of content modules.

This module provides:
- ModuleCatalog / ModuleRecord: immutable snapshot used for quiz generation
- CatalogService: admin create/edit/delete with completion cascade
"""

from .service import CatalogService
from .snapshot import Difficulty, ModuleCatalog, ModuleRecord

__all__ = [
    "CatalogService",
    "Difficulty",
    "ModuleCatalog",
    "ModuleRecord",
]
