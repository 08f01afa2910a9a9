"""Exceptions raised by the memory game engine and its collaborators."""

from __future__ import annotations


class RecallError(Exception):
    """Base class for game errors surfaced to callers."""


class InsufficientCatalogSize(RecallError):
    """Raised when the catalog cannot supply a full target list."""

    def __init__(self, catalog_size: int, list_length: int) -> None:
        super().__init__(
            f"Catalog holds {catalog_size} item(s) but the list needs {list_length}."
        )
        self.catalog_size = catalog_size
        self.list_length = list_length


class InvalidSettings(RecallError):
    """Raised when a settings update falls outside the allowed bounds."""


class PersistenceFailure(RecallError):
    """Raised by persistence adapters when a load or save does not go through."""
