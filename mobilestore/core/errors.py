"""Errors surfaced by the store adapter and the device repository."""
from __future__ import annotations


class StorageError(Exception):
    """Base class for storage failures."""


class PersistenceError(StorageError):
    """A commit (or, in strict mode, a fetch) failed; pending changes were rolled back."""


class NotFoundError(StorageError, LookupError):
    """No stored record matches the requested device identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"no stored device matches identifier {identifier!r}")
        self.identifier = identifier
