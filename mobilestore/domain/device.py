"""Device value type and identifier matching policy."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class IdentifierMatch(str, Enum):
    """How a lookup identifier is compared to stored identifiers."""

    SUBSTRING = "substring"
    EXACT = "exact"

    @classmethod
    def parse(cls, value: str | None) -> "IdentifierMatch":
        normalized = (value or "").strip().lower()
        if not normalized:
            return cls.SUBSTRING
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"unknown identifier match policy {value!r} (use 'substring' or 'exact')"
            ) from None

    def matches(self, stored: str | None, needle: str) -> bool:
        """Return True when ``stored`` satisfies the policy for ``needle``.

        A missing identifier compares as "", so under SUBSTRING an empty
        needle matches every record.
        """
        stored = stored or ""
        if self is IdentifierMatch.EXACT:
            return stored == needle
        return needle in stored


@dataclass(frozen=True)
class Device:
    """Immutable snapshot of a stored device (or a value to be saved)."""

    identifier: str
    model: str

    @classmethod
    def from_record(cls, record: Any) -> "Device":
        return cls(
            identifier=getattr(record, "identifier", None) or "",
            model=getattr(record, "model", None) or "",
        )

    @property
    def label(self) -> str:
        return f"{self.model} - {self.identifier}"
