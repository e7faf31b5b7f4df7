from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Generic, Optional, Tuple, TypeVar


T = TypeVar("T")

RECORD_FIELDS = ("threshold", "vibrance", "saturation")


@dataclass(frozen=True)
class AdjustmentRecord:
    """Adjustment values found on one layer; None means not found."""

    threshold: Optional[int] = None
    vibrance: Optional[int] = None
    saturation: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def as_dict(self) -> Dict[str, int]:
        """Populated fields only."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def fill_missing(self, other: "AdjustmentRecord") -> "AdjustmentRecord":
        """Return a record where fields absent here are taken from `other`."""
        merged = {
            f.name: getattr(self, f.name)
            if getattr(self, f.name) is not None
            else getattr(other, f.name)
            for f in fields(self)
        }
        return AdjustmentRecord(**merged)


@dataclass(frozen=True)
class Extraction(Generic[T]):
    """Internal lookup result: a value (or None) plus every error swallowed on the way."""

    value: Optional[T] = None
    errors: Tuple[Exception, ...] = ()

    @property
    def found(self) -> bool:
        return self.value is not None

    @classmethod
    def absent(cls, *errors: Exception) -> "Extraction[T]":
        return cls(None, tuple(errors))

    def with_errors(self, *errors: Exception) -> "Extraction[T]":
        return Extraction(self.value, self.errors + tuple(errors))
