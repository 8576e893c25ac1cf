"""Data contracts for ksum.

Frozen dataclasses that flow between stages:
  source → LineResult → values → Match | None
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from ksum.exceptions import LineError

__all__ = [
    "LineResult",
    "Match",
]

T = TypeVar("T")


@dataclass(frozen=True)
class LineResult(Generic[T]):
    """Outcome of reading one input line: a value or a line-scoped error."""

    line_number: int
    value: T | None = None
    error: LineError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the parsed value, raising the line's error if it has one."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


@dataclass(frozen=True)
class Match:
    """Values found by a search, in the order the search matched them."""

    values: tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.values)

    @property
    def total(self) -> int:
        return sum(self.values)

    @property
    def product(self) -> int:
        return math.prod(self.values)
