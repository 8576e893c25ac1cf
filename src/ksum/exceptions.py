"""Custom exception hierarchy for ksum."""

from __future__ import annotations

__all__ = [
    "ConfigError",
    "KsumError",
    "LineError",
    "LineErrorGroup",
    "LineParseError",
    "LineReadError",
    "PipelineError",
    "SearchError",
]


class KsumError(Exception):
    """Base exception for all ksum errors."""


class ConfigError(KsumError):
    """Raised when configuration loading or validation fails."""


class LineError(KsumError):
    """An error tied to a single input line.

    ``line_number`` is 1-based; ``cause`` is the underlying exception, if any.
    """

    kind = "Line error"

    def __init__(self, line_number: int, cause: BaseException | None = None) -> None:
        self.line_number = line_number
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{self.kind} on line {line_number}{detail}")


class LineReadError(LineError):
    """Raised when a line cannot be read or decoded from the source."""

    kind = "IO error while reading input"


class LineParseError(LineError):
    """Raised when a line's text cannot be converted to a value."""

    kind = "Parse error"


class LineErrorGroup(KsumError):
    """Raised when one or more line errors were collected from a full pass."""

    def __init__(self, errors: list[LineError]) -> None:
        self.errors = list(errors)
        lines = ", ".join(str(e.line_number) for e in self.errors)
        super().__init__(f"{len(self.errors)} invalid line(s): {lines}")


class SearchError(KsumError):
    """Raised when a search is requested with unsupported parameters."""


class PipelineError(KsumError):
    """Raised when pipeline orchestration fails."""
