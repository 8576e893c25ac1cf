"""Line-oriented input pipeline.

Turns a line-buffered byte (or text) source into a lazy sequence of
``LineResult`` items, one per input line, each carrying either a typed value
or a line-scoped error with its 1-based line number.

The sequence is single-pass and forward-only. Nothing is skipped: a bad line
yields an error result and the caller decides what to do with it.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import IO, TYPE_CHECKING, AnyStr, TypeVar

from ksum.exceptions import LineError, LineErrorGroup, LineParseError, LineReadError
from ksum.types import LineResult

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

__all__ = [
    "ErrorPolicy",
    "drain",
    "iter_values",
    "parse_int",
    "parse_values",
    "read_lines",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

ENCODING = "utf-8"

# Optional sign followed by ASCII digits, nothing else
_INT_RE = re.compile(r"[+-]?[0-9]+")


class ErrorPolicy(str, Enum):
    """How a consumer reacts to line errors while draining results."""

    FAIL_FAST = "fail_fast"
    COLLECT = "collect"


def read_lines(
    source: IO[AnyStr],
    transform: Callable[[int, str], R],
) -> Iterator[LineResult[R]]:
    """Read ``source`` line by line and apply ``transform`` to each line.

    Args:
        source: Object with a ``readline()`` returning ``bytes`` or ``str``.
        transform: Called as ``transform(index, text)`` with the 0-based line
            index and the line text without its terminator. Any exception it
            raises is reported as a ``LineParseError`` for that line.

    Yields:
        One ``LineResult`` per line. A trailing newline at end of input does
        not produce an extra record.
    """
    index = 0
    while True:
        line_number = index + 1
        try:
            raw = source.readline()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Read failed on line %d: %s", line_number, e)
            yield LineResult(line_number=line_number, error=LineReadError(line_number, e))
            # The source is in an unknown state after a failed read
            return

        if not raw:
            logger.debug("End of input after %d line(s)", index)
            return

        try:
            text = _decode(raw)
        except UnicodeDecodeError as e:
            yield LineResult(line_number=line_number, error=LineReadError(line_number, e))
            index += 1
            continue

        try:
            value = transform(index, _strip_terminator(text))
        except LineError as e:
            yield LineResult(line_number=line_number, error=e)
        except Exception as e:
            yield LineResult(line_number=line_number, error=LineParseError(line_number, e))
        else:
            yield LineResult(line_number=line_number, value=value)

        index += 1


def parse_int(text: str) -> int:
    """Convert a strict decimal integer literal.

    Unlike ``int()``, surrounding whitespace, ``_`` separators and non-ASCII
    digits are rejected.

    Raises:
        ValueError: If ``text`` is not an optional sign followed by digits.
    """
    if _INT_RE.fullmatch(text) is None:
        raise ValueError(f"invalid integer literal: {text!r}")
    return int(text)


def parse_values(
    source: IO[AnyStr],
    value_type: Callable[[str], T] = parse_int,  # type: ignore[assignment]
) -> Iterator[LineResult[T]]:
    """Parse one ``value_type`` literal per line of ``source``."""
    return read_lines(source, lambda _index, text: value_type(text))


def iter_values(results: Iterable[LineResult[T]]) -> Iterator[T]:
    """Lazily unwrap results, raising the first line error reached."""
    for result in results:
        yield result.unwrap()


def drain(
    results: Iterable[LineResult[T]],
    policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
) -> list[T]:
    """Consume ``results`` into a list of values.

    Args:
        results: Sequence produced by :func:`read_lines` or :func:`parse_values`.
        policy: ``FAIL_FAST`` raises the first ``LineError`` as soon as it is
            reached. ``COLLECT`` reads to the end and then raises a
            ``LineErrorGroup`` with every error in line order.

    Raises:
        LineError: First bad line under ``FAIL_FAST``.
        LineErrorGroup: All bad lines under ``COLLECT``.
    """
    if policy is ErrorPolicy.FAIL_FAST:
        return list(iter_values(results))

    values: list[T] = []
    errors: list[LineError] = []
    for result in results:
        if result.error is not None:
            errors.append(result.error)
        else:
            values.append(result.value)  # type: ignore[arg-type]

    if errors:
        logger.warning("Collected %d line error(s)", len(errors))
        raise LineErrorGroup(errors)
    return values


# ── Module-level helpers ────────────────────────────────────────────


def _decode(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        return raw.decode(ENCODING)
    return raw


def _strip_terminator(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text
