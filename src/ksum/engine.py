"""Complement-sum search engine.

Finds k values (k = 2 or 3) whose sum equals a target, using a complement map
instead of brute force:

* Pair search: for each value ``v``, look ``v`` up in the map. A hit means an
  earlier value needed exactly ``v``, so the pair is found. Otherwise record
  ``target - v -> v`` and move on. One forward pass, O(n).
* Triple search: materialize the input, then for each outer value ``a`` run
  the pair search over the entire collection with target ``target - a``.
  The map is rebuilt for every outer value. O(n^2) time, O(n) space.

The lookup always happens before the insert, so a value can only pair with a
value seen strictly earlier in the scan.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ksum.exceptions import SearchError
from ksum.types import Match

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

__all__ = [
    "DEFAULT_TARGET",
    "SUPPORTED_SIZES",
    "find_ksum",
    "find_pair",
    "find_triple",
    "get_search",
]

logger = logging.getLogger(__name__)

DEFAULT_TARGET: int = 2020


def find_pair(values: Iterable[int], target: int = DEFAULT_TARGET) -> Match | None:
    """Return the first pair in scan order summing to ``target``.

    ``values`` is consumed lazily and only as far as the first match.

    Returns:
        ``Match((v, other))`` where ``v`` is the later value in the input, or
        ``None`` if the input is exhausted without a match.
    """
    complements: dict[int, int] = {}

    for value in values:
        other = complements.get(value)
        if other is not None:
            return Match((value, other))
        complements[target - value] = value

    return None


def find_triple(values: Iterable[int], target: int = DEFAULT_TARGET) -> Match | None:
    """Return the first triple summing to ``target``.

    Outer iteration order decides which first value is tried first; the inner
    pair search scans the entire collection, outer value included, and keeps
    its own first-match order.

    Returns:
        ``Match((a, b, c))`` or ``None`` if no triple exists.
    """
    ints = list(values)
    logger.debug("Triple search over %d values", len(ints))

    for first in ints:
        reduced = target - first
        pair = find_pair(ints, reduced)
        if pair is not None:
            return Match((target - reduced, *pair.values))

    return None


_SEARCH_MAP: dict[int, Callable[[Iterable[int], int], Match | None]] = {
    2: find_pair,
    3: find_triple,
}

SUPPORTED_SIZES: tuple[int, ...] = tuple(sorted(_SEARCH_MAP))


def get_search(size: int) -> Callable[[Iterable[int], int], Match | None]:
    """Return the search function for tuples of ``size`` values.

    Raises:
        SearchError: If no search exists for ``size``.
    """
    search = _SEARCH_MAP.get(size)
    if search is None:
        raise SearchError(f"Unsupported tuple size {size!r}. Supported: {list(SUPPORTED_SIZES)}")
    return search


def find_ksum(
    values: Iterable[int],
    size: int,
    target: int = DEFAULT_TARGET,
) -> Match | None:
    """Find ``size`` values from ``values`` summing to ``target``."""
    return get_search(size)(values, target)
