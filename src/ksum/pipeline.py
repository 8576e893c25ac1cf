"""Pipeline orchestrator for ksum.

Composes line parser → value drain → complement-sum search, driven by an
injected ``KsumConfig``.
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING, AnyStr

from ksum.engine import find_pair, get_search
from ksum.exceptions import KsumError, PipelineError
from ksum.ingest.lines import ErrorPolicy, drain, iter_values, parse_values

if TYPE_CHECKING:
    from ksum.config import KsumConfig
    from ksum.types import Match

__all__ = ["SearchPipeline"]

logger = logging.getLogger(__name__)


class SearchPipeline:
    """Runs one complement-sum search over a line-delimited source.

    Under the fail-fast policy, pair search streams the input and stops
    reading at the first match. Otherwise the whole input is buffered first,
    applying the configured error policy while draining it.

    Usage::

        pipeline = SearchPipeline(config)
        match = pipeline.run(sys.stdin.buffer)
        if match is not None:
            print(match.product)
    """

    def __init__(self, config: KsumConfig) -> None:
        self.config = config

    def run(self, source: IO[AnyStr]) -> Match | None:
        """Parse ``source`` and search it.

        Returns:
            The match, or ``None`` when the input holds no solution.

        Raises:
            LineError: A line failed to read or parse (fail-fast policy).
            LineErrorGroup: One or more lines failed (collect policy).
            SearchError: The configured size is unsupported.
            PipelineError: Any other failure.
        """
        size = self.config.search.size
        target = self.config.search.target
        try:
            search = get_search(size)
            logger.info("Searching for %d values summing to %d", size, target)

            policy = self.config.input.policy
            results = parse_values(source)
            if search is find_pair and policy is ErrorPolicy.FAIL_FAST:
                match = find_pair(iter_values(results), target)
            else:
                values = drain(results, policy)
                logger.info("Read %d values", len(values))
                match = search(values, target)

            if match is None:
                logger.info("No solution found")
            else:
                logger.info("Found %s (product %d)", match.values, match.product)
            return match

        except KsumError:
            raise
        except Exception as e:
            raise PipelineError(f"Search failed: {e}") from e
