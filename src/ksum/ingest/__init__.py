"""Input pipeline — line readers for numeric record streams."""

from ksum.ingest.lines import (
    ErrorPolicy,
    drain,
    iter_values,
    parse_int,
    parse_values,
    read_lines,
)

__all__ = [
    "ErrorPolicy",
    "drain",
    "iter_values",
    "parse_int",
    "parse_values",
    "read_lines",
]
