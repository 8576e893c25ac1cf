"""ksum — complement-sum search over line-delimited numeric input."""

__version__ = "0.1.0"
