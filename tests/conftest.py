"""Shared fixtures for ksum tests."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest

from ksum.config import KsumConfig

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_INPUT = b"1721\n979\n366\n299\n675\n1456\n"


@pytest.fixture
def sample_bytes() -> bytes:
    return SAMPLE_INPUT


@pytest.fixture
def sample_source() -> io.BytesIO:
    """A fresh binary source over the sample input."""
    return io.BytesIO(SAMPLE_INPUT)


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """The sample input written to disk."""
    f = tmp_path / "input.txt"
    f.write_bytes(SAMPLE_INPUT)
    return f


@pytest.fixture
def config() -> KsumConfig:
    return KsumConfig()
