"""Configuration system for ksum.

Reads and writes ``ksum.toml`` with typed dataclasses and defaults for every
value. Command-line flags are applied on top of the loaded config.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

import tomli_w

if sys.version_info >= (3, 12):
    import tomllib
else:
    import tomli as tomllib

from ksum.engine import DEFAULT_TARGET, SUPPORTED_SIZES
from ksum.exceptions import ConfigError
from ksum.ingest.lines import ErrorPolicy

if TYPE_CHECKING:
    from pathlib import Path

_T = TypeVar("_T")

__all__ = [
    "CONFIG_FILE",
    "InputConfig",
    "KsumConfig",
    "ReportConfig",
    "SearchConfig",
    "default_config",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "ksum.toml"


@dataclass
class SearchConfig:
    """[search] section."""

    target: int = DEFAULT_TARGET
    size: int = 2


@dataclass
class InputConfig:
    """[input] section."""

    on_error: str = ErrorPolicy.FAIL_FAST.value

    @property
    def policy(self) -> ErrorPolicy:
        return ErrorPolicy(self.on_error)


@dataclass
class ReportConfig:
    """[report] section."""

    measure_duration: bool = False


@dataclass
class KsumConfig:
    """Root configuration combining all sections."""

    search: SearchConfig = field(default_factory=SearchConfig)
    input: InputConfig = field(default_factory=InputConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


_SECTION_MAP: dict[str, type] = {
    "search": SearchConfig,
    "input": InputConfig,
    "report": ReportConfig,
}


def default_config() -> KsumConfig:
    """Return a config with all default values."""
    return KsumConfig()


def validate_config(config: KsumConfig) -> None:
    """Check value ranges that TOML types alone cannot express.

    Raises:
        ConfigError: If a value is out of range.
    """
    if isinstance(config.search.target, bool) or not isinstance(config.search.target, int):
        raise ConfigError(f"search.target must be an integer, got {config.search.target!r}")
    if not isinstance(config.report.measure_duration, bool):
        raise ConfigError(
            "report.measure_duration must be true or false, "
            f"got {config.report.measure_duration!r}"
        )
    if config.search.size not in SUPPORTED_SIZES:
        raise ConfigError(
            f"search.size must be one of {list(SUPPORTED_SIZES)}, got {config.search.size!r}"
        )
    valid_policies = [p.value for p in ErrorPolicy]
    if config.input.on_error not in valid_policies:
        raise ConfigError(
            f"input.on_error must be one of {valid_policies}, got {config.input.on_error!r}"
        )


def _config_to_dict(config: KsumConfig) -> dict[str, object]:
    """Convert KsumConfig to a nested dict suitable for TOML serialization."""
    return {name: dict(vars(getattr(config, name))) for name in _SECTION_MAP}


def save_config(config: KsumConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)
    try:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", path)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


def _load_section(cls: type[_T], data: object) -> _T:
    """Load a dataclass section from a dict, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"Section for {cls.__name__} must be a table, got {data!r}")
    known_fields = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
    filtered = {k: v for k, v in data.items() if k in known_fields}
    return cls(**filtered)


def load_config(path: Path) -> KsumConfig:
    """Load configuration from a TOML file.

    Missing sections or keys get default values.

    Raises:
        ConfigError: If the file is missing, unreadable, malformed, or invalid.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    config = KsumConfig()
    for name, cls in _SECTION_MAP.items():
        if name in data:
            setattr(config, name, _load_section(cls, data[name]))

    validate_config(config)
    logger.info("Loaded config from %s", path)
    return config
