"""
Engine configuration.

Defaults are module constants; EngineConfig bundles them for scripts and
hosts that load overrides from a YAML file. The library itself never
installs log handlers: call configure_logging() from the entry point.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

# Nodes reported as "top" by degree centrality
TOP_N = 5

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Environment variable that overrides the configured log level
LOG_LEVEL_ENV = "SIMGRAPH_LOG_LEVEL"


@dataclass
class EngineConfig:
    """Configuration for scripts and hosts embedding the engine."""

    centrality_top_n: int = TOP_N
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT


def load_config(path: Path | str | None = None) -> EngineConfig:
    """
    Load configuration from a YAML mapping.

    Args:
        path: YAML file with EngineConfig field names as keys.
              None returns defaults.

    Returns:
        EngineConfig with file values over defaults and the
        SIMGRAPH_LOG_LEVEL environment variable over both

    Raises:
        ValueError: If the file is not a mapping or has unknown keys
    """
    values: dict = {}
    if path is not None:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        known = {field_.name for field_ in fields(EngineConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config key(s) in {path}: {', '.join(unknown)}")
        values.update(data)

    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        values["log_level"] = env_level

    config = EngineConfig(**values)
    if not isinstance(config.centrality_top_n, int) or config.centrality_top_n < 0:
        raise ValueError(
            f"centrality_top_n must be a non-negative integer, got {config.centrality_top_n!r}"
        )
    return config


def configure_logging(config: EngineConfig | None = None) -> None:
    """Install a root handler at the configured level."""
    config = config or EngineConfig()
    logging.basicConfig(level=config.log_level.upper(), format=config.log_format)
