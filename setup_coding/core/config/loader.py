"""
Configuration loader — reads the target environment file into models.

This is the primary entry point for loading configuration. It reads
YAML or TOML, validates against Pydantic schemas, and returns typed
domain objects.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import yaml

from setup_coding.core.models.environment import TargetEnvironment
from setup_coding.core.services.provision.data.recipes import KNOWN_TOOLS

logger = logging.getLogger(__name__)

_TOML_SUFFIXES = (".toml",)


class ConfigError(Exception):
    """Raised when the configuration is invalid or missing."""


def _parse(path: Path, raw: str) -> object:
    if path.suffix.lower() in _TOML_SUFFIXES:
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_environment(path: Path) -> TargetEnvironment:
    """Load and validate a target environment file.

    Args:
        path: Path to the config file (``.yml``, ``.yaml`` or ``.toml``).

    Returns:
        Validated TargetEnvironment model.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.info("reading file: %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    data = _parse(path, raw)

    # An empty file is a valid "nothing to do" config
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")

    try:
        environment = TargetEnvironment.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    unknown = [name for name in environment.tools if name not in KNOWN_TOOLS]
    if unknown:
        raise ConfigError(
            f"Unknown tool(s) in {path}: {', '.join(unknown)}. "
            f"Known tools: {', '.join(KNOWN_TOOLS)}"
        )

    logger.debug(
        "Loaded config with %d requested tools", len(environment.requested_tools()),
    )
    return environment
