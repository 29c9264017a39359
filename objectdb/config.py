"""Application configuration with YAML + env vars + CLI override support."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from objectdb.infrastructure.storage.index_storage import VALID_LAYOUTS

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    mode: str = "stdio"  # stdio | sse | streamable-http
    port: int = 8080
    verbose: bool = False


@dataclass
class IndexConfig:
    source: str = ""
    layout: str = "tree"  # tree | flat


@dataclass
class SearchConfig:
    default_limit: int = 10
    max_limit: int = 50


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    index: IndexConfig = field(default_factory=IndexConfig)
    search: SearchConfig = field(default_factory=SearchConfig)


ENV_PREFIX = "OBJECTDB_"

SERVER_MODES = ("stdio", "sse", "streamable-http")

_TRUE_VALUES = ("true", "1", "yes", "on")


def _field_locations() -> dict[str, str]:
    """Field name -> section name. Field names are unique across sections."""
    config = AppConfig()
    return {f.name: section.name for section in fields(config) for f in fields(getattr(config, section.name))}


def load_config(
    config_path: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load configuration with priority: YAML < env vars < CLI overrides.

    Every field can come from the environment as ``OBJECTDB_<FIELD>``, e.g.
    ``OBJECTDB_SOURCE`` or ``OBJECTDB_MAX_LIMIT``. The merged result is
    validated; an unknown layout or mode, or inconsistent limits, raise
    ``ValueError``.

    Args:
        config_path: Path to YAML config file. None to skip.
        cli_overrides: Dict of CLI overrides in format {"section.field": value}.
            None values are skipped (means CLI option was not provided).
    """
    config = AppConfig()

    if config_path:
        for section, name, value in _read_yaml(config_path):
            _set(config, section, name, value)

    locations = _field_locations()
    for name, section in locations.items():
        value = os.environ.get(ENV_PREFIX + name.upper())
        if value is not None:
            _set(config, section, name, value)

    for key, value in (cli_overrides or {}).items():
        section, _, name = key.partition(".")
        if value is not None and locations.get(name) == section:
            _set(config, section, name, value)

    _validate(config)
    return config


def _read_yaml(config_path: str) -> list[tuple[str, str, Any]]:
    path = Path(config_path)
    if not path.is_file():
        logger.warning("Config file not found: %s, using defaults", config_path)
        return []

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        logger.warning("Config file is not a valid YAML mapping: %s", config_path)
        return []

    values: list[tuple[str, str, Any]] = []
    for section, section_data in data.items():
        if not isinstance(section_data, dict):
            logger.debug("Skipping config section: %s", section)
            continue
        values.extend((section, name, value) for name, value in section_data.items() if value is not None)

    logger.info("Loaded config from %s", config_path)
    return values


def _set(config: AppConfig, section_name: str, field_name: str, value: Any) -> None:
    """Set ``section.field``, converting ``value`` to the type of the field's default."""
    section = getattr(config, section_name, None)
    if section is None or field_name not in {f.name for f in fields(section)}:
        logger.debug("Unknown config field: %s.%s", section_name, field_name)
        return
    setattr(section, field_name, _coerce(value, type(getattr(section, field_name))))


def _coerce(value: Any, kind: type) -> Any:
    if kind is bool:
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_VALUES
        return bool(value)
    if kind is int:
        return int(value)
    return str(value)


def _validate(config: AppConfig) -> None:
    if config.index.layout not in VALID_LAYOUTS:
        raise ValueError(
            f"Unknown index layout: '{config.index.layout}'. Use: {', '.join(sorted(VALID_LAYOUTS))}"
        )
    if config.server.mode not in SERVER_MODES:
        raise ValueError(f"Unknown server mode: '{config.server.mode}'. Use: {', '.join(SERVER_MODES)}")
    if not 1 <= config.search.default_limit <= config.search.max_limit:
        raise ValueError(
            f"search.default_limit must be between 1 and search.max_limit, "
            f"got {config.search.default_limit} with max {config.search.max_limit}"
        )
