"""Configuration loader for apibake.

Loads a JSON style configuration and returns a validated ApiBakeConfig.
Uses module-level caching so each file is only parsed once per process.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from apibake.config.models import ApiBakeConfig
from apibake.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "apibake-config.json"

# Module-level cache
_config_cache: dict[str, ApiBakeConfig] = {}


def parse_config(raw: Mapping[str, Any]) -> ApiBakeConfig:
    """Validate an already decoded configuration mapping.

    Raises
    ------
    ConfigurationError
        If the mapping has unknown keys or malformed values.
    """
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"Configuration must be a JSON object, got {type(raw).__name__}"
        )
    try:
        return ApiBakeConfig.model_validate(dict(raw))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc


def load_config(path: Optional[Path] = None) -> ApiBakeConfig:
    """Load and validate a configuration file.

    Parameters
    ----------
    path : Path | None
        Path to a JSON config file. If ``None``, the built-in defaults
        are returned.

    Raises
    ------
    ConfigurationError
        If the file is missing, is not valid JSON, or fails validation.
    """
    if path is None:
        return get_config()

    config_path = Path(path)
    cache_key = str(config_path.resolve())
    if cache_key in _config_cache:
        return _config_cache[cache_key]

    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Error in {config_path}: {exc}") from exc

    config = parse_config(raw)
    logger.debug("Loaded configuration from %s", config_path)
    _config_cache[cache_key] = config
    return config


def get_config() -> ApiBakeConfig:
    """Get the default configuration (cached)."""
    if "" not in _config_cache:
        _config_cache[""] = ApiBakeConfig()
    return _config_cache[""]


def export_config(path: Path, config: Optional[ApiBakeConfig] = None) -> Path:
    """Write *config* (defaults when ``None``) as editable JSON to *path*."""
    path = Path(path)
    path.write_text((config or get_config()).to_json() + "\n", encoding="utf-8")
    logger.info("Configuration exported into %s", path)
    return path


def clear_cache() -> None:
    """Clear the config cache (used by tests)."""
    _config_cache.clear()
