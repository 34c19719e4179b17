"""Configuration hierarchy: merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.fscache/config.yaml)
  3. Project config   (./fscache.yaml, searched upward from the cwd)
  4. Environment variables (FSCACHE_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from fscache.config.defaults import get_defaults
from fscache.config.schema import CacheConfig

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".fscache" / "config.yaml"
_PROJECT_CONFIG_NAME = "fscache.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "FSCACHE_ENCODING": "encoding",
    "FSCACHE_CHUNK_SIZE": "chunk_size",
    "FSCACHE_WATCH": "watch",
    "FSCACHE_LOG_LEVEL": "log_level",
}

# Keys parsed as int or bool; everything else stays a string
_INT_KEYS = {"chunk_size"}
_BOOL_KEYS = {"watch"}

# Boolean env var values
_TRUTHY = {"1", "true", "yes", "on"}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()

    # Layer 2: Global config
    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        config.update(global_cfg)

    # Layer 3: Project config (search from cwd upward)
    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            config.update(project_cfg)

    # Layer 4: Environment variables
    config.update(_load_env_vars())

    # Layer 5: Runtime arguments; None means "not set"
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    return config


def load_cache_config(**runtime_overrides: Any) -> CacheConfig:
    """Resolve the hierarchy and validate it into a CacheConfig."""
    return CacheConfig.from_mapping(load_config_hierarchy(**runtime_overrides))


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for fscache.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read FSCACHE_* environment variables."""
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type."""
    if key in _BOOL_KEYS:
        return value.strip().lower() in _TRUTHY

    if key in _INT_KEYS:
        try:
            return int(value)
        except ValueError:
            logger.warning("Cannot convert env var for '%s' to int: %s", key, value)
            return value

    return value
