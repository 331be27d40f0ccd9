# citerag/config/loader.py
"""
Layered configuration loading.

Merge strategy:
    1. Package defaults (citerag/config/default.yaml), always loaded
    2. User config (explicit path, else $CITERAG_CONFIG if set), overrides defaults
    3. Environment endpoint overrides (QDRANT_URL)

The merged dict is validated against CiteRagConfig. Any failure raises
ConfigurationError, so a misconfigured deployment stops before doing work.

Usage:
    from citerag.config.loader import load_config

    config = load_config()                  # defaults (+ $CITERAG_CONFIG)
    config = load_config("citerag.yaml")    # defaults + file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from citerag.config.schema import CiteRagConfig
from citerag.core.exceptions import ConfigurationError
from citerag.logging.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"
CONFIG_ENV_VAR = "CITERAG_CONFIG"
QDRANT_URL_ENV_VAR = "QDRANT_URL"


# =============================================================================
# Deep Merge
# =============================================================================


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries; ``override`` wins.

    Nested dicts are merged recursively, everything else is replaced.

    Examples:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


# =============================================================================
# Loading Functions
# =============================================================================


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML mapping from ``path``.

    Raises:
        ConfigurationError: If the file is missing, unparseable or not a mapping
    """
    p = Path(path)

    if not p.is_file():
        raise ConfigurationError(f"Config file not found: {p}")

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {p}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping: {p}")

    return data


def _resolve_user_path(path: Optional[Union[str, Path]]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else None


def load_config_dict(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load defaults merged with the user config and env overrides, unvalidated."""
    data = load_yaml(DEFAULT_CONFIG_PATH)

    user_path = _resolve_user_path(path)
    if user_path is not None:
        data = deep_merge(data, load_yaml(user_path))
        logger.debug(f"Merged user config from {user_path}")

    qdrant_url = os.getenv(QDRANT_URL_ENV_VAR)
    if qdrant_url:
        data = deep_merge(data, {"vector_db": {"url": qdrant_url}})

    return data


def load_config(path: Optional[Union[str, Path]] = None) -> CiteRagConfig:
    """
    Load and validate the full configuration.

    Raises:
        ConfigurationError: On any loading or validation failure
    """
    data = load_config_dict(path)

    try:
        return CiteRagConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "deep_merge",
    "load_yaml",
    "load_config_dict",
    "load_config",
]
