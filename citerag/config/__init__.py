# citerag/config/__init__.py
"""Layered YAML configuration validated with pydantic."""

from citerag.config.loader import load_config, load_config_dict
from citerag.config.schema import CiteRagConfig

__all__ = ["CiteRagConfig", "load_config", "load_config_dict"]
