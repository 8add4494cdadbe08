"""
Configuration management: models, loading, and validation.

Handles:
- EngineConfig: taxonomy sources, attachment limit, listing defaults
- Taxonomy file loading from YAML
- Recorded form answers

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import (
    load_engine_config,
    load_form_answers,
    load_geography_file,
    load_industry_file,
)
from infrastructure.config.models import EngineConfig

__all__ = [
    # Main config (most commonly used)
    "EngineConfig",
    "load_engine_config",
    # Loaders
    "load_geography_file",
    "load_industry_file",
    "load_form_answers",
]
