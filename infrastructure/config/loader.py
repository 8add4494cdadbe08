"""Configuration loading from YAML files."""

from pathlib import Path
from typing import Any

import yaml

from domain.payload import DealDefaults
from domain.taxonomy.loader import parse_geography, parse_industry
from domain.taxonomy.models import Continent, Sector
from infrastructure.config.models import EngineConfig
from infrastructure.constants import GEOGRAPHY_FILENAME, INDUSTRY_FILENAME, TAXONOMY_DIR


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def load_geography_file(path: Path) -> list[Continent]:
    """
    Load the geography taxonomy from YAML.

    This function handles file I/O, then delegates parsing to domain layer.
    """
    return parse_geography(_load_yaml(path))


def load_industry_file(path: Path) -> list[Sector]:
    """
    Load the industry taxonomy from YAML.

    This function handles file I/O, then delegates parsing to domain layer.
    """
    return parse_industry(_load_yaml(path))


def load_form_answers(path: Path) -> dict[str, Any]:
    """Load a recorded form answers file (field name -> value)."""
    return _load_yaml(path)


def load_engine_config(path: Path) -> EngineConfig:
    """
    Load engine.yaml and construct a fully-resolved EngineConfig.

    Relative taxonomy file names resolve against `taxonomy_dir`
    (default: configs/taxonomy).
    """
    raw = _load_yaml(path)

    taxonomy_dir = Path(raw.get("taxonomy_dir", str(TAXONOMY_DIR)))
    geography_file = Path(raw.get("geography_file", GEOGRAPHY_FILENAME))
    industry_file = Path(raw.get("industry_file", INDUSTRY_FILENAME))

    deal_defaults = raw.get("deal_defaults") or {}
    if not isinstance(deal_defaults, dict):
        raise ValueError(f"deal_defaults must be a mapping in {path}")

    kwargs: dict[str, Any] = {}
    if "max_document_bytes" in raw:
        kwargs["max_document_bytes"] = raw["max_document_bytes"]
    if "default_currency" in raw:
        kwargs["default_currency"] = raw["default_currency"]

    return EngineConfig(
        geography_file=geography_file if geography_file.is_absolute() else taxonomy_dir / geography_file,
        industry_file=industry_file if industry_file.is_absolute() else taxonomy_dir / industry_file,
        deal_defaults=DealDefaults(**deal_defaults),
        **kwargs,
    )
