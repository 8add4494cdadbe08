"""Parse taxonomy trees from pre-loaded data-service payloads."""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from domain.taxonomy.models import Continent, Sector

_CONTINENTS = TypeAdapter(list[Continent])
_SECTORS = TypeAdapter(list[Sector])


def _roots(data: dict[str, Any] | list[Any], key: str) -> list[Any]:
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        raise ValueError(f"Taxonomy payload must be a mapping or a list, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"Taxonomy payload missing required key: {key}")
    roots = data[key] or []
    if not isinstance(roots, list):
        raise ValueError(f"{key} must be a list")
    return roots


def parse_geography(data: dict[str, Any] | list[Any]) -> list[Continent]:
    """
    Parse a geography payload (`{"continents": [...]}` or the bare list) into typed nodes.

    This is a pure function - it does NOT perform file I/O.
    Child keys follow the data service: `regions`, then `subRegions`. A continent may
    also carry `subRegions` directly and a sub-region may nest further sub-regions;
    a key broader than the node itself is rejected.

    Raises:
        ValueError: If the payload shape is wrong, a node is missing id/name, or a node
            carries a child collection broader than itself
    """
    roots = _roots(data, "continents")
    try:
        return _CONTINENTS.validate_python(roots)
    except ValidationError as e:
        raise ValueError(f"Invalid geography taxonomy: {e}") from e


def parse_industry(data: dict[str, Any] | list[Any]) -> list[Sector]:
    """
    Parse an industry payload (`{"sectors": [...]}` or the bare list) into typed nodes.

    Child keys follow the data service: `industryGroups`, `industries`, `subIndustries`.
    A node may also carry any deeper collection directly; children come back broader
    level first. A key broader than the node itself is rejected.

    Raises:
        ValueError: If the payload shape is wrong, a node is missing id/name, or a node
            carries a child collection broader than itself
    """
    roots = _roots(data, "sectors")
    try:
        return _SECTORS.validate_python(roots)
    except ValidationError as e:
        raise ValueError(f"Invalid industry taxonomy: {e}") from e
