"""
Taxonomy handling: typed geography/industry trees, flattening, search.

All functions in this module are pure (no file I/O).
"""

from domain.taxonomy.flatten import PATH_SEPARATOR, find_duplicate_ids, flatten
from domain.taxonomy.index import TaxonomyIndex, build_lookup, resolve_names, search
from domain.taxonomy.loader import parse_geography, parse_industry
from domain.taxonomy.models import (
    Continent,
    FlatEntry,
    GeographyNode,
    Industry,
    IndustryGroup,
    IndustryNode,
    Region,
    Sector,
    SubIndustry,
    SubRegion,
    TaxonomyNode,
)

__all__ = [
    # Node variants
    "TaxonomyNode",
    "Continent",
    "Region",
    "SubRegion",
    "Sector",
    "IndustryGroup",
    "Industry",
    "SubIndustry",
    "GeographyNode",
    "IndustryNode",
    # Flat projection
    "FlatEntry",
    "PATH_SEPARATOR",
    "flatten",
    "find_duplicate_ids",
    # Search / resolution
    "TaxonomyIndex",
    "search",
    "build_lookup",
    "resolve_names",
    # Parsing
    "parse_geography",
    "parse_industry",
]
