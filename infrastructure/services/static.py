"""Taxonomy service backed by YAML files or in-memory payloads."""

import asyncio
import logging
from pathlib import Path
from typing import Any

from domain.taxonomy.loader import parse_geography, parse_industry
from domain.taxonomy.models import Continent, Sector
from infrastructure.config.loader import load_geography_file, load_industry_file
from infrastructure.config.models import EngineConfig
from infrastructure.services.base import TaxonomyService

logger = logging.getLogger(__name__)


class StaticTaxonomyService(TaxonomyService):
    """
    Serve taxonomy trees from files on disk (read on each fetch) or from raw
    data-service payloads held in memory.
    """

    def __init__(
        self,
        *,
        geography_file: Path | None = None,
        industry_file: Path | None = None,
        geography_data: dict[str, Any] | list[Any] | None = None,
        industry_data: dict[str, Any] | list[Any] | None = None,
    ) -> None:
        if geography_file is None and geography_data is None:
            raise ValueError("Provide geography_file or geography_data")
        if industry_file is None and industry_data is None:
            raise ValueError("Provide industry_file or industry_data")
        self.geography_file = geography_file
        self.industry_file = industry_file
        self.geography_data = geography_data
        self.industry_data = industry_data

    @classmethod
    def from_config(cls, cfg: EngineConfig) -> "StaticTaxonomyService":
        return cls(geography_file=cfg.geography_file, industry_file=cfg.industry_file)

    async def fetch_geography(self) -> list[Continent]:
        if self.geography_data is not None:
            return parse_geography(self.geography_data)
        logger.debug("Reading geography taxonomy from %s", self.geography_file)
        return await asyncio.to_thread(load_geography_file, self.geography_file)

    async def fetch_industry(self) -> list[Sector]:
        if self.industry_data is not None:
            return parse_industry(self.industry_data)
        logger.debug("Reading industry taxonomy from %s", self.industry_file)
        return await asyncio.to_thread(load_industry_file, self.industry_file)
