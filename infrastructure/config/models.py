"""Configuration models (Pydantic classes)."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from domain.form import MAX_DOCUMENT_BYTES, Currency
from domain.payload import DealDefaults
from infrastructure.constants import GEOGRAPHY_FILENAME, INDUSTRY_FILENAME, TAXONOMY_DIR


class EngineConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from engine.yaml
    - Paths resolved by the configuration loader
    - Consumed by the taxonomy service and the listing engine
    """

    geography_file: Path = Field(
        default_factory=lambda: TAXONOMY_DIR / GEOGRAPHY_FILENAME,
        description="Geography taxonomy file (YAML, `continents` root key).",
    )
    industry_file: Path = Field(
        default_factory=lambda: TAXONOMY_DIR / INDUSTRY_FILENAME,
        description="Industry taxonomy file (YAML, `sectors` root key).",
    )

    max_document_bytes: int = Field(
        default=MAX_DOCUMENT_BYTES,
        gt=0,
        description="Per-file attachment limit in bytes.",
    )
    default_currency: Currency = "USD($)"

    deal_defaults: DealDefaults = Field(default_factory=DealDefaults)

    @model_validator(mode="after")
    def _validate(self) -> "EngineConfig":
        if self.geography_file == self.industry_file:
            raise ValueError("geography_file and industry_file must point to different files")
        return self
