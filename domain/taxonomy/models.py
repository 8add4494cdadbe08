"""Taxonomy node variants and the flat entry projection."""

from collections.abc import Sequence
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TaxonomyNode(BaseModel):
    """
    Common shape of every taxonomy node.

    Each concrete variant declares the typed child collections it may carry and
    exposes them through `children`, broader level first, so traversal never has to
    probe which collection key a node carries.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # wire keys of every child collection in this taxonomy, broadest first
    collection_keys: ClassVar[tuple[str, ...]] = ()

    id: str
    name: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: object) -> object:
        # the data service sometimes emits numeric ids
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @model_validator(mode="before")
    @classmethod
    def _reject_misplaced_children(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        accepted = {f.alias for f in cls.model_fields.values() if f.alias} | set(cls.model_fields)
        misplaced = [k for k in cls.collection_keys if data.get(k) and k not in accepted]
        if misplaced:
            raise ValueError(f"{cls.__name__} {data.get('id')!r} cannot carry {', '.join(misplaced)}")
        return data

    @property
    def children(self) -> Sequence["TaxonomyNode"]:
        return ()


# ---- Geography: continent -> region -> sub-region ----


class GeographyNode(TaxonomyNode):
    collection_keys: ClassVar[tuple[str, ...]] = ("regions", "subRegions")


class SubRegion(GeographyNode):
    kind: Literal["sub_region"] = "sub_region"
    sub_regions: tuple["SubRegion", ...] = Field(default=(), alias="subRegions")

    @property
    def children(self) -> Sequence["SubRegion"]:
        return self.sub_regions


class Region(GeographyNode):
    kind: Literal["region"] = "region"
    sub_regions: tuple[SubRegion, ...] = Field(default=(), alias="subRegions")

    @property
    def children(self) -> Sequence[SubRegion]:
        return self.sub_regions


class Continent(GeographyNode):
    kind: Literal["continent"] = "continent"
    regions: tuple[Region, ...] = ()
    sub_regions: tuple[SubRegion, ...] = Field(default=(), alias="subRegions")

    @property
    def children(self) -> Sequence[GeographyNode]:
        return (*self.regions, *self.sub_regions)


# ---- Industry: sector -> industry group -> industry -> sub-industry ----


class IndustryNode(TaxonomyNode):
    collection_keys: ClassVar[tuple[str, ...]] = ("industryGroups", "industries", "subIndustries")


class SubIndustry(IndustryNode):
    kind: Literal["sub_industry"] = "sub_industry"
    sub_industries: tuple["SubIndustry", ...] = Field(default=(), alias="subIndustries")

    @property
    def children(self) -> Sequence["SubIndustry"]:
        return self.sub_industries


class Industry(IndustryNode):
    kind: Literal["industry"] = "industry"
    sub_industries: tuple[SubIndustry, ...] = Field(default=(), alias="subIndustries")

    @property
    def children(self) -> Sequence[SubIndustry]:
        return self.sub_industries


class IndustryGroup(IndustryNode):
    kind: Literal["industry_group"] = "industry_group"
    industries: tuple[Industry, ...] = ()
    sub_industries: tuple[SubIndustry, ...] = Field(default=(), alias="subIndustries")

    @property
    def children(self) -> Sequence[IndustryNode]:
        return (*self.industries, *self.sub_industries)


class Sector(IndustryNode):
    kind: Literal["sector"] = "sector"
    industry_groups: tuple[IndustryGroup, ...] = Field(default=(), alias="industryGroups")
    industries: tuple[Industry, ...] = ()
    sub_industries: tuple[SubIndustry, ...] = Field(default=(), alias="subIndustries")

    @property
    def children(self) -> Sequence[IndustryNode]:
        return (*self.industry_groups, *self.industries, *self.sub_industries)


class FlatEntry(BaseModel):
    """One taxonomy node projected to (id, name, path) for flat search and selection."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    path: str  # ancestor names joined with " > ", root first, node itself last
