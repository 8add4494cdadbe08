"""Base interfaces for the external taxonomy and submission services."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from domain.payload import SubmissionPayload
from domain.taxonomy.models import Continent, Sector


class TaxonomyService(ABC):
    """
    Source of the geography and industry trees.

    Both fetches take no arguments and return a fully-formed tree or raise;
    partial results are never returned.
    """

    @abstractmethod
    async def fetch_geography(self) -> list[Continent]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_industry(self) -> list[Sector]:
        raise NotImplementedError


class SubmissionReceipt(BaseModel):
    """What the submission service reports back on success."""

    deal_id: str
    message: str = "Your deal has been submitted successfully."
    received_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SubmissionService(ABC):
    """
    Receiver of assembled listings.

    Implementations raise with a descriptive message on failure; the engine wraps
    that into a SubmissionError.
    """

    @abstractmethod
    async def submit_deal(self, payload: SubmissionPayload) -> SubmissionReceipt:
        raise NotImplementedError
