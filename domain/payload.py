"""Submission payload models and the form -> payload assembler."""

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.errors import (
    MissingDescriptionError,
    MissingGeographyError,
    MissingIndustryError,
    MissingTitleError,
)
from domain.form import CapitalAvailability, FormWorkingState, Number
from domain.selection import SelectionState
from domain.taxonomy.index import resolve_names
from domain.taxonomy.models import FlatEntry

logger = logging.getLogger(__name__)

CAPITAL_AVAILABILITY_PHRASES: dict[CapitalAvailability, str] = {
    "ready": "Ready to deploy immediately",
    "need-raise": "Need to raise",
}


class _WireModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class FinancialDetails(_WireModel):
    trailing_revenue_currency: str
    trailing_revenue_amount: Number
    trailing_ebitda_currency: str = Field(..., alias="trailingEBITDACurrency")
    trailing_ebitda_amount: Number = Field(..., alias="trailingEBITDAAmount")
    avg_revenue_growth: Number
    net_income: Number
    asking_price: Number


class BusinessModel(_WireModel):
    recurring_revenue: bool = False
    project_based: bool = False
    asset_light: bool = False
    asset_heavy: bool = False


class ManagementPreferences(_WireModel):
    retiring_divesting: bool = False
    staff_stay: bool = False


class BuyerFit(_WireModel):
    capital_availability: str
    min_prior_acquisitions: Number
    min_transaction_size: Number


class DealDefaults(BaseModel):
    """Fixed listing attributes the form does not ask for."""

    deal_type: str = "acquisition"
    status: str = "draft"
    visibility: str = Field(default="seed", description="Used when the seller picked no reward tier.")
    stake_percentage: Number = 100


class SubmissionPayload(_WireModel):
    """Normalized, submission-ready listing. Never mutated after assembly."""

    title: str
    company_description: str
    deal_type: str
    status: str
    visibility: str
    industry_sector: str
    geography_selection: str
    years_in_business: Number
    financial_details: FinancialDetails
    business_model: BusinessModel
    management_preferences: ManagementPreferences
    buyer_fit: BuyerFit
    targeted_buyers: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    is_public: bool = False
    is_featured: bool = False
    stake_percentage: Number = 100
    documents: tuple[Any, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with the service's camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def validate_form(state: FormWorkingState) -> None:
    """
    Check required fields in order; the first failure wins.

    Raises:
        MissingTitleError, MissingDescriptionError, MissingGeographyError, MissingIndustryError
    """
    if not state.deal_title.strip():
        raise MissingTitleError()
    if not state.company_description.strip():
        raise MissingDescriptionError()
    if state.geography.is_empty():
        raise MissingGeographyError()
    if state.industry.is_empty():
        raise MissingIndustryError()


def _first_name(selection: SelectionState, entries: Sequence[FlatEntry]) -> str:
    first = selection.first
    return resolve_names([first], entries)[0] if first is not None else ""


def assemble(
    state: FormWorkingState,
    geo_entries: Sequence[FlatEntry],
    industry_entries: Sequence[FlatEntry],
    defaults: DealDefaults | None = None,
) -> SubmissionPayload:
    """
    Validate the form and map it to a SubmissionPayload. Pure: nothing is sent.

    Only the first selected industry becomes `industrySector`; further selections are
    display-only.

    Args:
        state: Form working state (read-only here)
        geo_entries: Flattened geography taxonomy
        industry_entries: Flattened industry taxonomy
        defaults: Fixed listing attributes (deal type, status, ...)

    Returns:
        The assembled payload

    Raises:
        FormValidationError: The first missing required field
    """
    validate_form(state)
    defaults = defaults or DealDefaults()

    business_models = set(state.business_models)
    preferences = set(state.management_preferences)

    payload = SubmissionPayload(
        title=state.deal_title,
        company_description=state.company_description,
        deal_type=defaults.deal_type,
        status=defaults.status,
        visibility=state.reward or defaults.visibility,
        industry_sector=_first_name(state.industry, industry_entries),
        geography_selection=_first_name(state.geography, geo_entries),
        years_in_business=state.years_in_business,
        financial_details=FinancialDetails(
            trailing_revenue_currency=state.currency,
            trailing_revenue_amount=state.trailing_revenue,
            trailing_ebitda_currency=state.currency,
            trailing_ebitda_amount=state.trailing_ebitda,
            avg_revenue_growth=state.revenue_growth,
            net_income=state.net_income,
            asking_price=state.asking_price,
        ),
        business_model=BusinessModel(
            recurring_revenue="recurring-revenue" in business_models,
            project_based="project-based" in business_models,
            asset_light="asset-light" in business_models,
            asset_heavy="asset-heavy" in business_models,
        ),
        management_preferences=ManagementPreferences(
            retiring_divesting="retiring-divesting" in preferences,
            staff_stay="key-staff-stay" in preferences,
        ),
        buyer_fit=BuyerFit(
            capital_availability=CAPITAL_AVAILABILITY_PHRASES[state.capital_availability],
            min_prior_acquisitions=state.min_prior_acquisitions,
            min_transaction_size=state.min_transaction_size,
        ),
        stake_percentage=defaults.stake_percentage,
    )
    logger.debug(
        "Assembled payload (geography=%r, industry=%r, %d industry selections)",
        payload.geography_selection,
        payload.industry_sector,
        len(state.industry),
    )
    return payload
