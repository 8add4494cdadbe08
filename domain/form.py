"""Working state of the seller listing form and its input handlers."""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.errors import DocumentTooLargeError, InvalidFieldValueError, ListingError
from domain.selection import SelectionMode, SelectionState, toggle

logger = logging.getLogger(__name__)

MAX_DOCUMENT_BYTES = 10 * 1024 * 1024  # 10MB

Currency = Literal["USD($)", "EUR(€)", "GBP(£)", "CAD($)", "AUD($)"]
CapitalAvailability = Literal["ready", "need-raise"]
RewardTier = Literal["seed", "bloom", "fruit"]

Number = int | float


class Document(BaseModel):
    """A pending attachment. Only metadata is tracked; contents are never inspected."""

    model_config = ConfigDict(frozen=True)

    name: str
    size: int = Field(..., ge=0, description="Size in bytes.")


class FormWorkingState(BaseModel):
    """
    Everything the seller has entered so far.

    - Created with defaults when the form opens
    - Mutated field-by-field by input handlers
    - Read once by the payload assembler on submit
    """

    model_config = ConfigDict(validate_assignment=True)

    deal_title: str = ""
    company_description: str = ""

    geography: SelectionState = Field(default_factory=lambda: SelectionState.empty(SelectionMode.SINGLE))
    industry: SelectionState = Field(default_factory=lambda: SelectionState.empty(SelectionMode.MULTI))

    years_in_business: Number = 0
    trailing_revenue: Number = 0
    trailing_ebitda: Number = 0
    revenue_growth: Number = 0
    currency: Currency = "USD($)"
    net_income: Number = 0
    asking_price: Number = 0

    business_models: list[str] = Field(default_factory=list)
    management_preferences: list[str] = Field(default_factory=list)
    capital_availability: CapitalAvailability = "ready"
    min_prior_acquisitions: Number = 0
    min_transaction_size: Number = 0

    documents: list[Document] = Field(default_factory=list)
    reward: RewardTier | None = Field(
        default=None,
        description="Seller reward tier; also the listing visibility. None until the seller picks one.",
    )

    @field_validator("geography")
    @classmethod
    def _geography_is_single(cls, v: SelectionState) -> SelectionState:
        if v.mode is not SelectionMode.SINGLE:
            raise ValueError("geography selection must be single-select")
        return v

    @field_validator("industry")
    @classmethod
    def _industry_is_multi(cls, v: SelectionState) -> SelectionState:
        if v.mode is not SelectionMode.MULTI:
            raise ValueError("industry selection must be multi-select")
        return v

    @classmethod
    def from_answers(
        cls,
        data: dict[str, Any],
        *,
        currency: Currency = "USD($)",
        max_document_bytes: int = MAX_DOCUMENT_BYTES,
    ) -> "FormWorkingState":
        """
        Replay a mapping of recorded answers through the same handlers user input uses.

        Selections (`geography`, `industry`) and checkbox sets (`business_models`,
        `management_preferences`) are given as id/tag lists and applied as clicks, so
        selector invariants hold exactly as they would interactively. Numeric fields
        go through `parse_number`.

        Raises:
            InvalidFieldValueError: An answer cannot be applied to its field
            DocumentTooLargeError: A recorded attachment exceeds `max_document_bytes`
        """
        state = cls(currency=currency)
        for key, value in data.items():
            try:
                state._apply_answer(key, value, max_document_bytes)
            except ListingError:
                raise
            except ValueError as e:
                logger.warning("Rejected answer for %s: %r", key, value)
                raise InvalidFieldValueError(key, f"Invalid value for {key}: {value!r}") from e
        return state

    def _apply_answer(self, key: str, value: Any, max_document_bytes: int) -> None:
        if key in ("geography", "industry"):
            selection = getattr(self, key)
            for item_id in _as_list(value):
                selection = toggle(selection, str(item_id))
            setattr(self, key, selection)
        elif key in ("business_models", "management_preferences"):
            tags = getattr(self, key)
            for tag in _as_list(value):
                tags = set_checked(tags, str(tag), True)
            setattr(self, key, tags)
        elif key in _NUMERIC_FIELDS:
            setattr(self, key, parse_number(value))
        elif key == "documents":
            for doc in _as_list(value):
                attach_document(self, Document.model_validate(doc), max_bytes=max_document_bytes)
        elif key in type(self).model_fields:
            setattr(self, key, value)
        else:
            logger.warning("Ignoring unknown form field in answers: %s", key)


_NUMERIC_FIELDS = frozenset(
    {
        "years_in_business",
        "trailing_revenue",
        "trailing_ebitda",
        "revenue_growth",
        "net_income",
        "asking_price",
        "min_prior_acquisitions",
        "min_transaction_size",
    }
)


def _as_list(value: object) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def parse_number(raw: object) -> Number:
    """
    Parse a numeric input box value.

    Blank input is 0. Integral values come back as int so they serialize without a
    trailing `.0`.

    Raises:
        ValueError: If the text is not a number
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise ValueError(f"Not a number: {raw!r}")
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return 0
        try:
            value = float(text)
        except ValueError as err:
            raise ValueError(f"Not a number: {raw!r}") from err
    return int(value) if value.is_integer() else value


def set_checked(values: list[str], tag: str, checked: bool) -> list[str]:
    """Return a new checkbox set with `tag` checked or unchecked."""
    if checked:
        return values if tag in values else [*values, tag]
    return [v for v in values if v != tag]


def attach_document(state: FormWorkingState, document: Document, max_bytes: int = MAX_DOCUMENT_BYTES) -> None:
    """
    Append a document to the pending attachments.

    Raises:
        DocumentTooLargeError: If the document exceeds `max_bytes`; nothing is attached
    """
    if document.size > max_bytes:
        mb, rem = divmod(max_bytes, 1024 * 1024)
        limit = f"{mb}MB" if mb and not rem else f"{max_bytes} bytes"
        raise DocumentTooLargeError(f"File size exceeds {limit} limit")
    state.documents = [*state.documents, document]
    logger.debug("Attached document %s (%d bytes)", document.name, document.size)
