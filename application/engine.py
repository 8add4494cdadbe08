"""Listing engine: taxonomy load, search, selection and submission workflow."""

import asyncio
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from application.constants import LOAD_FAILED_MESSAGE, SUBMIT_FAILED_MESSAGE
from application.context import SessionContext, require_seller
from domain.errors import AuthenticationRequiredError, FormValidationError, SubmissionError, TaxonomyLoadError
from domain.form import Document, FormWorkingState, attach_document
from domain.payload import SubmissionPayload, assemble
from domain.selection import SelectionState, toggle
from domain.taxonomy.flatten import find_duplicate_ids
from domain.taxonomy.index import TaxonomyIndex
from domain.taxonomy.models import FlatEntry
from infrastructure.config.models import EngineConfig
from infrastructure.observability.logging import log_step, set_log_context
from infrastructure.services.base import SubmissionReceipt, SubmissionService, TaxonomyService

logger = logging.getLogger(__name__)


class ToggleOutcome(BaseModel):
    """Result of a selector click. The UI closes the selector panel when `close_panel` is set."""

    model_config = ConfigDict(frozen=True)

    state: SelectionState
    close_panel: bool = True


class ListingEngine:
    """
    Taxonomy search/selection engine behind the seller listing form.

    Built only through `initialize`, which loads both taxonomies before anything
    else is usable. Holds no form state itself; callers own a FormWorkingState and
    pass it in.
    """

    def __init__(
        self,
        *,
        context: SessionContext,
        geography: TaxonomyIndex,
        industry: TaxonomyIndex,
        config: EngineConfig,
    ) -> None:
        self.context = context
        self.geography = geography
        self.industry = industry
        self.config = config

    @classmethod
    async def initialize(
        cls,
        *,
        context: SessionContext,
        taxonomy_service: TaxonomyService,
        config: EngineConfig | None = None,
    ) -> "ListingEngine":
        """
        Check the session, fetch both taxonomies concurrently and flatten them.

        Raises:
            AuthenticationRequiredError: Session is not a seller session
            TaxonomyLoadError: Either fetch failed; no partial engine is returned
        """
        require_seller(context)
        if context.user_id:
            set_log_context(seller_id=context.user_id)

        try:
            continents, sectors = await asyncio.gather(
                taxonomy_service.fetch_geography(),
                taxonomy_service.fetch_industry(),
            )
        except Exception as e:
            logger.error("Error fetching taxonomy data: %s", e)
            raise TaxonomyLoadError(LOAD_FAILED_MESSAGE) from e

        geography = TaxonomyIndex.from_roots(continents)
        industry = TaxonomyIndex.from_roots(sectors)

        for label, index in (("geography", geography), ("industry", industry)):
            dupes = find_duplicate_ids(index.entries)
            if dupes:
                logger.warning("%s taxonomy has duplicate ids (first occurrence wins): %s", label, dupes)

        logger.info("Taxonomies loaded: %d geography entries, %d industry entries", len(geography), len(industry))
        return cls(context=context, geography=geography, industry=industry, config=config or EngineConfig())

    # ---- form lifecycle ----

    def new_form(self) -> FormWorkingState:
        return FormWorkingState(currency=self.config.default_currency)

    def form_from_answers(self, answers: dict[str, Any]) -> FormWorkingState:
        return FormWorkingState.from_answers(
            answers,
            currency=self.config.default_currency,
            max_document_bytes=self.config.max_document_bytes,
        )

    def attach(self, form: FormWorkingState, document: Document) -> None:
        attach_document(form, document, max_bytes=self.config.max_document_bytes)

    # ---- search ----

    def search_geography(self, term: str) -> list[FlatEntry]:
        return self.geography.search(term)

    def search_industry(self, term: str) -> list[FlatEntry]:
        return self.industry.search(term)

    # ---- selection ----

    def toggle_geography(self, form: FormWorkingState, item_id: str) -> ToggleOutcome:
        form.geography = toggle(form.geography, item_id)
        return ToggleOutcome(state=form.geography)

    def toggle_industry(self, form: FormWorkingState, item_id: str) -> ToggleOutcome:
        form.industry = toggle(form.industry, item_id)
        return ToggleOutcome(state=form.industry)

    def selected_geography_label(self, form: FormWorkingState) -> str:
        first = form.geography.first
        return self.geography.resolve_names([first])[0] if first is not None else ""

    def selected_industry_label(self, form: FormWorkingState) -> str:
        return ", ".join(self.industry.resolve_names(form.industry.ids))

    # ---- submission ----

    def assemble(self, form: FormWorkingState) -> SubmissionPayload:
        """Validate and map the form. Raises FormValidationError; the form is left untouched."""
        try:
            return assemble(
                form,
                self.geography.entries,
                self.industry.entries,
                defaults=self.config.deal_defaults,
            )
        except FormValidationError as e:
            logger.warning("Form validation failed (field=%s): %s", e.field, e)
            raise

    async def submit(self, form: FormWorkingState, service: SubmissionService) -> SubmissionReceipt:
        """
        Assemble the payload and hand it to the submission service. Not retried.

        Raises:
            FormValidationError: A required field is missing
            AuthenticationRequiredError: No token or seller id in the session
            SubmissionError: The service failed; carries its message
        """
        payload = self.assemble(form)

        if not self.context.token or not self.context.user_id:
            logger.warning("Submit attempted without token or seller id")
            raise AuthenticationRequiredError()

        with log_step("submit"):
            logger.debug("Submitting deal payload: %s", payload.to_wire())
            try:
                receipt = await service.submit_deal(payload)
            except Exception as e:
                logger.error("Form submission error: %s", e)
                if isinstance(e, SubmissionError):
                    raise
                raise SubmissionError(str(e) or SUBMIT_FAILED_MESSAGE) from e

            logger.info("Deal submitted (deal_id=%s)", receipt.deal_id)
        return receipt
