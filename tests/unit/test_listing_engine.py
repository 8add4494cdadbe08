import asyncio

import pytest

from application import ListingEngine, SessionContext
from domain.errors import (
    AuthenticationRequiredError,
    DocumentTooLargeError,
    MissingIndustryError,
    SubmissionError,
    TaxonomyLoadError,
)
from domain.form import Document
from domain.taxonomy.models import Continent, Sector
from infrastructure.config import EngineConfig
from infrastructure.observability import get_log_context
from infrastructure.services import MockSubmissionService, StaticTaxonomyService, TaxonomyService


class RecordingTaxonomyService(TaxonomyService):
    """Wraps another service; fails on demand and records how many fetches overlap."""

    def __init__(self, inner: TaxonomyService, *, fail: str | None = None) -> None:
        self.inner = inner
        self.fail = fail
        self.in_flight = 0
        self.max_in_flight = 0

    async def _enter(self, which: str) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0)
        self.in_flight -= 1
        if self.fail == which:
            raise ConnectionError(f"{which} service down")

    async def fetch_geography(self) -> list[Continent]:
        await self._enter("geography")
        return await self.inner.fetch_geography()

    async def fetch_industry(self) -> list[Sector]:
        await self._enter("industry")
        return await self.inner.fetch_industry()


@pytest.fixture
def make_engine(static_service):
    async def _mk_engine(context: SessionContext, **cfg) -> ListingEngine:
        return await ListingEngine.initialize(
            context=context,
            taxonomy_service=static_service,
            config=EngineConfig(**cfg),
        )

    return _mk_engine


@pytest.mark.asyncio
async def test_initialize_fetches_concurrently_and_flattens(seller_context, static_service) -> None:
    service = RecordingTaxonomyService(static_service)

    engine = await ListingEngine.initialize(context=seller_context, taxonomy_service=service)

    assert service.max_in_flight == 2
    assert len(engine.geography) == 6
    assert len(engine.industry) == 7


@pytest.mark.asyncio
@pytest.mark.parametrize("fail", ["geography", "industry"])
async def test_any_fetch_failure_is_a_load_error(seller_context, static_service, fail) -> None:
    service = RecordingTaxonomyService(static_service, fail=fail)
    with pytest.raises(TaxonomyLoadError, match="Failed to load form data"):
        await ListingEngine.initialize(context=seller_context, taxonomy_service=service)


@pytest.mark.asyncio
async def test_file_backed_service_missing_file_is_load_error(seller_context, tmp_path) -> None:
    service = StaticTaxonomyService(geography_file=tmp_path / "geo.yaml", industry_file=tmp_path / "ind.yaml")
    with pytest.raises(TaxonomyLoadError):
        await ListingEngine.initialize(context=seller_context, taxonomy_service=service)


@pytest.mark.asyncio
async def test_misplaced_child_collection_is_a_load_error(seller_context, static_service) -> None:
    ontario = {"id": "ca-on", "name": "Ontario", "regions": [{"id": "x", "name": "X"}]}
    service = StaticTaxonomyService(
        geography_data=[{"id": "na", "name": "NA", "subRegions": [ontario]}],
        industry_data=static_service.industry_data,
    )

    with pytest.raises(TaxonomyLoadError):
        await ListingEngine.initialize(context=seller_context, taxonomy_service=service)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "context",
    [
        SessionContext(),
        SessionContext(token="t", role="buyer", user_id="u"),
        SessionContext(role="seller", user_id="u"),
    ],
)
async def test_initialize_requires_seller_session(make_engine, context) -> None:
    with pytest.raises(AuthenticationRequiredError):
        await make_engine(context)


@pytest.mark.asyncio
async def test_toggle_returns_state_and_closes_panel(make_engine, seller_context) -> None:
    engine = await make_engine(seller_context)
    form = engine.new_form()

    outcome = engine.toggle_geography(form, "ca")
    assert outcome.close_panel is True
    assert outcome.state.ids == ("ca",)
    assert form.geography == outcome.state

    engine.toggle_geography(form, "us")
    engine.toggle_industry(form, "tech")
    engine.toggle_industry(form, "retail")
    engine.toggle_industry(form, "ghost")

    assert engine.selected_geography_label(form) == "United States"
    assert engine.selected_industry_label(form) == "Technology, Retail, ghost"


@pytest.mark.asyncio
async def test_labels_for_empty_selection(make_engine, seller_context) -> None:
    engine = await make_engine(seller_context)
    form = engine.new_form()
    assert engine.selected_geography_label(form) == ""
    assert engine.selected_industry_label(form) == ""


@pytest.mark.asyncio
async def test_search_delegates_to_indexes(make_engine, seller_context) -> None:
    engine = await make_engine(seller_context)
    assert [e.id for e in engine.search_geography("ONT")] == ["ca-on"]
    assert [e.id for e in engine.search_industry("software")] == ["sw", "tech", "saas"]


def _answers(**overrides) -> dict:
    answers = {
        "deal_title": "Shop",
        "company_description": "Sells things",
        "geography": ["ca"],
        "industry": ["tech", "retail"],
    }
    answers.update(overrides)
    return answers


@pytest.mark.asyncio
async def test_submit_dispatches_assembled_payload(make_engine, seller_context) -> None:
    engine = await make_engine(seller_context)
    form = engine.form_from_answers(_answers())
    service = MockSubmissionService()

    receipt = await engine.submit(form, service)

    assert receipt.deal_id.startswith("mock-")
    assert len(service.submitted) == 1
    assert service.submitted[0].industry_sector == "Technology"
    assert service.submitted[0].geography_selection == "Canada"


@pytest.mark.asyncio
async def test_validation_failure_never_reaches_service(make_engine, seller_context) -> None:
    engine = await make_engine(seller_context)
    form = engine.form_from_answers(_answers(industry=[]))
    service = MockSubmissionService()

    with pytest.raises(MissingIndustryError):
        await engine.submit(form, service)

    assert service.submitted == []
    assert form.deal_title == "Shop"


@pytest.mark.asyncio
async def test_service_failure_is_wrapped_and_form_preserved(make_engine, seller_context) -> None:
    engine = await make_engine(seller_context)
    form = engine.form_from_answers(_answers())
    before = form.model_dump()

    with pytest.raises(SubmissionError, match="Deal title already exists"):
        await engine.submit(form, MockSubmissionService(fail_with="Deal title already exists"))

    assert form.model_dump() == before


@pytest.mark.asyncio
async def test_submit_step_does_not_leak_into_later_logs(make_engine, seller_context) -> None:
    engine = await make_engine(seller_context)
    form = engine.form_from_answers(_answers())
    step_before = get_log_context()["step"]

    await engine.submit(form, MockSubmissionService())
    assert get_log_context()["step"] == step_before

    with pytest.raises(SubmissionError):
        await engine.submit(form, MockSubmissionService(fail_with="down"))
    assert get_log_context()["step"] == step_before


@pytest.mark.asyncio
async def test_submit_requires_seller_id(make_engine) -> None:
    engine = await make_engine(SessionContext(token="t", role="seller"))
    form = engine.form_from_answers(_answers())

    with pytest.raises(AuthenticationRequiredError, match="Authentication required"):
        await engine.submit(form, MockSubmissionService())


@pytest.mark.asyncio
async def test_attachment_limit_comes_from_config(make_engine, seller_context) -> None:
    engine = await make_engine(seller_context, max_document_bytes=100)
    form = engine.new_form()

    engine.attach(form, Document(name="ok.txt", size=100))
    with pytest.raises(DocumentTooLargeError, match="100 bytes"):
        engine.attach(form, Document(name="big.txt", size=101))

    assert [d.name for d in form.documents] == ["ok.txt"]


def test_session_context_from_env() -> None:
    ctx = SessionContext.from_env({"SELLER_TOKEN": "t", "SELLER_ROLE": "seller", "SELLER_ID": ""})
    assert ctx.is_seller
    assert ctx.user_id is None
