import pytest

from application.context import SessionContext
from domain.taxonomy import TaxonomyIndex, parse_geography, parse_industry
from infrastructure.services import StaticTaxonomyService

GEO_DATA = {
    "continents": [
        {
            "id": "na",
            "name": "North America",
            "regions": [
                {
                    "id": "ca",
                    "name": "Canada",
                    "subRegions": [
                        {"id": "ca-on", "name": "Ontario"},
                        {"id": "ca-qc", "name": "Quebec"},
                    ],
                },
                {"id": "us", "name": "United States"},
            ],
        },
        {"id": "eu", "name": "Europe"},
    ]
}

INDUSTRY_DATA = {
    "sectors": [
        {
            "id": "it",
            "name": "Information Technology",
            "industryGroups": [
                {
                    "id": "sw",
                    "name": "Software & Services",
                    "industries": [
                        {
                            "id": "tech",
                            "name": "Technology",
                            "subIndustries": [{"id": "saas", "name": "Application Software"}],
                        }
                    ],
                }
            ],
        },
        {
            "id": "cd",
            "name": "Consumer Discretionary",
            "industryGroups": [
                {
                    "id": "retailing",
                    "name": "Distribution & Retail",
                    "industries": [{"id": "retail", "name": "Retail"}],
                }
            ],
        },
    ]
}


@pytest.fixture
def geo_index() -> TaxonomyIndex:
    return TaxonomyIndex.from_roots(parse_geography(GEO_DATA))


@pytest.fixture
def industry_index() -> TaxonomyIndex:
    return TaxonomyIndex.from_roots(parse_industry(INDUSTRY_DATA))


@pytest.fixture
def seller_context() -> SessionContext:
    return SessionContext(token="tok-123", role="seller", user_id="seller-42")


@pytest.fixture
def static_service() -> StaticTaxonomyService:
    return StaticTaxonomyService(geography_data=GEO_DATA, industry_data=INDUSTRY_DATA)
