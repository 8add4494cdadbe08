"""
External service adapters.

- TaxonomyService: geography/industry tree source (StaticTaxonomyService)
- SubmissionService: listing receiver (MockSubmissionService)

Network transport is not part of this project; real adapters implement the
same abstract interfaces.
"""

from infrastructure.services.base import SubmissionReceipt, SubmissionService, TaxonomyService
from infrastructure.services.mock import MockSubmissionService
from infrastructure.services.static import StaticTaxonomyService

__all__ = [
    # Abstract bases
    "TaxonomyService",
    "SubmissionService",
    "SubmissionReceipt",
    # Concrete implementations
    "StaticTaxonomyService",
    "MockSubmissionService",
]
