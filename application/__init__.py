"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure: it loads the
taxonomies through a TaxonomyService, drives selection and search for the form,
and hands assembled payloads to a SubmissionService.
"""

from application.context import SessionContext, require_seller
from application.engine import ListingEngine, ToggleOutcome

__all__ = [
    # Main workflow
    "ListingEngine",
    "ToggleOutcome",
    # Session
    "SessionContext",
    "require_seller",
]
