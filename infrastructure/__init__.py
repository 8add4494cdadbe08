"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Taxonomy and submission services
- Configuration loading (YAML, environment)
- Observability (logging, tracing context)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import EngineConfig, load_engine_config
from infrastructure.services import (
    MockSubmissionService,
    StaticTaxonomyService,
    SubmissionService,
    TaxonomyService,
)

__all__ = [
    # Services (most commonly used)
    "TaxonomyService",
    "SubmissionService",
    "StaticTaxonomyService",
    "MockSubmissionService",
    # Configuration
    "load_engine_config",
    "EngineConfig",
]
