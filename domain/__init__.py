"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- taxonomy: Typed geography/industry trees, flattening, search, name resolution
- selection: Single/multi selection state and toggling
- form: Form working state and input handlers
- payload: Submission payload models and the assembler
- errors: Exception hierarchy
"""

from domain.form import Document, FormWorkingState
from domain.payload import SubmissionPayload, assemble
from domain.selection import SelectionMode, SelectionState, toggle

__all__ = [
    "FormWorkingState",
    "Document",
    "SelectionMode",
    "SelectionState",
    "toggle",
    "SubmissionPayload",
    "assemble",
]
