"""Validation-result pipeline for AMP HTML documents.

This package provides:
- Element identities and the per-run validation context
- Violation records and the ordered result accumulating them
- The document scanner driving a rule engine
- The error categorizer assigning triage categories
- The result renderer producing grouped report text
"""

from .base import (
    GLOBAL_WARNING,
    ActionTaken,
    ValidationError,
    ValidationResult,
    ValidationStatus,
)
from .categorizer import ErrorCategorizer, categorize
from .context import Phase, ValidationContext
from .identity import ElementIdentity, ElementIdentityArena
from .messages import DEFAULT_FORMAT_BY_CODE, MessageFormats, load_message_formats
from .renderer import ResultRenderer, apply_format
from .scanner import DocumentScanner, RuleEngine, iter_elements

__all__ = [
    # Data model
    "ActionTaken",
    "ElementIdentity",
    "ElementIdentityArena",
    "GLOBAL_WARNING",
    "Phase",
    "ValidationContext",
    "ValidationError",
    "ValidationResult",
    "ValidationStatus",
    # Traversal
    "DocumentScanner",
    "RuleEngine",
    "iter_elements",
    # Classification
    "ErrorCategorizer",
    "categorize",
    # Rendering
    "DEFAULT_FORMAT_BY_CODE",
    "MessageFormats",
    "ResultRenderer",
    "apply_format",
    "load_message_formats",
]
