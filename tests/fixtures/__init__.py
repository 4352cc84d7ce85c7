"""Test fixtures package."""

from .mock_document import MockDocument, MockElement, element
from .mock_rule_engine import MockRuleEngine

__all__ = [
    "MockDocument",
    "MockElement",
    "MockRuleEngine",
    "element",
]
