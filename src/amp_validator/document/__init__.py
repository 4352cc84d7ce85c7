"""Document adapters consumed by the scanner."""

from .base import DocumentElement, DocumentNode
from .html_document import SUPPORTED_PARSERS, HtmlDocument, HtmlElement

__all__ = [
    "DocumentElement",
    "DocumentNode",
    "HtmlDocument",
    "HtmlElement",
    "SUPPORTED_PARSERS",
]
