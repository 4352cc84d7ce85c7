"""BeautifulSoup-backed document adapter."""

from __future__ import annotations

from functools import cached_property
from pathlib import Path

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import Tag

from amp_validator.error_codes import FailureCode
from amp_validator.exceptions import DocumentParseError
from amp_validator.utils.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_PARSERS = ("html5lib", "html.parser")


class HtmlElement:
    """Read-only view over a BeautifulSoup ``Tag``."""

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    @property
    def name(self) -> str:
        return self._tag.name

    @property
    def line(self) -> int:
        # Tags synthesized by html5lib (implied <head>, <body>) have no position
        return self._tag.sourceline or 0

    @property
    def attributes(self) -> dict[str, str]:
        """Attributes as they are on the node right now."""
        return {name: str(value) for name, value in self._tag.attrs.items()}

    @property
    def parent_name(self) -> str | None:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return parent.name

    @cached_property
    def children(self) -> list[HtmlElement]:
        return [HtmlElement(child) for child in self._tag.children if isinstance(child, Tag)]

    def __repr__(self) -> str:
        return f"HtmlElement(name={self.name!r}, line={self.line})"


class HtmlDocument:
    """A parsed HTML document exposing its top-level elements.

    Example:
        document = HtmlDocument.from_string("<html amp><head></head></html>")
        for element in document.children:
            print(element.name)
    """

    def __init__(self, soup: BeautifulSoup, source: str | None = None) -> None:
        self._soup = soup
        self.source = source

    @classmethod
    def from_string(
        cls, markup: str, parser: str = "html5lib", source: str | None = None
    ) -> HtmlDocument:
        """Parse markup into a document.

        Args:
            markup: HTML source text
            parser: BeautifulSoup tree builder ("html5lib" or "html.parser")
            source: Optional label (file name or URL) for logging

        Raises:
            DocumentParseError: If the parser is unsupported or parsing fails
        """
        if parser not in SUPPORTED_PARSERS:
            msg = f"Unsupported parser: {parser}"
            raise DocumentParseError(
                msg,
                suggestion=f"Use one of: {', '.join(SUPPORTED_PARSERS)}",
                error_code=FailureCode.DOC_PARSE_FAILED.value,
                context={"parser": parser},
            )
        try:
            # Keep attribute values (e.g. class) as the literal source strings
            soup = BeautifulSoup(markup, parser, multi_valued_attributes=None)
        except FeatureNotFound as e:
            msg = f"Parser '{parser}' is not installed"
            raise DocumentParseError(
                msg,
                suggestion="Install html5lib or pass parser='html.parser'",
                error_code=FailureCode.DOC_PARSE_FAILED.value,
                context={"parser": parser},
            ) from e

        logger.debug("document_parsed", source=source, parser=parser)
        return cls(soup, source=source)

    @classmethod
    def from_path(cls, path: Path, parser: str = "html5lib") -> HtmlDocument:
        """Read and parse an HTML file.

        Raises:
            DocumentParseError: If the file cannot be read or parsed
        """
        try:
            markup = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read document: {path}"
            raise DocumentParseError(
                msg,
                error_code=FailureCode.DOC_UNREADABLE.value,
                context={"path": str(path), "error": str(e)},
            ) from e
        return cls.from_string(markup, parser=parser, source=str(path))

    @cached_property
    def children(self) -> list[HtmlElement]:
        return [HtmlElement(child) for child in self._soup.children if isinstance(child, Tag)]
