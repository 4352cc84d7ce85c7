"""Structural interfaces the scanner expects from a parsed document."""

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class DocumentNode(Protocol):
    """Anything with element children: a document root or an element."""

    @property
    def children(self) -> Sequence["DocumentElement"]: ...


@runtime_checkable
class DocumentElement(DocumentNode, Protocol):
    """One element of a parsed document."""

    @property
    def name(self) -> str: ...

    @property
    def line(self) -> int: ...

    @property
    def attributes(self) -> Mapping[str, str]:
        """Attributes currently present on the element, in source order."""
        ...
