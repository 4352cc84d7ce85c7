"""In-memory document tree for driving the scanner without a parser."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class MockElement:
    """Minimal element exposing what the scanner and rule engine read."""

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[MockElement] = field(default_factory=list)
    line: int = 0
    parent_name: str | None = None


@dataclass(eq=False)
class MockDocument:
    children: list[MockElement] = field(default_factory=list)
    source: str | None = None


def element(
    name: str, /, *children: MockElement, line: int = 0, **attributes: str
) -> MockElement:
    """Build an element and set ``parent_name`` on its children.

    ``name`` is positional-only so HTML ``name=`` attributes pass through.
    """
    node = MockElement(name, dict(attributes), list(children), line)
    for child in children:
        child.parent_name = name
    return node
