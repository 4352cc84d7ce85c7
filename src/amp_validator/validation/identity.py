"""Stable identity handles for document elements."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ElementIdentity:
    """Opaque key identifying one element instance for the duration of a run.

    Identities compare by ``key`` only. Two elements with identical names and
    attributes still get distinct identities.
    """

    key: int
    tag_name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return f"{self.tag_name or 'element'}#{self.key}"


class ElementIdentityArena:
    """Hands out one ``ElementIdentity`` per element, in first-seen order.

    The arena holds a reference to every element it has identified so that
    ``id()`` values cannot be recycled while the run is in progress.
    """

    def __init__(self) -> None:
        self._identities: dict[int, tuple[Any, ElementIdentity]] = {}

    def identify(self, element: Any) -> ElementIdentity:
        """Return the identity for ``element``, assigning one on first sight."""
        entry = self._identities.get(id(element))
        if entry is not None:
            return entry[1]
        identity = ElementIdentity(
            key=len(self._identities),
            tag_name=getattr(element, "name", "") or "",
        )
        self._identities[id(element)] = (element, identity)
        return identity

    def __len__(self) -> int:
        return len(self._identities)
