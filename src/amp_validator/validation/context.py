"""Per-run traversal state shared with the rule engine."""

from enum import Enum
from typing import Any

from .identity import ElementIdentity


class Phase(str, Enum):
    """Which kind of rule is being evaluated."""

    LOCAL = "LOCAL"  # checking one specific element
    GLOBAL = "GLOBAL"  # cross-element checks after traversal


class ValidationContext:
    """Mutable state for one validation run.

    Only the scanner writes to the context. Rule engines read
    ``current_element``, ``current_identity``, ``phase`` and
    ``num_tags_processed`` during their callbacks.
    """

    def __init__(self) -> None:
        self.current_element: Any | None = None
        self.current_identity: ElementIdentity | None = None
        self.phase: Phase = Phase.GLOBAL
        self.num_tags_processed: int = 0

    def attach_element(self, element: Any, identity: ElementIdentity) -> None:
        """Make ``element`` the element under inspection."""
        self.current_element = element
        self.current_identity = identity
        self.phase = Phase.LOCAL
        self.num_tags_processed += 1

    def set_num_tags_processed(self, count: int) -> None:
        self.num_tags_processed = count

    def enter_global_phase(self) -> None:
        """Switch to cross-element checks."""
        self.phase = Phase.GLOBAL

    @property
    def current_line(self) -> int:
        """Source line of the current element, or 1 for global checks."""
        if self.phase is Phase.GLOBAL or self.current_element is None:
            return 1
        return getattr(self.current_element, "line", 0) or 0
