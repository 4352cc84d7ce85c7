"""Violation records and the ordered result that accumulates them."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from amp_validator.error_codes import ErrorCategory, FailureCode, ValidationErrorCode
from amp_validator.exceptions import InvariantViolationError, ResultSealedError

from .context import Phase
from .identity import ElementIdentity

# context_string used for document-level violations
GLOBAL_WARNING = "GLOBAL WARNING"


class ValidationStatus(str, Enum):
    """Overall outcome of a validation run."""

    PASS = "PASS"
    FAIL = "FAIL"
    UNKNOWN = "UNKNOWN"  # internal or parse-level failure


@dataclass(frozen=True)
class ActionTaken:
    """Description of an automatic fix that was already applied elsewhere."""

    human_description: str


@dataclass
class ValidationError:
    """One detected deviation from the rule set.

    ``params`` are positional values substituted into message templates
    (``%1`` is ``params[0]``). ``element`` holds the identity of the offending
    element, never the element itself; it is ``None`` for document-level
    violations.
    """

    code: ValidationErrorCode | None
    params: Sequence[str] = ()
    detail: str | None = None
    line: int = 1
    element: ElementIdentity | None = None
    context_string: str = GLOBAL_WARNING
    phase: Phase = Phase.GLOBAL
    category: ErrorCategory | None = None
    spec_url: str | None = None
    action_taken: ActionTaken | None = None

    def __post_init__(self) -> None:
        if self.code is not None and not isinstance(self.code, ValidationErrorCode):
            self.code = ValidationErrorCode(self.code)
        self.params = tuple(str(param) for param in self.params)

    def param(self, index: int) -> str | None:
        """Return ``params[index]`` or ``None`` when out of range."""
        if 0 <= index < len(self.params):
            return self.params[index]
        return None

    def assign_category(self, category: ErrorCategory) -> None:
        """Record the triage category; it may be written only once."""
        if self.category is not None and self.category is not category:
            msg = (
                f"Category for {self.code} already set to {self.category.value}, "
                f"refusing to overwrite with {category.value}"
            )
            raise InvariantViolationError(
                msg,
                error_code=FailureCode.VAL_CATEGORY_REASSIGNED.value,
                context={"code": str(self.code), "params": list(self.params)},
            )
        self.category = category

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value if self.code else None,
            "params": list(self.params),
            "detail": self.detail,
            "line": self.line,
            "element": self.element.key if self.element else None,
            "context_string": self.context_string,
            "phase": self.phase.value,
            "category": self.category.value if self.category else None,
            "spec_url": self.spec_url,
            "action_taken": (
                self.action_taken.human_description if self.action_taken else None
            ),
        }


@dataclass
class ValidationResult:
    """Append-only, ordered collection of violations for one run.

    Order is encounter order during traversal followed by cross-element
    checks, and is relied upon by the renderer for grouping.
    """

    status: ValidationStatus = ValidationStatus.UNKNOWN
    num_tags_processed: int = 0
    _errors: list[ValidationError] = field(default_factory=list, repr=False)
    _sealed: bool = field(default=False, repr=False)

    @property
    def errors(self) -> tuple[ValidationError, ...]:
        return tuple(self._errors)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add_error(self, error: ValidationError) -> None:
        """Append a violation.

        Raises:
            ResultSealedError: If rendering has already started
        """
        if self._sealed:
            msg = "Cannot add a violation after rendering has started"
            raise ResultSealedError(
                msg,
                error_code=FailureCode.VAL_RESULT_SEALED.value,
                context={"code": str(error.code), "errors": len(self._errors)},
            )
        self._errors.append(error)

    def seal(self) -> None:
        """Freeze the error list; called when rendering begins."""
        self._sealed = True

    def finalize_status(self) -> ValidationStatus:
        """Derive PASS/FAIL from the collected violations."""
        self.status = ValidationStatus.FAIL if self._errors else ValidationStatus.PASS
        return self.status

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def get_errors_by_category(self) -> dict[str, int]:
        """Get violation counts by category label (uncategorized as UNKNOWN)."""
        by_category: dict[str, int] = {}
        for error in self._errors:
            label = error.category.value if error.category else "UNKNOWN"
            by_category[label] = by_category.get(label, 0) + 1
        return by_category

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "num_tags_processed": self.num_tags_processed,
            "errors": [error.to_dict() for error in self._errors],
        }
