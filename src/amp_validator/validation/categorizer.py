"""Assigns each violation a coarse triage category.

The rules below are a first-match-wins decision list. Several branches
overlap on purpose (e.g. a ``DISALLOWED_TAG`` for ``img`` would also fit the
generic disallowed-HTML bucket), so their order is part of the observable
output: moving a branch changes which category reports show.
"""

from amp_validator.error_codes import ErrorCategory
from amp_validator.error_codes import ValidationErrorCode as Code

from .base import ValidationError, ValidationResult

# Prefix of tags and attributes defined by the AMP project itself
RESERVED_PREFIX = "amp-"

# Stand-in for the lightning-bolt html attribute, as emitted by the rule tables
LIGHTNING_ATTR_SENTINEL = "\\u26a"

TAGS_WITH_EQUIVALENT = frozenset({"img", "video", "audio", "iframe", "font"})
LAYOUT_ATTRS = frozenset({"width", "height", "layout"})
VIEWPORT_SPEC_NAME = "meta name=viewport"

_PROPERTY_CODES = frozenset(
    {
        Code.DISALLOWED_PROPERTY_IN_ATTR_VALUE,
        Code.INVALID_PROPERTY_VALUE_IN_ATTR_VALUE,
        Code.MANDATORY_PROPERTY_MISSING_FROM_ATTR_VALUE,
    }
)
_ATTR_CODES = frozenset(
    {Code.INVALID_ATTR_VALUE, Code.DISALLOWED_ATTR, Code.MANDATORY_ATTR_MISSING}
)
_URL_CODES = frozenset({Code.MISSING_URL, Code.INVALID_URL, Code.INVALID_URL_PROTOCOL})


def _starts_with(value: str | None, prefix: str) -> bool:
    return value is not None and value.startswith(prefix)


def _ends_with(value: str | None, suffix: str) -> bool:
    return value is not None and value.endswith(suffix)


def categorize(error: ValidationError) -> ErrorCategory:
    """Return the triage category for ``error``.

    Depends only on ``code`` and ``params``. A missing parameter never
    matches a guard that inspects it.
    """
    code = error.code
    p0, p1, p2 = error.param(0), error.param(1), error.param(2)

    if not error.params or code is None or code is Code.UNKNOWN_CODE:
        return ErrorCategory.UNKNOWN

    if code is Code.DISALLOWED_TAG:
        if p0 in TAGS_WITH_EQUIVALENT:
            return ErrorCategory.DISALLOWED_HTML_WITH_EQUIVALENT
        return ErrorCategory.DISALLOWED_HTML

    if code is Code.MANDATORY_TAG_ANCESTOR_WITH_HINT:
        return ErrorCategory.DISALLOWED_HTML_WITH_EQUIVALENT

    if code is Code.MANDATORY_TAG_MISSING or (
        code is Code.MANDATORY_ATTR_MISSING and p0 == LIGHTNING_ATTR_SENTINEL
    ):
        return ErrorCategory.MANDATORY_TAG_MISSING_OR_INCORRECT

    if code in _PROPERTY_CODES and p2 == VIEWPORT_SPEC_NAME:
        return ErrorCategory.MANDATORY_TAG_MISSING_OR_INCORRECT

    if (
        code in (Code.INVALID_ATTR_VALUE, Code.MANDATORY_ATTR_MISSING)
        and p0 in LAYOUT_ATTRS
    ):
        return ErrorCategory.LAYOUT_PROBLEM

    if code is Code.INVALID_ATTR_VALUE and p0 == "src" and _ends_with(p1, "script"):
        return ErrorCategory.CUSTOM_SCRIPT_DISALLOWED

    if code is Code.INVALID_ATTR_VALUE and p0 == "type" and _starts_with(p1, "script"):
        return ErrorCategory.CUSTOM_SCRIPT_DISALLOWED

    if code in _ATTR_CODES:
        if _starts_with(p1, RESERVED_PREFIX):
            return ErrorCategory.NAMESPACE_TAG_PROBLEM
        return ErrorCategory.DISALLOWED_HTML

    if code is Code.MANDATORY_ONEOF_ATTR_MISSING:
        return ErrorCategory.NAMESPACE_TAG_PROBLEM

    if code in (Code.DEPRECATED_ATTR, Code.DEPRECATED_TAG):
        return ErrorCategory.DEPRECATION

    if code is Code.WRONG_PARENT_TAG:
        if any(_starts_with(p, RESERVED_PREFIX) for p in (p0, p1, p2)):
            return ErrorCategory.NAMESPACE_TAG_PROBLEM
        return ErrorCategory.DISALLOWED_HTML

    if code is Code.TAG_REQUIRED_BY_MISSING and _starts_with(p1, RESERVED_PREFIX):
        return ErrorCategory.NAMESPACE_TAG_PROBLEM

    if code is Code.MUTUALLY_EXCLUSIVE_ATTRS and _starts_with(p0, RESERVED_PREFIX):
        return ErrorCategory.NAMESPACE_TAG_PROBLEM

    if code is Code.DUPLICATE_UNIQUE_TAG:
        return ErrorCategory.MANDATORY_TAG_MISSING_OR_INCORRECT

    if code in _URL_CODES:
        if _starts_with(p1, RESERVED_PREFIX):
            return ErrorCategory.NAMESPACE_TAG_PROBLEM
        return ErrorCategory.DISALLOWED_HTML

    return ErrorCategory.GENERIC


class ErrorCategorizer:
    """Annotates results with triage categories."""

    def categorize(self, error: ValidationError) -> ErrorCategory:
        return categorize(error)

    def annotate(self, result: ValidationResult) -> None:
        """Set ``category`` on every violation of ``result``, in place.

        Safe to call repeatedly: categories already present are recomputed to
        the same value and left as they are.
        """
        for error in result:
            error.assign_category(categorize(error))
