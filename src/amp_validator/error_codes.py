"""Violation codes, triage categories, and internal failure codes.

Three enumerations live here:

- ``ValidationErrorCode``: the precise kind of a content violation found in
  a document. Values match the AMP validator's code names so reports stay
  comparable with the reference validator's output.
- ``ErrorCategory``: the coarse triage bucket assigned to a violation by the
  categorizer.
- ``FailureCode``: structured codes for hard failures raised as exceptions.
  Format: {DOMAIN}-{CATEGORY}-{NUMBER}

Failure Domains:
    CFG - Configuration errors
    RUL - Rule set errors
    DOC - Document reading/parsing errors
    VAL - Validation pipeline errors

Usage:
    from amp_validator.error_codes import FailureCode

    logger.error(
        "ruleset_load_failed",
        error_code=FailureCode.RUL_INVALID.value,
        path=str(path),
    )
"""

from enum import Enum


class ValidationErrorCode(str, Enum):
    """Kinds of content violations.

    All codes inherit from str for JSON serialization compatibility.
    """

    UNKNOWN_CODE = "UNKNOWN_CODE"

    # Tag level
    MANDATORY_TAG_MISSING = "MANDATORY_TAG_MISSING"
    TAG_REQUIRED_BY_MISSING = "TAG_REQUIRED_BY_MISSING"
    DISALLOWED_TAG = "DISALLOWED_TAG"
    DISALLOWED_TAG_ANCESTOR = "DISALLOWED_TAG_ANCESTOR"
    MANDATORY_TAG_ANCESTOR = "MANDATORY_TAG_ANCESTOR"
    MANDATORY_TAG_ANCESTOR_WITH_HINT = "MANDATORY_TAG_ANCESTOR_WITH_HINT"
    WRONG_PARENT_TAG = "WRONG_PARENT_TAG"
    DUPLICATE_UNIQUE_TAG = "DUPLICATE_UNIQUE_TAG"
    DEPRECATED_TAG = "DEPRECATED_TAG"

    # Attribute level
    DISALLOWED_ATTR = "DISALLOWED_ATTR"
    INVALID_ATTR_VALUE = "INVALID_ATTR_VALUE"
    MANDATORY_ATTR_MISSING = "MANDATORY_ATTR_MISSING"
    MANDATORY_ONEOF_ATTR_MISSING = "MANDATORY_ONEOF_ATTR_MISSING"
    MUTUALLY_EXCLUSIVE_ATTRS = "MUTUALLY_EXCLUSIVE_ATTRS"
    DEPRECATED_ATTR = "DEPRECATED_ATTR"

    # URL attributes
    MISSING_URL = "MISSING_URL"
    INVALID_URL = "INVALID_URL"
    INVALID_URL_PROTOCOL = "INVALID_URL_PROTOCOL"

    # Properties inside attribute values (e.g. meta viewport content)
    DISALLOWED_PROPERTY_IN_ATTR_VALUE = "DISALLOWED_PROPERTY_IN_ATTR_VALUE"
    INVALID_PROPERTY_VALUE_IN_ATTR_VALUE = "INVALID_PROPERTY_VALUE_IN_ATTR_VALUE"
    MANDATORY_PROPERTY_MISSING_FROM_ATTR_VALUE = (
        "MANDATORY_PROPERTY_MISSING_FROM_ATTR_VALUE"
    )


class ErrorCategory(str, Enum):
    """Coarse triage buckets for violations.

    Member names describe the bucket; values are the category labels printed
    in reports.
    """

    UNKNOWN = "UNKNOWN"
    DISALLOWED_HTML_WITH_EQUIVALENT = "DISALLOWED_HTML_WITH_AMP_EQUIVALENT"
    DISALLOWED_HTML = "DISALLOWED_HTML"
    MANDATORY_TAG_MISSING_OR_INCORRECT = "MANDATORY_AMP_TAG_MISSING_OR_INCORRECT"
    LAYOUT_PROBLEM = "AMP_LAYOUT_PROBLEM"
    CUSTOM_SCRIPT_DISALLOWED = "CUSTOM_JAVASCRIPT_DISALLOWED"
    NAMESPACE_TAG_PROBLEM = "AMP_TAG_PROBLEM"
    DEPRECATION = "DEPRECATION"
    GENERIC = "GENERIC"


class FailureCode(str, Enum):
    """Structured codes for hard failures.

    Format: {DOMAIN}-{CATEGORY}-{NUMBER}
    """

    # =========================================================================
    # Configuration Errors (CFG-xxx-xxx)
    # =========================================================================
    CFG_INVALID = "CFG-INVALID-001"
    """Configuration validation failed."""

    CFG_YAML_INVALID = "CFG-YAML-001"
    """Configuration file is not valid YAML."""

    CFG_MESSAGES_INVALID = "CFG-MSG-001"
    """Message template file could not be loaded."""

    # =========================================================================
    # Rule Set Errors (RUL-xxx-xxx)
    # =========================================================================
    RUL_NOT_FOUND = "RUL-PATH-001"
    """Rule set file does not exist."""

    RUL_INVALID = "RUL-INVALID-001"
    """Rule set file failed schema validation."""

    # =========================================================================
    # Document Errors (DOC-xxx-xxx)
    # =========================================================================
    DOC_UNREADABLE = "DOC-READ-001"
    """Document file could not be read."""

    DOC_PARSE_FAILED = "DOC-PARSE-001"
    """Markup could not be parsed."""

    # =========================================================================
    # Validation Pipeline Errors (VAL-xxx-xxx)
    # =========================================================================
    VAL_MISSING_COLLABORATOR = "VAL-COLLAB-001"
    """A required pipeline collaborator was not supplied."""

    VAL_TEMPLATE_INVALID = "VAL-TPL-001"
    """Message template table is malformed."""

    VAL_RESULT_SEALED = "VAL-SEAL-001"
    """Result mutated after rendering started."""

    VAL_CATEGORY_REASSIGNED = "VAL-CAT-001"
    """Category overwritten with a different value."""


def get_failure_domain(code: FailureCode | str) -> str:
    """Extract the domain from a failure code.

    Args:
        code: The failure code, or its string value as stored on an exception

    Returns:
        The domain prefix (e.g., "CFG", "RUL", "DOC")
    """
    value = code.value if isinstance(code, FailureCode) else code
    return value.split("-")[0]
