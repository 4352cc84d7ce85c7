"""Message templates keyed by violation code.

Templates use positional placeholders: ``%1`` is replaced by the first
parameter of a violation, ``%2`` by the second, and so on.
"""

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from amp_validator.error_codes import FailureCode, ValidationErrorCode
from amp_validator.exceptions import ConfigurationError, TemplateError
from amp_validator.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FORMAT_BY_CODE: dict[ValidationErrorCode, str] = {
    ValidationErrorCode.UNKNOWN_CODE: "Unknown error.",
    ValidationErrorCode.MANDATORY_TAG_MISSING: (
        "The mandatory tag '%1' is missing or incorrect."
    ),
    ValidationErrorCode.TAG_REQUIRED_BY_MISSING: (
        "The '%1' tag is missing or incorrect, but required by '%2'."
    ),
    ValidationErrorCode.DISALLOWED_TAG: "The tag '%1' is disallowed.",
    ValidationErrorCode.DISALLOWED_TAG_ANCESTOR: (
        "The tag '%1' may not appear as a descendant of tag '%2'."
    ),
    ValidationErrorCode.MANDATORY_TAG_ANCESTOR: (
        "The tag '%1' may only appear as a descendant of tag '%2'."
    ),
    ValidationErrorCode.MANDATORY_TAG_ANCESTOR_WITH_HINT: (
        "The tag '%1' may only appear as a descendant of tag '%2'. Did you mean '%3'?"
    ),
    ValidationErrorCode.WRONG_PARENT_TAG: (
        "The parent tag of tag '%1' is '%2', but it can only be '%3'."
    ),
    ValidationErrorCode.DUPLICATE_UNIQUE_TAG: (
        "The tag '%1' appears more than once in the document."
    ),
    ValidationErrorCode.DEPRECATED_TAG: "The tag '%1' is deprecated - use '%2' instead.",
    ValidationErrorCode.DISALLOWED_ATTR: (
        "The attribute '%1' may not appear in tag '%2'."
    ),
    ValidationErrorCode.INVALID_ATTR_VALUE: (
        "The attribute '%1' in tag '%2' is set to the invalid value '%3'."
    ),
    ValidationErrorCode.MANDATORY_ATTR_MISSING: (
        "The mandatory attribute '%1' is missing in tag '%2'."
    ),
    ValidationErrorCode.MANDATORY_ONEOF_ATTR_MISSING: (
        "The tag '%1' is missing a mandatory attribute - pick one of %2."
    ),
    ValidationErrorCode.MUTUALLY_EXCLUSIVE_ATTRS: (
        "Mutually exclusive attributes encountered in tag '%1' - pick one of %2."
    ),
    ValidationErrorCode.DEPRECATED_ATTR: (
        "The attribute '%1' in tag '%2' is deprecated - use '%3' instead."
    ),
    ValidationErrorCode.MISSING_URL: "Missing URL for attribute '%1' in tag '%2'.",
    ValidationErrorCode.INVALID_URL: "Malformed URL '%3' for attribute '%1' in tag '%2'.",
    ValidationErrorCode.INVALID_URL_PROTOCOL: (
        "Invalid URL protocol '%3:' for attribute '%1' in tag '%2'."
    ),
    ValidationErrorCode.DISALLOWED_PROPERTY_IN_ATTR_VALUE: (
        "The property '%1' in attribute '%2' in tag '%3' is disallowed."
    ),
    ValidationErrorCode.INVALID_PROPERTY_VALUE_IN_ATTR_VALUE: (
        "The property '%1' in attribute '%2' in tag '%3' is set to '%4', "
        "which is invalid."
    ),
    ValidationErrorCode.MANDATORY_PROPERTY_MISSING_FROM_ATTR_VALUE: (
        "The property '%1' is missing from attribute '%2' in tag '%3'."
    ),
}


class MessageFormats(Mapping[ValidationErrorCode, str]):
    """Immutable code -> template table.

    Keys may be given as ``ValidationErrorCode`` members or their names.

    Raises:
        TemplateError: If a key is not a known code or a template is not a str
    """

    def __init__(self, format_by_code: Mapping[Any, Any] | None = None) -> None:
        table: dict[ValidationErrorCode, str] = {}
        for raw_code, template in (format_by_code or {}).items():
            try:
                code = ValidationErrorCode(raw_code)
            except ValueError as e:
                msg = f"Message template registered for unknown code: {raw_code!r}"
                raise TemplateError(
                    msg,
                    error_code=FailureCode.VAL_TEMPLATE_INVALID.value,
                    context={"code": str(raw_code)},
                ) from e
            if not isinstance(template, str):
                msg = f"Template for {code.value} must be a string"
                raise TemplateError(
                    msg,
                    error_code=FailureCode.VAL_TEMPLATE_INVALID.value,
                    context={"code": code.value, "type": type(template).__name__},
                )
            table[code] = template
        self._table = MappingProxyType(table)

    @classmethod
    def default(cls) -> "MessageFormats":
        return cls(DEFAULT_FORMAT_BY_CODE)

    def merged(self, overrides: Mapping[Any, Any]) -> "MessageFormats":
        """Return a new table with ``overrides`` applied on top of this one."""
        return MessageFormats({**self._table, **overrides})

    def __getitem__(self, code: ValidationErrorCode) -> str:
        return self._table[code]

    def __iter__(self) -> Iterator[ValidationErrorCode]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)


def load_message_formats(path: Path | None = None) -> MessageFormats:
    """Load the default table, optionally overridden by a YAML file.

    The YAML file is a flat mapping of code name to template.

    Raises:
        ConfigurationError: If the file cannot be read or is not a mapping
        TemplateError: If the mapping references unknown codes
    """
    formats = MessageFormats.default()
    if path is None:
        return formats

    try:
        with open(path, encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Failed to load message templates: {path}"
        raise ConfigurationError(
            msg,
            suggestion="Check that the file exists and is valid YAML",
            error_code=FailureCode.CFG_MESSAGES_INVALID.value,
            context={"path": str(path), "error": str(e)},
        ) from e

    if not isinstance(overrides, dict):
        msg = f"Message template file must contain a mapping: {path}"
        raise ConfigurationError(
            msg,
            error_code=FailureCode.CFG_MESSAGES_INVALID.value,
            context={"path": str(path)},
        )

    logger.debug("message_formats_loaded", path=str(path), overrides=len(overrides))
    return formats.merged(overrides)
