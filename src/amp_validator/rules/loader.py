"""Loading rule tables from YAML."""

from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as SchemaError

from amp_validator.error_codes import FailureCode
from amp_validator.exceptions import ConfigurationError
from amp_validator.utils.logging import get_logger

from .models import RuleSet

logger = get_logger(__name__)

DEFAULT_RULES_RESOURCE = "data/default_rules.yaml"


def _read_default_rules() -> str:
    return (
        resources.files("amp_validator.rules")
        .joinpath(DEFAULT_RULES_RESOURCE)
        .read_text(encoding="utf-8")
    )


def load_ruleset(path: Path | None = None) -> RuleSet:
    """Load a rule set from ``path``, or the bundled rules when omitted.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
            does not match the rule schema
    """
    source = str(path) if path is not None else DEFAULT_RULES_RESOURCE

    if path is None:
        text = _read_default_rules()
    else:
        try:
            text = Path(path).expanduser().read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Rule file not found or unreadable: {path}"
            raise ConfigurationError(
                msg,
                suggestion="Pass an existing YAML file with --rules",
                error_code=FailureCode.RUL_NOT_FOUND.value,
                context={"path": source, "error": str(e)},
            ) from e

    try:
        data: Any = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        msg = f"Failed to parse rule file: {source}"
        raise ConfigurationError(
            msg,
            suggestion="Check YAML syntax (indentation, colons, quotes)",
            error_code=FailureCode.RUL_INVALID.value,
            context={"path": source, "error": str(e)},
        ) from e

    if not isinstance(data, dict):
        msg = f"Rule file must contain a mapping: {source}"
        raise ConfigurationError(
            msg,
            error_code=FailureCode.RUL_INVALID.value,
            context={"path": source, "type": type(data).__name__},
        )

    try:
        ruleset = RuleSet.model_validate(data)
    except SchemaError as e:
        msg = f"Rule file failed schema validation: {source}"
        raise ConfigurationError(
            msg,
            suggestion="See the bundled default_rules.yaml for the expected layout",
            error_code=FailureCode.RUL_INVALID.value,
            context={"path": source, "errors": e.error_count()},
        ) from e

    logger.debug(
        "ruleset_loaded",
        path=source,
        tag_specs=len(ruleset.tags),
        disallowed_tags=len(ruleset.disallowed_tags),
    )
    return ruleset
