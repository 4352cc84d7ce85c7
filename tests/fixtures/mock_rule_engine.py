"""Rule engine double recording every callback it receives."""

from collections.abc import Mapping
from typing import Any

from amp_validator.error_codes import ValidationErrorCode
from amp_validator.validation import (
    Phase,
    ValidationContext,
    ValidationError,
    ValidationResult,
)


class MockRuleEngine:
    """Records visits and optionally emits one violation per tag name.

    Set ``fail_on`` to a tag name to make ``validate_tag`` raise when it sees
    that tag.
    """

    def __init__(
        self,
        local_errors: Mapping[str, ValidationErrorCode] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.local_errors = dict(local_errors or {})
        self.fail_on = fail_on
        self.visited: list[tuple[str, dict[str, str], Any, Phase]] = []
        self.global_calls: list[tuple[int, Phase, Any]] = []

    def validate_tag(
        self,
        context: ValidationContext,
        tag_name: str,
        attributes: Mapping[str, str],
        result: ValidationResult,
    ) -> None:
        if tag_name == self.fail_on:
            msg = f"engine exploded on {tag_name}"
            raise RuntimeError(msg)
        self.visited.append(
            (tag_name, dict(attributes), context.current_identity, context.phase)
        )
        code = self.local_errors.get(tag_name)
        if code is not None:
            result.add_error(
                ValidationError(
                    code=code,
                    params=[tag_name],
                    line=context.current_line,
                    element=context.current_identity,
                    context_string=tag_name,
                    phase=context.phase,
                )
            )

    def emit_global_errors(
        self,
        context: ValidationContext,
        result: ValidationResult,
        originator: Any,
    ) -> None:
        self.global_calls.append(
            (context.num_tags_processed, context.phase, originator)
        )
