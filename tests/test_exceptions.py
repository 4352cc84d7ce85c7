"""Tests for the exception hierarchy and failure codes."""

from amp_validator.error_codes import FailureCode, get_failure_domain
from amp_validator.exceptions import (
    AmpValidatorError,
    ConfigurationError,
    MissingCollaboratorError,
    InvariantViolationError,
    ResultSealedError,
)


def test_message_includes_code_and_suggestion():
    error = ConfigurationError(
        "Rule file failed schema validation",
        suggestion="Check the rule layout",
        error_code=FailureCode.RUL_INVALID.value,
    )

    assert str(error) == (
        "[RUL-INVALID-001] Rule file failed schema validation\n"
        "Suggestion: Check the rule layout"
    )


def test_to_dict():
    error = MissingCollaboratorError("rule_engine")

    data = error.to_dict()

    assert data["type"] == "MissingCollaboratorError"
    assert data["error_code"] == FailureCode.VAL_MISSING_COLLABORATOR.value
    assert data["context"] == {"collaborator": "rule_engine"}


def test_sealed_error_is_an_invariant_violation():
    assert issubclass(ResultSealedError, InvariantViolationError)
    assert issubclass(ResultSealedError, AmpValidatorError)


def test_failure_domain():
    assert get_failure_domain(FailureCode.CFG_YAML_INVALID) == "CFG"
    assert get_failure_domain(FailureCode.VAL_RESULT_SEALED) == "VAL"
    assert get_failure_domain("RUL-PATH-001") == "RUL"
