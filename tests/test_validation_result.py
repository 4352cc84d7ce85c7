"""Tests for violation records and the result accumulator."""

import pytest

from amp_validator.error_codes import ErrorCategory, FailureCode, ValidationErrorCode
from amp_validator.exceptions import InvariantViolationError, ResultSealedError
from amp_validator.validation import (
    GLOBAL_WARNING,
    ActionTaken,
    ElementIdentity,
    Phase,
    ValidationError,
    ValidationResult,
    ValidationStatus,
)


def _error(code=ValidationErrorCode.DISALLOWED_TAG, *params: str) -> ValidationError:
    return ValidationError(code=code, params=params or ("img",))


class TestValidationError:
    def test_defaults_describe_a_global_violation(self):
        error = ValidationError(code=ValidationErrorCode.MANDATORY_TAG_MISSING)

        assert error.params == ()
        assert error.line == 1
        assert error.element is None
        assert error.context_string == GLOBAL_WARNING
        assert error.phase is Phase.GLOBAL
        assert error.category is None

    def test_code_given_by_name_is_coerced(self):
        error = ValidationError(code="DISALLOWED_TAG", params=["img"])

        assert error.code is ValidationErrorCode.DISALLOWED_TAG

    def test_params_become_an_immutable_tuple_of_str(self):
        params = ["amp-img", 5]
        error = ValidationError(code=ValidationErrorCode.DISALLOWED_ATTR, params=params)
        params.append("late")

        assert error.params == ("amp-img", "5")

    def test_param_out_of_range_is_none(self):
        error = _error(ValidationErrorCode.DISALLOWED_TAG, "img")

        assert error.param(0) == "img"
        assert error.param(1) is None
        assert error.param(-1) is None

    def test_category_can_only_be_written_once(self):
        error = _error()
        error.assign_category(ErrorCategory.DISALLOWED_HTML)
        error.assign_category(ErrorCategory.DISALLOWED_HTML)

        with pytest.raises(InvariantViolationError) as exc_info:
            error.assign_category(ErrorCategory.GENERIC)

        assert exc_info.value.error_code == FailureCode.VAL_CATEGORY_REASSIGNED.value
        assert error.category is ErrorCategory.DISALLOWED_HTML

    def test_to_dict(self):
        error = ValidationError(
            code=ValidationErrorCode.MANDATORY_ATTR_MISSING,
            params=["src", "amp-img"],
            line=7,
            element=ElementIdentity(4, "amp-img"),
            context_string="amp-img",
            phase=Phase.LOCAL,
            spec_url="https://amp.dev/documentation/components/amp-img",
            action_taken=ActionTaken("Added src"),
        )

        data = error.to_dict()

        assert data["code"] == "MANDATORY_ATTR_MISSING"
        assert data["params"] == ["src", "amp-img"]
        assert data["element"] == 4
        assert data["phase"] == "LOCAL"
        assert data["category"] is None
        assert data["action_taken"] == "Added src"


class TestValidationResult:
    def test_errors_keep_insertion_order(self):
        result = ValidationResult()
        errors = [_error(ValidationErrorCode.DISALLOWED_TAG, tag) for tag in "abc"]
        for error in errors:
            result.add_error(error)

        assert list(result.errors) == errors
        assert list(result) == errors
        assert len(result) == 3

    def test_errors_view_is_not_writable(self):
        result = ValidationResult()
        result.add_error(_error())

        assert isinstance(result.errors, tuple)

    def test_add_after_seal_raises(self):
        result = ValidationResult()
        result.add_error(_error())
        result.seal()

        with pytest.raises(ResultSealedError) as exc_info:
            result.add_error(_error())

        assert isinstance(exc_info.value, InvariantViolationError)
        assert exc_info.value.error_code == FailureCode.VAL_RESULT_SEALED.value
        assert len(result) == 1

    def test_finalize_status(self):
        result = ValidationResult()
        assert result.status is ValidationStatus.UNKNOWN

        assert result.finalize_status() is ValidationStatus.PASS

        result.add_error(_error())
        assert result.finalize_status() is ValidationStatus.FAIL

    def test_errors_by_category(self):
        result = ValidationResult()
        first, second, third = _error(), _error(), _error()
        first.assign_category(ErrorCategory.DISALLOWED_HTML)
        second.assign_category(ErrorCategory.DISALLOWED_HTML)
        for error in (first, second, third):
            result.add_error(error)

        assert result.get_errors_by_category() == {
            "DISALLOWED_HTML": 2,
            "UNKNOWN": 1,
        }

    def test_to_dict(self):
        result = ValidationResult(num_tags_processed=9)
        result.add_error(_error())
        result.finalize_status()

        data = result.to_dict()

        assert data["status"] == "FAIL"
        assert data["num_tags_processed"] == 9
        assert [e["code"] for e in data["errors"]] == ["DISALLOWED_TAG"]
