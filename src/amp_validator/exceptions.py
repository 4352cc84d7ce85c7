"""Centralized exception hierarchy for amp-validator.

Content problems found in a document are never raised: they are recorded as
``ValidationError`` entries on a ``ValidationResult``. The exceptions below
are reserved for genuine failures (bad configuration, a missing collaborator,
a malformed message table, a broken internal invariant) and must reach the
caller instead of being folded into the violation list.

Exception Hierarchy:
    AmpValidatorError (base)
     ConfigurationError - Configuration or rule file loading/validation errors
     MissingCollaboratorError - A required collaborator was not supplied
     TemplateError - Message template table is malformed
     DocumentParseError - Markup could not be read or parsed
     InvariantViolationError - Internal invariant broken
        ResultSealedError - Result mutated after rendering started

Usage Examples:
    # Catch all validator failures
    try:
        result = validator.validate_file(path)
    except AmpValidatorError as e:
        logger.error("validation_failed", **e.to_dict())

    # Use structured failure codes
    from amp_validator.error_codes import FailureCode

    raise ConfigurationError(
        "Rule file failed schema validation",
        error_code=FailureCode.RUL_INVALID.value,
        context={"path": str(path)},
    )
"""

from typing import Any

from amp_validator.error_codes import FailureCode


class AmpValidatorError(Exception):
    """Base exception for all validator failures.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging (e.g., file paths, codes)
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            suggestion: Optional suggestion for resolving the error
            error_code: Structured error code (e.g., "RUL-INVALID-001")
            context: Additional context for debugging
        """
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with error code and suggestion if available."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] {self.message}")
        else:
            parts.append(self.message)
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging.

        Returns:
            Dictionary with error details
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


class ConfigurationError(AmpValidatorError):
    """Configuration loading or validation errors.

    Raised when:
    - Config file is missing or malformed
    - A rule set or message table file cannot be parsed
    - Configuration values fail validation
    """


class MissingCollaboratorError(AmpValidatorError):
    """A collaborator required by the pipeline was not supplied.

    Raised by the scanner when the document root, context, rule engine, or
    result is ``None``.
    """

    def __init__(self, collaborator: str, *, suggestion: str | None = None):
        """Initialize missing collaborator error.

        Args:
            collaborator: Name of the missing collaborator
            suggestion: Optional suggestion for resolving the error
        """
        self.collaborator = collaborator
        super().__init__(
            f"Required collaborator '{collaborator}' was not provided",
            suggestion=suggestion,
            error_code=FailureCode.VAL_MISSING_COLLABORATOR.value,
            context={"collaborator": collaborator},
        )


class TemplateError(AmpValidatorError):
    """Message template table is malformed.

    Raised when a template is registered for a code that does not exist, or
    when a template is not a string.
    """


class DocumentParseError(AmpValidatorError):
    """Markup could not be read or parsed into an element tree."""


class InvariantViolationError(AmpValidatorError):
    """An internal invariant of the validation pipeline was broken."""


class ResultSealedError(InvariantViolationError):
    """A result was mutated after rendering had started."""
