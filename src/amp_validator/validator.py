"""Validation orchestrator.

Coordinates parsing, scanning, categorizing and rendering for one document
at a time.
"""

from pathlib import Path
from typing import Any

from amp_validator.document import HtmlDocument
from amp_validator.error_codes import ValidationErrorCode
from amp_validator.exceptions import DocumentParseError
from amp_validator.rules import RuleSet, TagSpecRuleEngine, load_ruleset
from amp_validator.utils.logging import get_logger
from amp_validator.validation import (
    DocumentScanner,
    ErrorCategorizer,
    MessageFormats,
    ResultRenderer,
    ValidationContext,
    ValidationError,
    ValidationResult,
    ValidationStatus,
)

logger = get_logger(__name__)


class AmpValidator:
    """Main entry point for validating AMP HTML documents.

    Every call allocates its own context, result, and rule engine, so one
    validator instance can be shared between independent documents.
    """

    def __init__(
        self,
        ruleset: RuleSet | None = None,
        formats: MessageFormats | None = None,
        parser: str = "html5lib",
    ) -> None:
        """Initialize the validator.

        Args:
            ruleset: Tag rules to enforce (defaults to the bundled rule set)
            formats: Message templates for rendering (defaults to built-ins)
            parser: BeautifulSoup tree builder used for markup input
        """
        self.ruleset = ruleset if ruleset is not None else load_ruleset()
        self.formats = formats if formats is not None else MessageFormats.default()
        self.parser = parser
        self.scanner = DocumentScanner()
        self.categorizer = ErrorCategorizer()
        self.renderer = ResultRenderer(self.formats, self.categorizer)

    def validate_document(self, document_root: Any) -> ValidationResult:
        """Validate an already-parsed document tree."""
        context = ValidationContext()
        result = ValidationResult()
        engine = TagSpecRuleEngine(self.ruleset)

        self.scanner.scan(document_root, context, engine, result)

        result.num_tags_processed = context.num_tags_processed
        result.finalize_status()
        self.categorizer.annotate(result)

        logger.info(
            "validation_completed",
            file=getattr(document_root, "source", None),
            status=result.status.value,
            errors=len(result),
            tags_processed=result.num_tags_processed,
        )
        return result

    def validate_string(self, markup: str, source: str | None = None) -> ValidationResult:
        """Parse and validate markup."""
        try:
            document = HtmlDocument.from_string(markup, parser=self.parser, source=source)
        except DocumentParseError as e:
            return self._parse_failure(e, source)
        return self.validate_document(document)

    def validate_file(self, path: Path) -> ValidationResult:
        """Read, parse and validate an HTML file.

        Unreadable or unparseable files yield a result with status UNKNOWN
        rather than an exception.
        """
        try:
            document = HtmlDocument.from_path(path, parser=self.parser)
        except DocumentParseError as e:
            return self._parse_failure(e, str(path))
        return self.validate_document(document)

    def render(self, result: ValidationResult) -> str:
        return self.renderer.render(result)

    def _parse_failure(
        self, error: DocumentParseError, source: str | None
    ) -> ValidationResult:
        logger.warning(
            "validation_unknown",
            file=source,
            error=error.message,
            error_code=error.error_code,
        )
        result = ValidationResult(status=ValidationStatus.UNKNOWN)
        result.add_error(
            ValidationError(
                code=ValidationErrorCode.UNKNOWN_CODE,
                detail=f": {error.message}",
            )
        )
        self.categorizer.annotate(result)
        return result
