"""Single-pass document traversal feeding the rule engine."""

from collections.abc import Iterator, Mapping
from typing import Any, Protocol

from amp_validator.exceptions import MissingCollaboratorError
from amp_validator.utils.logging import get_logger

from .base import ValidationResult
from .context import ValidationContext
from .identity import ElementIdentityArena

logger = get_logger(__name__)


class RuleEngine(Protocol):
    """Evaluates elements against a rule set and appends violations."""

    def validate_tag(
        self,
        context: ValidationContext,
        tag_name: str,
        attributes: Mapping[str, str],
        result: ValidationResult,
    ) -> None: ...

    def emit_global_errors(
        self,
        context: ValidationContext,
        result: ValidationResult,
        originator: Any,
    ) -> None: ...


def iter_elements(document_root: Any) -> Iterator[Any]:
    """Yield every element below ``document_root`` in document order.

    Pre-order, depth-first: a parent is yielded before its children and
    siblings keep their source order.
    """
    stack = list(reversed(document_root.children))
    while stack:
        element = stack.pop()
        yield element
        stack.extend(reversed(element.children))


class DocumentScanner:
    """Visits every element once and delegates checks to a rule engine.

    Example:
        scanner = DocumentScanner()
        scanner.scan(document, ValidationContext(), engine, result)
    """

    name = "standard_scan"

    def scan(
        self,
        document_root: Any,
        context: ValidationContext,
        rule_engine: RuleEngine,
        result: ValidationResult,
    ) -> None:
        """Walk the document, then run cross-element checks.

        Args:
            document_root: Node whose element descendants are validated
            context: Per-run context; updated with the element being visited
            rule_engine: Engine evaluating each tag
            result: Result receiving appended violations

        Raises:
            MissingCollaboratorError: If any collaborator is None
        """
        for label, collaborator in (
            ("document_root", document_root),
            ("context", context),
            ("rule_engine", rule_engine),
            ("result", result),
        ):
            if collaborator is None:
                raise MissingCollaboratorError(
                    label,
                    suggestion="Pass a fresh ValidationContext and ValidationResult per run",
                )

        arena = ElementIdentityArena()
        count = 0
        errors_before = len(result)

        for element in iter_elements(document_root):
            count += 1
            context.attach_element(element, arena.identify(element))
            attributes = dict(element.attributes)
            try:
                rule_engine.validate_tag(context, element.name, attributes, result)
            except Exception as e:
                logger.error(
                    "rule_engine_failed",
                    phase="local",
                    tag=element.name,
                    line=getattr(element, "line", None),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

        context.set_num_tags_processed(count)
        context.enter_global_phase()
        try:
            rule_engine.emit_global_errors(context, result, self)
        except Exception as e:
            logger.error(
                "rule_engine_failed",
                phase="global",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        logger.debug(
            "scan_completed",
            tags_processed=count,
            errors_added=len(result) - errors_before,
        )
