"""Human-readable rendering of validation results."""

import re
from enum import Enum

from amp_validator.utils.logging import get_logger

from .base import GLOBAL_WARNING, ValidationError, ValidationResult
from .categorizer import ErrorCategorizer
from .context import Phase
from .identity import ElementIdentity
from .messages import MessageFormats

logger = get_logger(__name__)

_PLACEHOLDER = re.compile(r"%(\d+)")

INDENT = "   "
# Label used when a violation carries no code
MISSING_CODE_LABEL = "UNKNOWN_CODE"


class _GroupState(Enum):
    NEW_GROUP = "new_group"
    SAME_GROUP = "same_group"


def apply_format(template: str, params: tuple[str, ...]) -> str:
    """Replace ``%k`` with ``params[k - 1]``.

    A single pass over the template, so parameter values are never themselves
    scanned for placeholders and ``%12`` is never read as ``%1`` + ``2``.
    Placeholders without a matching parameter are left as written.
    """

    def _substitute(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if 1 <= index <= len(params):
            return params[index - 1]
        return match.group(0)

    return _PLACEHOLDER.sub(_substitute, template)


class ResultRenderer:
    """Turns a ``ValidationResult`` into grouped report text.

    Example:
        renderer = ResultRenderer(MessageFormats.default())
        print(renderer.render(result), end="")
    """

    def __init__(
        self,
        formats: MessageFormats,
        categorizer: ErrorCategorizer | None = None,
    ) -> None:
        self.formats = formats
        self.categorizer = categorizer or ErrorCategorizer()

    def render_error_message(self, error: ValidationError) -> str:
        code_text = error.code.value if error.code else MISSING_CODE_LABEL
        template = self.formats.get(error.code) if error.code else None
        if template and error.params:
            return apply_format(template, tuple(error.params))
        return code_text + (error.detail or "")

    def error_line(self, error: ValidationError) -> str:
        """One bullet per violation plus its metadata bracket."""
        code_text = error.code.value if error.code else MISSING_CODE_LABEL
        metadata = f"code: {code_text}"
        if error.category is not None:
            metadata += f" category: {error.category.value}"
        if error.spec_url:
            metadata += f" see: {error.spec_url}"

        line = f"- {self.render_error_message(error)}\n{INDENT}[{metadata}]"
        if error.action_taken is not None:
            line += f"\n{INDENT}{error.action_taken.human_description}"
        return line

    def render(self, result: ValidationResult) -> str:
        """Render the full report.

        Categorizes the result first and seals it: no violation may be
        appended once rendering has started.
        """
        self.categorizer.annotate(result)
        result.seal()

        status = "PASS" if not result.errors else result.status.value
        lines = [status]

        state = _GroupState.NEW_GROUP
        last_context_string: str | None = None
        last_local_element: ElementIdentity | None = None
        seen_local = False

        for index, error in enumerate(result.errors):
            if index > 0:
                state = _GroupState.SAME_GROUP
                if error.context_string != last_context_string:
                    state = _GroupState.NEW_GROUP
                elif (
                    error.phase is Phase.LOCAL
                    and seen_local
                    and error.element != last_local_element
                ):
                    state = _GroupState.NEW_GROUP

            if state is _GroupState.NEW_GROUP:
                lines.append("")
                if error.context_string == GLOBAL_WARNING:
                    lines.append(GLOBAL_WARNING)
                else:
                    lines.append(f"{error.context_string} on line {error.line}")

            lines.append(self.error_line(error))

            last_context_string = error.context_string
            if error.phase is Phase.LOCAL:
                last_local_element = error.element
                seen_local = True

        logger.debug(
            "result_rendered",
            status=status,
            errors=len(result.errors),
        )
        return "\n".join(lines) + "\n"
