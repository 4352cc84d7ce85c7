"""Data-driven rule engine evaluating tags against a ``RuleSet``."""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from amp_validator.error_codes import ValidationErrorCode as Code
from amp_validator.utils.logging import get_logger
from amp_validator.validation import (
    GLOBAL_WARNING,
    Phase,
    ValidationContext,
    ValidationError,
    ValidationResult,
)

from .models import AttrSpec, RuleSet, TagSpec

logger = get_logger(__name__)

_PROPERTY_SEPARATOR = re.compile(r"[,;]")


def parse_properties(value: str) -> dict[str, str]:
    """Parse ``a=1, b=2`` into ``{"a": "1", "b": "2"}``.

    Names are lowercased; entries without ``=`` get an empty value.
    """
    properties: dict[str, str] = {}
    for entry in _PROPERTY_SEPARATOR.split(value):
        entry = entry.strip()
        if not entry:
            continue
        name, _, prop_value = entry.partition("=")
        properties[name.strip().lower()] = prop_value.strip()
    return properties


class TagSpecRuleEngine:
    """Checks tags one at a time, then the document as a whole.

    Holds per-run state (which specs were seen), so a fresh engine is needed
    for every document.
    """

    def __init__(self, ruleset: RuleSet) -> None:
        self.ruleset = ruleset
        # insertion-ordered so global violations come out deterministically
        self._seen_specs: dict[str, TagSpec] = {}

    def validate_tag(
        self,
        context: ValidationContext,
        tag_name: str,
        attributes: Mapping[str, str],
        result: ValidationResult,
    ) -> None:
        tag_name = tag_name.lower()

        if self.ruleset.is_disallowed_tag(tag_name):
            self._local(context, result, tag_name, Code.DISALLOWED_TAG, [tag_name])
            return

        spec = self.ruleset.find_spec(tag_name, attributes)
        label = spec.spec_name if spec else tag_name

        for attr_name in attributes:
            if self.ruleset.is_disallowed_attr(attr_name):
                self._local(
                    context,
                    result,
                    tag_name,
                    Code.DISALLOWED_ATTR,
                    [attr_name, label],
                    spec,
                )

        if spec is None:
            return

        if spec.deprecation:
            self._local(
                context,
                result,
                tag_name,
                Code.DEPRECATED_TAG,
                [spec.spec_name, spec.deprecation],
                spec,
            )

        if spec.mandatory_parent is not None:
            parent = getattr(context.current_element, "parent_name", None) or ""
            if parent != spec.mandatory_parent:
                self._local(
                    context,
                    result,
                    tag_name,
                    Code.WRONG_PARENT_TAG,
                    [tag_name, parent, spec.mandatory_parent],
                    spec,
                )

        if spec.unique and spec.spec_name in self._seen_specs:
            self._local(
                context,
                result,
                tag_name,
                Code.DUPLICATE_UNIQUE_TAG,
                [spec.spec_name],
                spec,
            )
        self._seen_specs.setdefault(spec.spec_name, spec)

        for attr_spec in spec.attrs:
            self._check_attr(context, result, tag_name, spec, attr_spec, attributes)

        if spec.mandatory_oneof and not any(
            name in attributes for name in spec.mandatory_oneof
        ):
            self._local(
                context,
                result,
                tag_name,
                Code.MANDATORY_ONEOF_ATTR_MISSING,
                [spec.spec_name, ", ".join(spec.mandatory_oneof)],
                spec,
            )

        for group in spec.mutually_exclusive:
            if sum(1 for name in group if name in attributes) > 1:
                self._local(
                    context,
                    result,
                    tag_name,
                    Code.MUTUALLY_EXCLUSIVE_ATTRS,
                    [spec.spec_name, ", ".join(group)],
                    spec,
                )

    def emit_global_errors(
        self,
        context: ValidationContext,
        result: ValidationResult,
        originator: Any,
    ) -> None:
        errors_before = len(result)

        for spec in self.ruleset.tags:
            if spec.mandatory and spec.spec_name not in self._seen_specs:
                self._global(result, Code.MANDATORY_TAG_MISSING, [spec.spec_name], spec)

        for spec in self._seen_specs.values():
            for required in spec.requires:
                if required not in self._seen_specs:
                    self._global(
                        result,
                        Code.TAG_REQUIRED_BY_MISSING,
                        [required, spec.spec_name],
                        spec,
                    )

        logger.debug(
            "global_checks_completed",
            originator=getattr(originator, "name", type(originator).__name__),
            tags_processed=context.num_tags_processed,
            errors_added=len(result) - errors_before,
        )

    def _check_attr(
        self,
        context: ValidationContext,
        result: ValidationResult,
        tag_name: str,
        spec: TagSpec,
        attr_spec: AttrSpec,
        attributes: Mapping[str, str],
    ) -> None:
        name = attr_spec.name
        value = attributes.get(name)

        if value is None:
            if attr_spec.mandatory:
                self._local(
                    context,
                    result,
                    tag_name,
                    Code.MANDATORY_ATTR_MISSING,
                    [name, spec.spec_name],
                    spec,
                )
            return

        if attr_spec.deprecation:
            self._local(
                context,
                result,
                tag_name,
                Code.DEPRECATED_ATTR,
                [name, spec.spec_name, attr_spec.deprecation],
                spec,
            )

        if attr_spec.url is not None:
            self._check_url(context, result, tag_name, spec, attr_spec, value)
        elif attr_spec.properties is not None:
            self._check_properties(context, result, tag_name, spec, attr_spec, value)
        elif not attr_spec.value_matches(value):
            self._local(
                context,
                result,
                tag_name,
                Code.INVALID_ATTR_VALUE,
                [name, spec.spec_name, value],
                spec,
            )

    def _check_url(
        self,
        context: ValidationContext,
        result: ValidationResult,
        tag_name: str,
        spec: TagSpec,
        attr_spec: AttrSpec,
        value: str,
    ) -> None:
        url_spec = attr_spec.url
        assert url_spec is not None
        url = value.strip()

        if not url:
            if not url_spec.allow_empty:
                self._local(
                    context,
                    result,
                    tag_name,
                    Code.MISSING_URL,
                    [attr_spec.name, spec.spec_name],
                    spec,
                )
            return

        try:
            scheme = urlsplit(url).scheme
        except ValueError:
            scheme = None
        if scheme is None or any(ch.isspace() for ch in url):
            self._local(
                context,
                result,
                tag_name,
                Code.INVALID_URL,
                [attr_spec.name, spec.spec_name, url],
                spec,
            )
            return

        # relative URLs have no scheme and inherit the document's
        allowed = [protocol.lower() for protocol in url_spec.allowed_protocols]
        if scheme and scheme.lower() not in allowed:
            self._local(
                context,
                result,
                tag_name,
                Code.INVALID_URL_PROTOCOL,
                [attr_spec.name, spec.spec_name, scheme.lower()],
                spec,
            )

    def _check_properties(
        self,
        context: ValidationContext,
        result: ValidationResult,
        tag_name: str,
        spec: TagSpec,
        attr_spec: AttrSpec,
        value: str,
    ) -> None:
        parsed = parse_properties(value)
        known = {prop.name.lower(): prop for prop in attr_spec.properties or []}

        for prop_name, prop_value in parsed.items():
            prop_spec = known.get(prop_name)
            if prop_spec is None:
                if not attr_spec.allow_unlisted_properties:
                    self._local(
                        context,
                        result,
                        tag_name,
                        Code.DISALLOWED_PROPERTY_IN_ATTR_VALUE,
                        [prop_name, attr_spec.name, spec.spec_name],
                        spec,
                    )
                continue
            if (
                prop_spec.value is not None
                and prop_value.lower() != prop_spec.value.lower()
            ):
                self._local(
                    context,
                    result,
                    tag_name,
                    Code.INVALID_PROPERTY_VALUE_IN_ATTR_VALUE,
                    [prop_name, attr_spec.name, spec.spec_name, prop_value],
                    spec,
                )

        for prop_name, prop_spec in known.items():
            if prop_spec.mandatory and prop_name not in parsed:
                self._local(
                    context,
                    result,
                    tag_name,
                    Code.MANDATORY_PROPERTY_MISSING_FROM_ATTR_VALUE,
                    [prop_name, attr_spec.name, spec.spec_name],
                    spec,
                )

    def _local(
        self,
        context: ValidationContext,
        result: ValidationResult,
        tag_name: str,
        code: Code,
        params: list[str],
        spec: TagSpec | None = None,
    ) -> None:
        result.add_error(
            ValidationError(
                code=code,
                params=params,
                line=context.current_line,
                element=context.current_identity,
                context_string=tag_name,
                phase=Phase.LOCAL,
                spec_url=spec.spec_url if spec else None,
            )
        )

    def _global(
        self,
        result: ValidationResult,
        code: Code,
        params: list[str],
        spec: TagSpec,
    ) -> None:
        result.add_error(
            ValidationError(
                code=code,
                params=params,
                line=1,
                element=None,
                context_string=GLOBAL_WARNING,
                phase=Phase.GLOBAL,
                spec_url=spec.spec_url,
            )
        )
