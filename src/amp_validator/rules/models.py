"""Rule-table models for the tag-spec engine."""

import re
from collections.abc import Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)


def _check_regex(value: str | None) -> str | None:
    if value is not None:
        try:
            re.compile(value)
        except re.error as e:
            msg = f"Invalid regular expression {value!r}: {e}"
            raise ValueError(msg) from e
    return value


class PropertySpec(BaseModel):
    """One ``name=value`` entry allowed inside an attribute value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(description="Property name, compared case-insensitively")
    mandatory: bool = Field(default=False, description="Property must be present")
    value: str | None = Field(
        default=None, description="Required value (case-insensitive), any if unset"
    )


class UrlSpec(BaseModel):
    """Constraints for attributes holding a URL."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    allowed_protocols: list[str] = Field(
        default_factory=lambda: ["http", "https"],
        description="Schemes accepted for absolute URLs",
    )
    allow_empty: bool = Field(default=False, description="Accept an empty value")


class AttrSpec(BaseModel):
    """Constraints for one attribute of a tag."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    mandatory: bool = False
    value: str | None = Field(default=None, description="Exact required value")
    value_casei: str | None = Field(
        default=None, description="Required value, compared case-insensitively"
    )
    value_regex: str | None = Field(
        default=None, description="Pattern the whole value must match"
    )
    deprecation: str | None = Field(
        default=None, description="Replacement to suggest when the attribute is used"
    )
    url: UrlSpec | None = None
    properties: list[PropertySpec] | None = Field(
        default=None,
        description="Parse the value as a comma separated name=value list",
    )
    allow_unlisted_properties: bool = False

    @field_validator("value_regex")
    @classmethod
    def _valid_regex(cls, v: str | None) -> str | None:
        return _check_regex(v)

    def value_matches(self, value: str) -> bool:
        if self.value is not None and value != self.value:
            return False
        if self.value_casei is not None and value.lower() != self.value_casei.lower():
            return False
        if self.value_regex is not None:
            return re.fullmatch(self.value_regex, value) is not None
        return True


class TagSpec(BaseModel):
    """Rules for one kind of tag.

    ``match_attrs`` narrows a spec to tags carrying specific attributes, e.g.
    ``meta`` with ``name=viewport``. A ``None`` value only requires presence.
    """

    model_config = ConfigDict(extra="forbid")

    tag_name: str
    spec_name: str = ""
    match_attrs: dict[str, str | None] = Field(default_factory=dict)
    mandatory: bool = False
    unique: bool = False
    mandatory_parent: str | None = None
    deprecation: str | None = None
    requires: list[str] = Field(
        default_factory=list, description="Spec names that must also be present"
    )
    attrs: list[AttrSpec] = Field(default_factory=list)
    mandatory_oneof: list[str] = Field(default_factory=list)
    mutually_exclusive: list[list[str]] = Field(default_factory=list)
    spec_url: str | None = None

    @field_validator("tag_name", "mandatory_parent")
    @classmethod
    def _lowercase(cls, v: str | None) -> str | None:
        return v.lower() if v is not None else v

    @model_validator(mode="after")
    def _default_spec_name(self) -> "TagSpec":
        if not self.spec_name:
            self.spec_name = self.tag_name
        return self

    @property
    def is_specific(self) -> bool:
        return bool(self.match_attrs)

    def matches(self, tag_name: str, attributes: Mapping[str, str]) -> bool:
        if tag_name != self.tag_name:
            return False
        for name, expected in self.match_attrs.items():
            actual = attributes.get(name)
            if actual is None:
                return False
            if expected is not None and actual.lower() != expected.lower():
                return False
        return True


class RuleSet(BaseModel):
    """Complete rule table: disallowed tags and per-tag specs."""

    model_config = ConfigDict(extra="forbid")

    disallowed_tags: list[str] = Field(default_factory=list)
    disallowed_attr_regex: str | None = Field(
        default=None, description="Attribute names matching this are never allowed"
    )
    tags: list[TagSpec] = Field(default_factory=list)

    _by_tag: dict[str, list[TagSpec]] = PrivateAttr(default_factory=dict)

    @field_validator("disallowed_attr_regex")
    @classmethod
    def _valid_regex(cls, v: str | None) -> str | None:
        return _check_regex(v)

    @field_validator("disallowed_tags")
    @classmethod
    def _lowercase_tags(cls, v: list[str]) -> list[str]:
        return [tag.lower() for tag in v]

    @model_validator(mode="after")
    def _unique_spec_names(self) -> "RuleSet":
        seen: set[str] = set()
        for spec in self.tags:
            if spec.spec_name in seen:
                msg = f"Duplicate tag spec name: {spec.spec_name}"
                raise ValueError(msg)
            seen.add(spec.spec_name)
        return self

    def model_post_init(self, __context: object) -> None:
        for spec in self.tags:
            self._by_tag.setdefault(spec.tag_name, []).append(spec)
        for specs in self._by_tag.values():
            # stable: file order is kept within each group
            specs.sort(key=lambda spec: not spec.is_specific)

    def is_disallowed_tag(self, tag_name: str) -> bool:
        return tag_name in self.disallowed_tags

    def is_disallowed_attr(self, attr_name: str) -> bool:
        if self.disallowed_attr_regex is None:
            return False
        return re.match(self.disallowed_attr_regex, attr_name) is not None

    def find_spec(self, tag_name: str, attributes: Mapping[str, str]) -> TagSpec | None:
        """Return the most specific spec matching the tag, if any."""
        for spec in self._by_tag.get(tag_name, []):
            if spec.matches(tag_name, attributes):
                return spec
        return None
