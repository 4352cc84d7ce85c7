"""Tag-spec rule tables and the engine that evaluates them."""

from .engine import TagSpecRuleEngine, parse_properties
from .loader import load_ruleset
from .models import AttrSpec, PropertySpec, RuleSet, TagSpec, UrlSpec

__all__ = [
    "AttrSpec",
    "PropertySpec",
    "RuleSet",
    "TagSpec",
    "TagSpecRuleEngine",
    "UrlSpec",
    "load_ruleset",
    "parse_properties",
]
