"""Pytest configuration and fixtures for the test suite."""

import pytest

from amp_validator.rules import RuleSet, load_ruleset
from amp_validator.validation import MessageFormats
from amp_validator.validator import AmpValidator
from tests.fixtures import MockDocument, MockRuleEngine, element

VALID_AMP_HTML = """<!doctype html>
<html ⚡ lang="en">
<head>
<meta charset="utf-8">
<script async src="https://cdn.ampproject.org/v0.js"></script>
<title>Hello</title>
<link rel="canonical" href="https://example.com/hello.html">
<meta name="viewport" content="width=device-width,minimum-scale=1,initial-scale=1">
</head>
<body>
<h1>Hello</h1>
<amp-img src="https://example.com/a.png" width="600" height="400" layout="responsive"></amp-img>
</body>
</html>
"""


@pytest.fixture
def sample_document() -> MockDocument:
    """html > (head > meta, body > (div > span, amp-img))"""
    return MockDocument(
        [
            element(
                "html",
                element("head", element("meta", line=3, charset="utf-8"), line=2),
                element(
                    "body",
                    element("div", element("span", line=6), line=5, id="main"),
                    element("amp-img", line=7, src="a.png", width="10"),
                    line=4,
                ),
                line=1,
            )
        ]
    )


@pytest.fixture
def mock_rule_engine() -> MockRuleEngine:
    """Provide a recording rule engine for testing."""
    return MockRuleEngine()


@pytest.fixture
def default_ruleset() -> RuleSet:
    """Provide the bundled rule table."""
    return load_ruleset()


@pytest.fixture
def validator(default_ruleset: RuleSet) -> AmpValidator:
    return AmpValidator(ruleset=default_ruleset)


@pytest.fixture
def formats() -> MessageFormats:
    return MessageFormats.default()


@pytest.fixture
def valid_html() -> str:
    """Provide a minimal document that passes the bundled rules."""
    return VALID_AMP_HTML


@pytest.fixture
def temp_dir(tmp_path):
    """Alias for pytest's tmp_path fixture."""
    return tmp_path
