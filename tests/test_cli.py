"""Tests for the amp-validator command line."""

import json

import pytest
from typer.testing import CliRunner

from amp_validator.cli import app

runner = CliRunner()

QUIET = ["--log-level", "ERROR"]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, temp_dir):
    monkeypatch.delenv("AMP_VALIDATOR_CONFIG", raising=False)
    monkeypatch.chdir(temp_dir)


@pytest.fixture
def page(temp_dir, valid_html):
    path = temp_dir / "page.html"
    path.write_text(valid_html, encoding="utf-8")
    return path


@pytest.fixture
def bad_page(temp_dir, valid_html):
    path = temp_dir / "bad.html"
    path.write_text(
        valid_html.replace("<h1>Hello</h1>", '<img src="cat.png">'), encoding="utf-8"
    )
    return path


def test_valid_file_passes(page):
    result = runner.invoke(app, ["validate", str(page), *QUIET])

    assert result.exit_code == 0
    assert result.output.startswith("PASS\n")


def test_invalid_file_fails(bad_page):
    result = runner.invoke(app, ["validate", str(bad_page), *QUIET])

    assert result.exit_code == 1
    assert result.output.startswith("FAIL\n")
    assert "- The tag 'img' is disallowed." in result.output
    assert "category: DISALLOWED_HTML_WITH_AMP_EQUIVALENT" in result.output
    assert "Violations by Category" in result.output


def test_missing_file_is_unknown(temp_dir):
    result = runner.invoke(app, ["validate", str(temp_dir / "nope.html"), *QUIET])

    assert result.exit_code == 2
    assert result.output.startswith("UNKNOWN\n")


def test_json_output(bad_page):
    result = runner.invoke(app, ["validate", str(bad_page), "--json", *QUIET])

    assert result.exit_code == 1
    data = json.loads(result.output)
    assert data["status"] == "FAIL"
    assert data["errors"][0]["code"] == "DISALLOWED_TAG"
    assert data["errors"][0]["params"] == ["img"]


def test_messages_override(bad_page, temp_dir):
    messages = temp_dir / "messages.yaml"
    messages.write_text("DISALLOWED_TAG: 'No %1 allowed'\n", encoding="utf-8")

    result = runner.invoke(
        app, ["validate", str(bad_page), "--messages", str(messages), *QUIET]
    )

    assert "- No img allowed" in result.output


def test_rules_override(page, temp_dir):
    rules = temp_dir / "rules.yaml"
    rules.write_text("disallowed_tags: [h1]\n", encoding="utf-8")

    result = runner.invoke(app, ["validate", str(page), "--rules", str(rules), *QUIET])

    assert result.exit_code == 1
    assert "The tag 'h1' is disallowed." in result.output


def test_broken_rules_file(page, temp_dir):
    rules = temp_dir / "rules.yaml"
    rules.write_text("tags: [\n", encoding="utf-8")

    result = runner.invoke(app, ["validate", str(page), "--rules", str(rules), *QUIET])

    assert result.exit_code == 2
    assert "Failed to parse rule file" in result.output
    assert "Code: RUL-INVALID-001 (rule set)" in result.output


def test_config_file_hides_categories(bad_page, temp_dir):
    config = temp_dir / "amp-validator.yaml"
    config.write_text("show_categories: false\n", encoding="utf-8")

    result = runner.invoke(
        app, ["validate", str(bad_page), "--config", str(config), *QUIET]
    )

    assert result.exit_code == 1
    assert "Violations by Category" not in result.output


def test_codes_lists_every_code():
    result = runner.invoke(app, ["codes"])

    assert result.exit_code == 0
    assert "Violation Codes" in result.output
    assert "MANDATORY_TAG_MISSING" in result.output
    assert "DISALLOWED_PROPERTY_IN_ATTR_VALUE" in result.output
