"""Tests for configuration loading."""

from pathlib import Path

import pytest

from amp_validator.config import Config, load_config
from amp_validator.error_codes import FailureCode
from amp_validator.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, temp_dir):
    """Keep ambient config files and variables out of these tests."""
    for name in (
        "AMP_VALIDATOR_CONFIG",
        "AMP_VALIDATOR_LOG_LEVEL",
        "AMP_VALIDATOR_PARSER",
        "AMP_VALIDATOR_RULESET_PATH",
        "AMP_VALIDATOR_MESSAGES_PATH",
        "AMP_VALIDATOR_SHOW_CATEGORIES",
        "AMP_VALIDATOR_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(temp_dir)


class TestConfig:
    def test_defaults(self):
        config = Config()

        assert config.log_level == "INFO"
        assert config.parser == "html5lib"
        assert config.ruleset_path is None
        assert config.show_categories is True

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("AMP_VALIDATOR_PARSER", "html.parser")
        monkeypatch.setenv("AMP_VALIDATOR_LOG_LEVEL", "debug")

        config = Config()

        assert config.parser == "html.parser"
        assert config.log_level == "DEBUG"

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            Config(parser="lxml")
        with pytest.raises(ValueError):
            Config(log_level="LOUD")

    def test_validate_config_checks_files(self, temp_dir):
        config = Config(ruleset_path=str(temp_dir / "missing.yaml"))

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate_config()

        assert exc_info.value.error_code == FailureCode.CFG_INVALID.value


class TestLoadConfig:
    def test_without_file(self):
        config = load_config()

        assert config.parser == "html5lib"

    def test_default_file_in_cwd(self, temp_dir):
        (temp_dir / "amp-validator.yaml").write_text(
            "parser: html.parser\nshow_categories: false\n", encoding="utf-8"
        )

        config = load_config()

        assert config.parser == "html.parser"
        assert config.show_categories is False

    def test_env_var_points_to_file(self, temp_dir, monkeypatch):
        path = temp_dir / "custom.yaml"
        path.write_text("log_level: warning\n", encoding="utf-8")
        monkeypatch.setenv("AMP_VALIDATOR_CONFIG", str(path))

        assert load_config().log_level == "WARNING"

    def test_yaml_wins_over_environment(self, temp_dir, monkeypatch):
        path = temp_dir / "custom.yaml"
        path.write_text("parser: html5lib\n", encoding="utf-8")
        monkeypatch.setenv("AMP_VALIDATOR_PARSER", "html.parser")

        assert load_config(path).parser == "html5lib"

    def test_paths_are_converted(self, temp_dir):
        rules = temp_dir / "rules.yaml"
        rules.write_text("tags: []\n", encoding="utf-8")
        path = temp_dir / "custom.yaml"
        path.write_text(f"ruleset_path: {rules}\n", encoding="utf-8")

        config = load_config(path)

        assert config.ruleset_path == Path(rules)

    def test_explicit_missing_file(self, temp_dir):
        with pytest.raises(ConfigurationError):
            load_config(temp_dir / "nope.yaml")

    def test_malformed_yaml(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("parser: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert exc_info.value.error_code == FailureCode.CFG_YAML_INVALID.value

    def test_invalid_value_in_file(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("parser: lxml\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert exc_info.value.error_code == FailureCode.CFG_INVALID.value

    def test_unknown_keys_are_ignored(self, temp_dir):
        path = temp_dir / "extra.yaml"
        path.write_text("parser: html.parser\nflavour: vanilla\n", encoding="utf-8")

        assert load_config(path).parser == "html.parser"
