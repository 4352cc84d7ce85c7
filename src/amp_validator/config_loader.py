"""Config loader utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as SettingsError

from .config_settings import Config
from .error_codes import FailureCode
from .exceptions import ConfigurationError
from .utils.logging import get_logger

CONFIG_ENV_VAR = "AMP_VALIDATOR_CONFIG"
DEFAULT_CONFIG_NAME = "amp-validator.yaml"


def _candidate_paths(config_path: Path | None) -> list[Path]:
    if config_path:
        return [config_path.expanduser()]
    candidates: list[Path] = []
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / DEFAULT_CONFIG_NAME)
    return candidates


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from a YAML file and the environment.

    Values in the YAML file take precedence over ``AMP_VALIDATOR_*``
    environment variables. An explicitly passed ``config_path`` must exist;
    default locations are optional.

    Raises:
        ConfigurationError: If the file is missing (explicit path only),
            malformed, or contains invalid values
    """
    logger = get_logger(__name__)

    candidates = _candidate_paths(config_path)
    resolved_config_path = next((p for p in candidates if p.is_file()), None)

    if resolved_config_path is None:
        if config_path:
            msg = f"Config file not found: {config_path}"
            raise ConfigurationError(
                msg,
                error_code=FailureCode.CFG_INVALID.value,
                context={"path": str(config_path)},
            )
        logger.debug(
            "config_file_not_found", searched_paths=[str(p) for p in candidates]
        )

    yaml_data: dict[str, Any] = {}
    if resolved_config_path:
        try:
            with open(resolved_config_path, encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(
                "config_yaml_load_error",
                config_path=str(resolved_config_path),
                error=str(e),
                error_type=type(e).__name__,
            )
            msg = f"Failed to parse config file: {resolved_config_path}"
            suggestion = (
                "Check YAML syntax (indentation, colons, quotes). "
                f"Original error: {e}"
            )
            raise ConfigurationError(
                msg,
                suggestion=suggestion,
                error_code=FailureCode.CFG_YAML_INVALID.value,
                context={"path": str(resolved_config_path)},
            ) from e

        if not isinstance(yaml_data, dict):
            msg = f"Config file must contain a mapping: {resolved_config_path}"
            raise ConfigurationError(
                msg,
                error_code=FailureCode.CFG_YAML_INVALID.value,
                context={"path": str(resolved_config_path)},
            )
        logger.debug(
            "config_yaml_loaded",
            config_path=str(resolved_config_path),
            keys_count=len(yaml_data),
        )

    unknown_keys = sorted(set(yaml_data) - set(Config.model_fields))
    if unknown_keys:
        logger.warning(
            "config_warning",
            message="Ignoring unknown config keys",
            keys=unknown_keys,
        )

    config_kwargs = {k: v for k, v in yaml_data.items() if k in Config.model_fields}
    try:
        config = Config(**config_kwargs)
    except SettingsError as e:
        logger.error(
            "config_validation_error",
            error=str(e),
            config_path=str(resolved_config_path) if resolved_config_path else None,
        )
        msg = "Invalid configuration values"
        raise ConfigurationError(
            msg,
            suggestion=str(e),
            error_code=FailureCode.CFG_INVALID.value,
            context={"errors": e.error_count()},
        ) from e

    config.validate_config()
    logger.debug(
        "config_loaded",
        parser=config.parser,
        ruleset_path=str(config.ruleset_path) if config.ruleset_path else None,
    )
    return config
