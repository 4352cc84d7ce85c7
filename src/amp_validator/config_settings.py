"""Settings model for the validator."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .error_codes import FailureCode
from .exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(BaseSettings):
    """Validator configuration using pydantic-settings.

    Every field can be set from the environment with the ``AMP_VALIDATOR_``
    prefix, e.g. ``AMP_VALIDATOR_PARSER=html.parser``.
    """

    model_config = SettingsConfigDict(
        env_prefix="AMP_VALIDATOR_",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    log_level: str = Field(default="INFO", description="Log level")
    log_file: Path | None = Field(
        default=None, description="Optional JSON log file (rotated)"
    )
    ruleset_path: Path | None = Field(
        default=None, description="Rule table YAML; bundled rules when unset"
    )
    messages_path: Path | None = Field(
        default=None, description="YAML overriding message templates by code"
    )
    parser: Literal["html5lib", "html.parser"] = Field(
        default="html5lib", description="BeautifulSoup tree builder"
    )
    show_categories: bool = Field(
        default=True, description="Print the per-category summary after the report"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        level = str(v).upper()
        if level not in LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}"
            raise ValueError(msg)
        return level

    @field_validator("log_file", "ruleset_path", "messages_path", mode="before")
    @classmethod
    def parse_path(cls, v: Any) -> Path | None:
        """Convert string to Path."""
        if v is None or v == "":
            return None
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        msg = f"Expected a path, got {type(v).__name__}"
        raise ValueError(msg)

    def validate_config(self) -> Config:
        """Check that referenced files exist."""
        for field_name in ("ruleset_path", "messages_path"):
            path = getattr(self, field_name)
            if path is not None and not path.is_file():
                msg = f"{field_name} does not point to a file: {path}"
                raise ConfigurationError(
                    msg,
                    suggestion=f"Fix {field_name} in the config file or unset it",
                    error_code=FailureCode.CFG_INVALID.value,
                    context={"field": field_name, "path": str(path)},
                )
        return self
