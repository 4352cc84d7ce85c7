"""Shared utilities for CLI commands."""

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from amp_validator.config import Config, load_config
from amp_validator.error_codes import get_failure_domain
from amp_validator.exceptions import AmpValidatorError
from amp_validator.utils.logging import configure_logging, get_logger

# Shared console for all commands
console = Console()

EXIT_FAIL = 1
EXIT_UNKNOWN = 2

FAILURE_AREAS = {
    "CFG": "configuration",
    "RUL": "rule set",
    "DOC": "document",
    "VAL": "validation pipeline",
}


def get_config_and_logger(
    config_path: Path | None = None,
    log_level: str | None = None,
    verbose: bool = False,
) -> tuple[Config, Any]:
    """Load configuration and configure logging for one command invocation.

    Args:
        config_path: Optional path to config file
        log_level: Logging level; falls back to the configured level
        verbose: Show all log messages on terminal (for debugging)

    Returns:
        Tuple of (Config, Logger)
    """
    try:
        config = load_config(config_path)
    except AmpValidatorError as e:
        report_failure(e)
        raise typer.Exit(code=EXIT_UNKNOWN) from e

    configure_logging(
        log_level or config.log_level,
        log_file=config.log_file,
        verbose=verbose,
    )
    return config, get_logger("cli")


def report_failure(error: AmpValidatorError) -> None:
    """Print a validator failure in the CLI's error style."""
    console.print(
        f"[bold red]Error:[/bold red] {escape(error.message)}", highlight=False
    )
    if error.suggestion:
        console.print(
            f"[dim]Suggestion: {escape(error.suggestion)}[/dim]", highlight=False
        )
    if error.error_code:
        domain = get_failure_domain(error.error_code)
        area = FAILURE_AREAS.get(domain, domain)
        console.print(
            f"[dim]Code: {error.error_code} ({area})[/dim]", highlight=False
        )
