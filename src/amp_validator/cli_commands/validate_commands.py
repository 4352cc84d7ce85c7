"""CLI commands for validating AMP HTML documents."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from amp_validator.error_codes import ValidationErrorCode
from amp_validator.exceptions import AmpValidatorError
from amp_validator.rules import load_ruleset
from amp_validator.validation import (
    ValidationResult,
    ValidationStatus,
    load_message_formats,
)
from amp_validator.validator import AmpValidator

from .shared import (
    EXIT_FAIL,
    EXIT_UNKNOWN,
    console,
    get_config_and_logger,
    report_failure,
)


def _exit_code(result: ValidationResult) -> int:
    if result.status is ValidationStatus.UNKNOWN:
        return EXIT_UNKNOWN
    if result.status is ValidationStatus.FAIL:
        return EXIT_FAIL
    return 0


def _print_category_summary(result: ValidationResult) -> None:
    summary_table = Table(
        title="Violations by Category", show_header=True, header_style="bold magenta"
    )
    summary_table.add_column("Category", style="cyan")
    summary_table.add_column("Count", style="green")

    for category, count in sorted(result.get_errors_by_category().items()):
        summary_table.add_row(category, str(count))

    console.print()
    console.print(summary_table)


def register(app: typer.Typer) -> None:
    """Register validation commands on the given Typer app."""

    @app.command(name="validate")
    def validate(
        path: Annotated[
            Path,
            typer.Argument(help="HTML file to validate", dir_okay=False),
        ],
        config_path: Annotated[
            Path | None,
            typer.Option("--config", help="Path to amp-validator.yaml", exists=True),
        ] = None,
        rules_path: Annotated[
            Path | None,
            typer.Option("--rules", help="Rule table YAML (overrides config)"),
        ] = None,
        messages_path: Annotated[
            Path | None,
            typer.Option("--messages", help="Message template YAML (overrides config)"),
        ] = None,
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Print the result as JSON instead of text"),
        ] = False,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"),
        ] = None,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Show all log messages on terminal"),
        ] = False,
    ) -> None:
        """Validate an AMP HTML file and print the report.

        Exits with 1 when violations were found and 2 when the document could
        not be validated at all.
        """
        config, logger = get_config_and_logger(config_path, log_level, verbose)
        logger.debug("validate_started", file=str(path), parser=config.parser)

        try:
            ruleset = load_ruleset(rules_path or config.ruleset_path)
            formats = load_message_formats(messages_path or config.messages_path)
        except AmpValidatorError as e:
            report_failure(e)
            raise typer.Exit(code=EXIT_UNKNOWN) from e

        validator = AmpValidator(ruleset=ruleset, formats=formats, parser=config.parser)
        result = validator.validate_file(path)

        if as_json:
            typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        else:
            # Plain echo: the report contains square brackets rich would parse
            typer.echo(validator.render(result), nl=False)
            if config.show_categories and result.errors:
                _print_category_summary(result)

        exit_code = _exit_code(result)
        if exit_code:
            raise typer.Exit(code=exit_code)

    @app.command(name="codes")
    def codes(
        messages_path: Annotated[
            Path | None,
            typer.Option("--messages", help="Message template YAML to show instead"),
        ] = None,
    ) -> None:
        """List violation codes and their message templates."""
        try:
            formats = load_message_formats(messages_path)
        except AmpValidatorError as e:
            report_failure(e)
            raise typer.Exit(code=EXIT_UNKNOWN) from e

        codes_table = Table(
            title="Violation Codes", show_header=True, header_style="bold magenta"
        )
        codes_table.add_column("Code", style="cyan", no_wrap=True)
        codes_table.add_column("Template", style="green")

        for code in ValidationErrorCode:
            codes_table.add_row(code.value, escape(formats.get(code, "")))

        console.print(codes_table)
