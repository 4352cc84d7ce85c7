"""Command-line interface for the AMP HTML validator."""

from __future__ import annotations

import typer

from .cli_commands import validate_commands

app = typer.Typer(
    name="amp-validator",
    help="Validate AMP HTML documents and report categorized violations.",
    no_args_is_help=True,
)

validate_commands.register(app)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
