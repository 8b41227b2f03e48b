"""Main entry point for the security scan engine CLI.

This module provides the command-line interface, including commands for:
- Scanning a JavaScript or TypeScript source file
- Listing the pattern rules applied by the current configuration
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from security_scan.cli import list_rules_command, scan_command

# Load environment variables from .env file if it exists
_ = load_dotenv()

app = typer.Typer(name="security-scan")


@app.command()
def scan(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path to the source file to scan",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    language: Annotated[
        str | None,
        typer.Option(
            "--language",
            "-l",
            help="Language name, alias or extension (defaults to the file extension)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Save the scan outcome to a JSON file",
            file_okay=True,
            dir_okay=False,
            writable=True,
            rich_help_panel="Output",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the scan outcome as JSON instead of a summary",
            rich_help_panel="Output",
        ),
    ] = False,
    no_llm: Annotated[
        bool,
        typer.Option(
            "--no-llm",
            help="Skip contextual analysis (pattern rules only)",
        ),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "WARNING",
) -> None:
    """Scan a source file for security vulnerabilities.

    Exits with status 1 when the scan cannot be performed.

    Example:
        security-scan scan src/app.ts --output report.json

    """
    scan_command(path, language, output, as_json, no_llm, log_level)


@app.command(name="rules")
def list_rules(
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "WARNING",
) -> None:
    """List the pattern rules applied by the current configuration."""
    list_rules_command(log_level)


if __name__ == "__main__":
    app()
