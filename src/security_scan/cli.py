"""CLI command implementations for the security scan engine."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from security_scan.configuration import PatternDetectorConfiguration
from security_scan.detectors import PatternDetector
from security_scan.engine import SecurityScanEngine
from security_scan.errors import ScanError
from security_scan.logging import setup_logging
from security_scan.models import ScanOutcome, Severity
from security_scan.rulesets import SecurityRule

logger = logging.getLogger(__name__)
console = Console()

_SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
    Severity.INFO: "dim",
}


class OutputFormatter:
    """Handles formatting CLI output for different commands."""

    def format_scan_outcome(self, outcome: ScanOutcome, path: Path) -> None:
        """Print the findings table, diagnostics and a summary panel."""
        if outcome.findings:
            table = Table(
                title=f"Security Findings: {path}",
                show_header=True,
                header_style="bold magenta",
            )
            table.add_column("ID", style="dim", no_wrap=True)
            table.add_column("Severity", no_wrap=True)
            table.add_column("Line", justify="right")
            table.add_column("Title", style="white")
            table.add_column("Category", style="blue")
            table.add_column("Source", style="green")

            for finding in outcome.findings:
                style = _SEVERITY_STYLES[finding.severity]
                table.add_row(
                    finding.id or "",
                    f"[{style}]{finding.severity.value.upper()}[/{style}]",
                    str(finding.line),
                    finding.title,
                    finding.category,
                    finding.source.value if finding.source else "",
                )
            console.print(table)
        elif outcome.success:
            console.print("[bold green]No security issues found.[/bold green]")

        for error in outcome.errors or []:
            console.print(f"[yellow]! {error}[/yellow]")

        metadata = outcome.metadata
        border_style = "green" if outcome.success else "red"
        console.print(
            Panel(
                f"[bold]Status:[/bold] {'Success' if outcome.success else 'Failed'}\n"
                f"[bold]Language:[/bold] {metadata.language}\n"
                f"[bold]Lines of code:[/bold] {metadata.lines_of_code}\n"
                f"[bold]Findings:[/bold] {len(outcome.findings)}\n"
                f"[bold]Rules applied:[/bold] {metadata.rule_count}\n"
                f"[bold]Model:[/bold] {metadata.model_id or 'none'}\n"
                f"[bold]Duration:[/bold] {metadata.duration_ms}ms",
                title="Scan Summary",
                border_style=border_style,
            )
        )

    def format_rule_list(self, rules: tuple[SecurityRule, ...]) -> None:
        """Print the applied rule catalog."""
        if not rules:
            console.print(
                Panel(
                    "[yellow]No rules are applied with the current configuration.[/yellow]",
                    title="Warning",
                    border_style="yellow",
                )
            )
            logger.warning("No pattern rules applied")
            return

        table = Table(
            title="Pattern Rules", show_header=True, header_style="bold magenta"
        )
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Severity", no_wrap=True)
        table.add_column("Category", style="blue")

        for rule in rules:
            style = _SEVERITY_STYLES[rule.severity]
            table.add_row(
                rule.id,
                rule.name,
                f"[{style}]{rule.severity.value.upper()}[/{style}]",
                rule.category,
            )
        console.print(table)


def setup_cli_logging(log_level: str) -> None:
    """Set up logging for CLI commands."""
    setup_logging(level=log_level)


def handle_cli_error(error: Exception, message: str) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        error: The exception that occurred
        message: User-friendly error message

    """
    logger.error(f"{message}: {error}")

    error_panel = Panel(f"[red]{error}[/red]", title=message, border_style="red")
    console.print(error_panel)
    raise typer.Exit(1) from error


def scan_command(  # noqa: PLR0913
    path: Path,
    language: str | None = None,
    output: Path | None = None,
    as_json: bool = False,
    no_llm: bool = False,
    log_level: str = "WARNING",
) -> None:
    """CLI command implementation for scanning one source file.

    Args:
        path: Source file to scan
        language: Language hint; defaults to the file extension
        output: Write the JSON outcome to this file
        as_json: Print the JSON outcome instead of the summary
        no_llm: Skip contextual analysis
        log_level: Logging level

    """
    setup_cli_logging(log_level)

    try:
        source_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        handle_cli_error(e, f"Cannot read {path}")
        return

    language_hint = language or path.suffix or None
    properties: dict[str, object] = {"llm": {"enabled": False}} if no_llm else {}

    try:
        engine = SecurityScanEngine.from_properties(properties)
    except (ScanError, ValidationError) as e:
        handle_cli_error(e, "Invalid configuration")
        return

    outcome = asyncio.run(engine.scan(source_text, language_hint))

    if output is not None:
        try:
            output.write_text(outcome.to_json(), encoding="utf-8")
        except OSError as e:
            handle_cli_error(e, f"Cannot write {output}")
        logger.info(f"Scan outcome saved to {output}")

    if as_json:
        typer.echo(outcome.to_json())
    else:
        OutputFormatter().format_scan_outcome(outcome, path)
        if output is not None:
            console.print(f"[green]Results saved to JSON file: {output}[/green]")

    if not outcome.success:
        raise typer.Exit(1)


def list_rules_command(log_level: str = "WARNING") -> None:
    """CLI command implementation for listing the applied pattern rules."""
    setup_cli_logging(log_level)

    try:
        configuration = PatternDetectorConfiguration.from_properties({})
        detector = PatternDetector(configuration)
    except (ScanError, ValidationError) as e:
        handle_cli_error(e, "Cannot load pattern rules")
        return

    OutputFormatter().format_rule_list(detector.rules)
