"""Tests for the security scan CLI.

Commands are exercised through the Typer application with real temporary
files. Contextual analysis is switched off with --no-llm so no provider is
contacted.
"""

import json
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from security_scan.__main__ import app
from security_scan.cli import scan_command

VULNERABLE_SOURCE = """\
const express = require('express');
app.get('/user', (req, res) => {
  db.query("SELECT * FROM users WHERE id = " + req.query.id);
});
"""


@pytest.fixture
def runner() -> CliRunner:
    """Typer test runner."""
    return CliRunner()


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """JavaScript file containing a SQL injection."""
    path = tmp_path / "server.js"
    path.write_text(VULNERABLE_SOURCE)
    return path


class TestScanCommand:
    """Test the scan command."""

    def test_json_output_lists_pattern_findings(
        self, runner: CliRunner, source_file: Path
    ) -> None:
        """Test JSON output carries the external outcome shape."""
        result = runner.invoke(app, ["scan", str(source_file), "--no-llm", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["metadata"]["language"] == "javascript"
        lines = [issue["line"] for issue in payload["issues"]]
        assert 3 in lines
        assert all(issue["source"] == "pattern" for issue in payload["issues"])

    def test_summary_output(self, runner: CliRunner, source_file: Path) -> None:
        """Test the human-readable summary."""
        result = runner.invoke(app, ["scan", str(source_file), "--no-llm"])

        assert result.exit_code == 0
        assert "Scan Summary" in result.stdout
        assert "javascript" in result.stdout

    def test_clean_file_reports_no_issues(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        """Test a file without matches."""
        path = tmp_path / "clean.ts"
        path.write_text("export const add = (a: number, b: number) => a + b;\n")

        result = runner.invoke(app, ["scan", str(path), "--no-llm"])

        assert result.exit_code == 0
        assert "No security issues found." in result.stdout

    def test_language_option_overrides_extension(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        """Test --language takes precedence over the file suffix."""
        path = tmp_path / "snippet.txt"
        path.write_text("const x: number = 1;\n")

        result = runner.invoke(
            app, ["scan", str(path), "--no-llm", "--json", "--language", "ts"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["metadata"]["language"] == "typescript"

    def test_output_option_writes_json_file(
        self, runner: CliRunner, source_file: Path, tmp_path: Path
    ) -> None:
        """Test --output saves the outcome."""
        output = tmp_path / "report.json"

        result = runner.invoke(
            app, ["scan", str(source_file), "--no-llm", "--output", str(output)]
        )

        assert result.exit_code == 0
        saved = json.loads(output.read_text())
        assert saved["success"] is True
        assert saved["issues"]

    def test_empty_file_exits_with_error(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        """Test a rejected scan sets the exit status."""
        path = tmp_path / "empty.js"
        path.write_text("   \n")

        result = runner.invoke(app, ["scan", str(path), "--no-llm", "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert payload["errors"] == ["Invalid input: source code cannot be empty"]

    def test_unsupported_language_exits_with_error(self, tmp_path: Path) -> None:
        """Test an unsupported language fails the command."""
        path = tmp_path / "script.py"
        path.write_text("print('hello')\n")

        with pytest.raises(typer.Exit) as exc_info:
            scan_command(path, no_llm=True)

        assert exc_info.value.exit_code == 1

    def test_missing_file_is_rejected(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test argument validation for paths that do not exist."""
        result = runner.invoke(app, ["scan", str(tmp_path / "missing.js")])

        assert result.exit_code != 0


class TestRulesCommand:
    """Test the rules command."""

    def test_lists_shipped_rules(self, runner: CliRunner) -> None:
        """Test every shipped rule id is printed."""
        result = runner.invoke(app, ["rules"])

        assert result.exit_code == 0
        for rule_id in ("sql-injection", "xss-vulnerability", "eval-usage"):
            assert rule_id in result.stdout

    def test_respects_enabled_rules_environment(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the rule selection comes from the environment."""
        monkeypatch.setenv("STATIC_ENABLED_RULES", "eval-usage")

        result = runner.invoke(app, ["rules"])

        assert result.exit_code == 0
        assert "eval-usage" in result.stdout
        assert "sql-injection" not in result.stdout
