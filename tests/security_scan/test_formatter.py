"""Tests for result formatting."""

from security_scan.formatter import (
    DEFAULT_CATEGORY,
    DEFAULT_DESCRIPTION,
    DEFAULT_REMEDIATION,
    DEFAULT_TITLE,
    ResultFormatter,
)
from security_scan.models import Finding, FindingSource, ScanMetadata, Severity


def _finding(severity: Severity, line: int, **kwargs: object) -> Finding:
    return Finding.model_validate(
        {
            "title": f"{severity.value} at {line}",
            "description": "d",
            "category": "A03:2021",
            "fix": "f",
            "source": "pattern",
            "severity": severity,
            "line": line,
            **kwargs,
        }
    )


class TestResultFormatterOrdering:
    """Test severity-then-line ordering."""

    def test_sorts_by_severity_rank_then_line(self) -> None:
        """Test critical first, then by ascending line."""
        findings = [
            _finding(Severity.LOW, 1),
            _finding(Severity.CRITICAL, 30),
            _finding(Severity.HIGH, 5),
            _finding(Severity.CRITICAL, 2),
            _finding(Severity.INFO, 1),
            _finding(Severity.MEDIUM, 9),
        ]

        outcome = ResultFormatter().format(findings, ScanMetadata())

        assert [(f.severity, f.line) for f in outcome.findings] == [
            (Severity.CRITICAL, 2),
            (Severity.CRITICAL, 30),
            (Severity.HIGH, 5),
            (Severity.MEDIUM, 9),
            (Severity.LOW, 1),
            (Severity.INFO, 1),
        ]

    def test_sort_is_stable_for_ties(self) -> None:
        """Test equal severity and line keep input order."""
        findings = [
            _finding(Severity.HIGH, 4, title="first"),
            _finding(Severity.HIGH, 4, title="second"),
            _finding(Severity.HIGH, 4, title="third"),
        ]

        outcome = ResultFormatter().format(findings, ScanMetadata())

        assert [f.title for f in outcome.findings] == ["first", "second", "third"]


class TestResultFormatterIdentifiers:
    """Test identifier assignment."""

    def test_generates_severity_line_sequence_ids(self) -> None:
        """Test the {SEV}-{line}-{n} format."""
        findings = [_finding(Severity.HIGH, 12), _finding(Severity.CRITICAL, 3)]

        outcome = ResultFormatter().format(findings, ScanMetadata())

        assert [f.id for f in outcome.findings] == ["CRI-3-1", "HIG-12-2"]

    def test_keeps_explicit_ids_and_replaces_duplicates(self) -> None:
        """Test ids are unique within a scan."""
        findings = [
            _finding(Severity.HIGH, 1, id="custom"),
            _finding(Severity.HIGH, 2, id="custom"),
            _finding(Severity.HIGH, 3, id="HIG-3-1"),
            _finding(Severity.HIGH, 3),
        ]

        outcome = ResultFormatter().format(findings, ScanMetadata())

        ids = [f.id for f in outcome.findings]
        assert ids[0] == "custom"
        assert ids[2] == "HIG-3-1"
        assert len(set(ids)) == 4
        assert all(ids)

    def test_ids_are_deterministic(self) -> None:
        """Test the same input yields the same ids."""
        findings = [_finding(Severity.LOW, 7), _finding(Severity.LOW, 7)]
        formatter = ResultFormatter()

        first = formatter.format(findings, ScanMetadata())
        second = formatter.format(findings, ScanMetadata())

        assert [f.id for f in first.findings] == [f.id for f in second.findings]


class TestResultFormatterDefaults:
    """Test default filling."""

    def test_fills_missing_fields(self) -> None:
        """Test placeholders for empty producer fields."""
        finding = Finding(
            severity=Severity.MEDIUM, line=0, column_start=-4, column_end=-9
        )

        formatted = ResultFormatter().format([finding], ScanMetadata()).findings[0]

        assert formatted.title == DEFAULT_TITLE
        assert formatted.description == DEFAULT_DESCRIPTION
        assert formatted.category == DEFAULT_CATEGORY
        assert formatted.remediation == DEFAULT_REMEDIATION
        assert formatted.source == FindingSource.PATTERN
        assert formatted.line == 1
        assert formatted.column_start == 0
        assert formatted.column_end == 0
        assert formatted.id == "MED-1-1"

    def test_column_end_never_precedes_start(self) -> None:
        """Test the columnEnd >= columnStart invariant."""
        finding = _finding(Severity.LOW, 3, columnStart=10, columnEnd=4)

        formatted = ResultFormatter().format([finding], ScanMetadata()).findings[0]

        assert formatted.column_start == 10
        assert formatted.column_end == 10

    def test_wraps_successful_outcome_with_metadata(self) -> None:
        """Test success flag and metadata passthrough."""
        metadata = ScanMetadata(language="typescript", rule_count=6)

        outcome = ResultFormatter().format([], metadata)

        assert outcome.success is True
        assert outcome.findings == []
        assert outcome.metadata == metadata
        assert outcome.errors is None
