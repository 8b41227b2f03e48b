"""Final shaping of findings into a scan outcome."""

from security_scan.models import (
    Finding,
    FindingSource,
    ScanMetadata,
    ScanOutcome,
)

DEFAULT_TITLE = "Unknown Issue"
DEFAULT_DESCRIPTION = "No description available"
DEFAULT_CATEGORY = "Unknown"
DEFAULT_REMEDIATION = "No fix recommendation available"


class ResultFormatter:
    """Fills defaults, orders findings and assigns identifiers.

    Findings are sorted by severity rank (critical first) and then by line.
    The sort is stable, so findings that tie keep their input order.
    Identifiers take the form ``{SEV}-{line}-{n}`` where ``n`` counts up per
    scan; explicit identifiers are kept unless they repeat.
    """

    def format(self, findings: list[Finding], metadata: ScanMetadata) -> ScanOutcome:
        """Wrap findings and metadata into a successful outcome."""
        completed = [self._fill_defaults(f) for f in findings]
        ordered = sorted(completed, key=lambda f: (f.severity.rank, f.line))
        return ScanOutcome(
            success=True,
            findings=self._assign_ids(ordered),
            metadata=metadata,
        )

    def _fill_defaults(self, finding: Finding) -> Finding:
        column_start = max(0, finding.column_start)
        return finding.model_copy(
            update={
                "title": finding.title.strip() or DEFAULT_TITLE,
                "description": finding.description.strip() or DEFAULT_DESCRIPTION,
                "category": finding.category.strip() or DEFAULT_CATEGORY,
                "remediation": finding.remediation.strip() or DEFAULT_REMEDIATION,
                "line": max(1, finding.line),
                "column_start": column_start,
                "column_end": max(column_start, finding.column_end),
                "source": finding.source or FindingSource.PATTERN,
            }
        )

    def _assign_ids(self, findings: list[Finding]) -> list[Finding]:
        used: set[str] = set()
        needs_id: list[int] = []
        for index, finding in enumerate(findings):
            if finding.id and finding.id not in used:
                used.add(finding.id)
            else:
                needs_id.append(index)

        result = list(findings)
        sequence = 0
        for index in needs_id:
            finding = result[index]
            while True:
                sequence += 1
                candidate = f"{finding.severity.abbreviation}-{finding.line}-{sequence}"
                if candidate not in used:
                    break
            used.add(candidate)
            result[index] = finding.model_copy(update={"id": candidate})
        return result
