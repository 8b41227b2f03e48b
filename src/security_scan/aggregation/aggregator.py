"""Cross-source aggregation of adapter outcomes."""

import logging
from collections.abc import Sequence

from security_scan.models import Finding, SourceOutcome

logger = logging.getLogger(__name__)


class ResultAggregator:
    """Combines the outcomes of every adapter into one finding list.

    Outcomes are consumed in the order given, which the engine fixes to
    adapter-declaration order (pattern, then contextual). No deduplication
    or reordering happens here.
    """

    def aggregate(self, outcomes: Sequence[SourceOutcome]) -> list[Finding]:
        """Concatenate findings, tagging untagged ones with their outcome's source."""
        findings: list[Finding] = []
        for outcome in outcomes:
            for finding in outcome.findings:
                if finding.source is None:
                    finding = finding.model_copy(update={"source": outcome.source})
                findings.append(finding)

        logger.debug(
            f"Aggregated {len(findings)} findings from {len(outcomes)} sources"
        )
        return findings

    def collect_errors(self, outcomes: Sequence[SourceOutcome]) -> list[str]:
        """Collect diagnostics, each prefixed with its source tag."""
        errors: list[str] = []
        for outcome in outcomes:
            for error in outcome.errors:
                errors.append(f"[{outcome.source.value}] {error}")

        if errors:
            logger.warning(f"Scan finished with {len(errors)} source diagnostics")
        return errors
