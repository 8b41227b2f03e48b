"""Fuzzy deduplication and merging of findings from different sources."""

import logging

from security_scan.aggregation.similarity import normalise_category, title_similarity
from security_scan.models import Finding, FindingSource

logger = logging.getLogger(__name__)

LINE_TOLERANCE = 1
SIMILARITY_THRESHOLD = 0.7


class Deduplicator:
    """Clusters near-duplicate findings and merges each cluster into one.

    Clustering is anchor-first: the first unprocessed finding is the anchor
    and every later unprocessed finding that is a duplicate *of the anchor*
    joins its cluster. Members are never compared with each other, so this is
    not a transitive equivalence class.

    A merged result can land within the duplicate window of a finding that
    was left out of its cluster, so passes repeat until one produces no
    merge. A chain such as pattern@10, contextual@11, pattern@12 therefore
    collapses into one merged record at line 11: the leftover at 12 is
    absorbed once the merged record has moved to the contextual line. The
    output never contains a duplicate pair and running deduplicate() on it
    returns it unchanged.
    """

    def __init__(
        self,
        line_tolerance: int = LINE_TOLERANCE,
        similarity_threshold: float = SIMILARITY_THRESHOLD,
    ) -> None:
        """Initialise with the duplicate window and title similarity threshold."""
        self._line_tolerance = line_tolerance
        self._similarity_threshold = similarity_threshold

    def is_duplicate(self, anchor: Finding, candidate: Finding) -> bool:
        """Check whether candidate reports the same issue as anchor."""
        return (
            abs(anchor.line - candidate.line) <= self._line_tolerance
            and normalise_category(anchor.category)
            == normalise_category(candidate.category)
            and title_similarity(anchor.title, candidate.title)
            >= self._similarity_threshold
        )

    def deduplicate(self, findings: list[Finding]) -> list[Finding]:
        """Merge duplicate findings, keeping first-occurrence order."""
        result = list(findings)
        while True:
            merged = self._cluster_pass(result)
            if len(merged) == len(result):
                break
            result = merged

        if len(result) != len(findings):
            logger.debug(f"Deduplicated {len(findings)} findings into {len(result)}")
        return result

    def _cluster_pass(self, findings: list[Finding]) -> list[Finding]:
        processed: set[int] = set()
        result: list[Finding] = []

        for i, anchor in enumerate(findings):
            if i in processed:
                continue
            processed.add(i)

            cluster = [anchor]
            for j in range(i + 1, len(findings)):
                if j not in processed and self.is_duplicate(anchor, findings[j]):
                    cluster.append(findings[j])
                    processed.add(j)

            result.append(cluster[0] if len(cluster) == 1 else merge_cluster(cluster))

        return result


def merge_cluster(cluster: list[Finding]) -> Finding:
    """Merge a cluster of duplicate findings into one.

    The base record (title, position, snippet) comes from the first
    contextual member, or the first member when there is none. Severity is
    the highest in the cluster; description and remediation are the longest,
    the earliest winning ties. Provenance becomes merged when members came
    from more than one source.
    """
    base = next(
        (f for f in cluster if f.source == FindingSource.CONTEXTUAL), cluster[0]
    )

    severity = min((f.severity for f in cluster), key=lambda s: s.rank)

    description = cluster[0].description
    remediation = cluster[0].remediation
    for finding in cluster[1:]:
        if len(finding.description) > len(description):
            description = finding.description
        if len(finding.remediation) > len(remediation):
            remediation = finding.remediation

    sources = {f.source for f in cluster}
    source = FindingSource.MERGED if len(sources) > 1 else base.source

    return base.model_copy(
        update={
            "severity": severity,
            "description": description,
            "remediation": remediation,
            "source": source,
        }
    )
