"""Aggregation and deduplication of findings across sources."""

from security_scan.aggregation.aggregator import ResultAggregator
from security_scan.aggregation.deduplicator import Deduplicator, merge_cluster
from security_scan.aggregation.similarity import normalise_category, title_similarity

__all__ = [
    "Deduplicator",
    "ResultAggregator",
    "merge_cluster",
    "normalise_category",
    "title_similarity",
]
