"""Finding source adapters: the pattern detector and the contextual analyser."""

from security_scan.detectors.contextual_analyser import (
    ContextualAnalyser,
    ContextualFindingResponse,
)
from security_scan.detectors.pattern_detector import PatternDetector
from security_scan.detectors.protocols import AsyncFindingSource, PatternSource

__all__ = [
    "AsyncFindingSource",
    "ContextualAnalyser",
    "ContextualFindingResponse",
    "PatternDetector",
    "PatternSource",
]
