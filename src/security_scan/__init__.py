"""Security scanning for JavaScript and TypeScript source code.

Combines deterministic pattern rules with language-model analysis and
reconciles both into one deduplicated, severity-ranked report.
"""

from security_scan.configuration import (
    LLMServiceConfiguration,
    PatternDetectorConfiguration,
    ScanEngineConfiguration,
    ScanLimitsConfiguration,
)
from security_scan.engine import SecurityScanEngine
from security_scan.errors import (
    AdapterError,
    ContextualAnalysisError,
    RulesetError,
    ScanError,
    ScanInputError,
    UnsupportedLanguageError,
)
from security_scan.models import (
    Finding,
    FindingSource,
    ScanMetadata,
    ScanOutcome,
    Severity,
    SourceOutcome,
)

__version__ = "0.1.0"

__all__ = [
    # Engine
    "SecurityScanEngine",
    # Configuration
    "LLMServiceConfiguration",
    "PatternDetectorConfiguration",
    "ScanEngineConfiguration",
    "ScanLimitsConfiguration",
    # Models
    "Finding",
    "FindingSource",
    "ScanMetadata",
    "ScanOutcome",
    "Severity",
    "SourceOutcome",
    # Errors
    "AdapterError",
    "ContextualAnalysisError",
    "RulesetError",
    "ScanError",
    "ScanInputError",
    "UnsupportedLanguageError",
]
