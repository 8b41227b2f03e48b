"""Error classes for the security scan engine.

This module provides:
- ScanError: Base exception class for all engine errors
- ScanInputError, UnsupportedLanguageError: Fatal errors that end a scan early
- AdapterError, ContextualAnalysisError: Per-source failures recovered at the adapter boundary
- RulesetError: Rule catalog loading and validation failures
"""


class ScanError(Exception):
    """Base exception for all security scan engine errors."""

    pass


class ScanInputError(ScanError):
    """Raised when the source text or language hint is missing or invalid."""

    pass


class UnsupportedLanguageError(ScanError):
    """Raised when the resolved language cannot be scanned."""

    def __init__(self, language: str, supported: list[str]) -> None:
        """Initialise with the offending language and the supported set."""
        super().__init__(
            f"Unsupported language: {language}. "
            f"Supported languages: {', '.join(supported)}"
        )
        self.language = language


class AdapterError(ScanError):
    """Base exception for failures inside a finding source adapter."""

    pass


class ContextualAnalysisError(AdapterError):
    """Raised when the contextual analyser cannot produce findings."""

    pass


class RulesetError(ScanError):
    """Raised when a rule catalog cannot be loaded or is invalid."""

    pass
