"""Protocols for finding source adapters.

The engine runs both adapters concurrently and only relies on the members
declared here. The pattern detector is synchronous and CPU-bound; the
contextual analyser is awaitable and reports its failures as diagnostics
on a SourceOutcome.
"""

from collections.abc import Awaitable
from typing import Protocol

from security_scan.models import Finding, FindingSource, SourceOutcome
from security_scan.parser import ParsedSource


class PatternSource(Protocol):
    """Synchronous producer of findings from a fixed rule set."""

    @property
    def source(self) -> FindingSource:
        """Provenance tag attached to every finding this adapter emits."""
        ...

    @property
    def rule_count(self) -> int:
        """Number of rules applied per scan."""
        ...

    def detect(self, parsed: ParsedSource) -> list[Finding]:
        """Detect findings in parsed source text."""
        ...


class AsyncFindingSource(Protocol):
    """Awaitable producer of findings, bounded by its own timeout."""

    @property
    def source(self) -> FindingSource:
        """Provenance tag attached to every finding this adapter emits."""
        ...

    @property
    def model_id(self) -> str | None:
        """Identifier of the model behind the adapter, if any."""
        ...

    def detect(self, parsed: ParsedSource) -> Awaitable[list[Finding]]:
        """Detect findings in parsed source text."""
        ...

    def analyse(self, parsed: ParsedSource) -> Awaitable[SourceOutcome]:
        """Detect findings and collect diagnostics instead of raising."""
        ...
