"""Scan orchestration.

SecurityScanEngine is the single entry point front ends call. A scan
validates its input, resolves and parses the language, runs the pattern
detector and the contextual analyser concurrently, and reconciles their
findings through aggregation, deduplication and formatting.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import Self

from security_scan.aggregation import Deduplicator, ResultAggregator
from security_scan.configuration import ScanEngineConfiguration
from security_scan.detectors import (
    AsyncFindingSource,
    ContextualAnalyser,
    PatternDetector,
    PatternSource,
)
from security_scan.errors import ScanInputError, UnsupportedLanguageError
from security_scan.formatter import ResultFormatter
from security_scan.languages import SUPPORTED_LANGUAGES, LanguageResolver
from security_scan.llm import BaseLLMService, LLMConfigurationError, LLMServiceFactory
from security_scan.models import (
    FindingSource,
    ScanMetadata,
    ScanOutcome,
    SourceOutcome,
)
from security_scan.parser import ParsedSource, SourceParser

logger = logging.getLogger(__name__)

ADAPTERS_USED = [FindingSource.PATTERN.value, FindingSource.CONTEXTUAL.value]


def create_llm_service(configuration: ScanEngineConfiguration) -> BaseLLMService | None:
    """Create the remote reasoning service, or None if it is unavailable.

    A disabled or unconfigured service is not an error: the contextual
    analyser then reports a diagnostic on every scan instead.
    """
    try:
        return LLMServiceFactory.create_service(configuration.llm)
    except LLMConfigurationError as e:
        logger.warning(f"Contextual analysis unavailable: {e}")
        return None


class SecurityScanEngine:
    """Runs security scans over single source texts.

    The engine holds no per-scan state, so one instance can serve
    concurrent scans. Collaborators are built from the configuration unless
    supplied explicitly.

    Example:
        ```python
        engine = SecurityScanEngine.from_properties({"llm": {"enabled": False}})
        outcome = await engine.scan(source_text, "javascript")
        ```

    """

    def __init__(  # noqa: PLR0913
        self,
        configuration: ScanEngineConfiguration | None = None,
        *,
        language_resolver: LanguageResolver | None = None,
        parser: SourceParser | None = None,
        pattern_detector: PatternSource | None = None,
        contextual_analyser: AsyncFindingSource | None = None,
        aggregator: ResultAggregator | None = None,
        deduplicator: Deduplicator | None = None,
        formatter: ResultFormatter | None = None,
    ) -> None:
        """Initialise the engine.

        Raises:
            RulesetError: If the default pattern detector cannot load its rules

        """
        self._configuration = configuration or ScanEngineConfiguration()
        self._language_resolver = language_resolver or LanguageResolver()
        self._parser = parser or SourceParser()
        self._pattern_detector: PatternSource = pattern_detector or PatternDetector(
            self._configuration.pattern_detector
        )
        self._contextual_analyser: AsyncFindingSource = (
            contextual_analyser
            or ContextualAnalyser(
                create_llm_service(self._configuration),
                timeout_seconds=self._configuration.llm.timeout_seconds,
            )
        )
        self._aggregator = aggregator or ResultAggregator()
        self._deduplicator = deduplicator or Deduplicator()
        self._formatter = formatter or ResultFormatter()

    @classmethod
    def from_properties(cls, properties: dict[str, object] | None = None) -> Self:
        """Create an engine from configuration properties with environment fallback."""
        return cls(ScanEngineConfiguration.from_properties(properties or {}))

    @property
    def configuration(self) -> ScanEngineConfiguration:
        """Configuration the engine was built with."""
        return self._configuration

    @property
    def pattern_detector(self) -> PatternSource:
        """Pattern detector used by every scan."""
        return self._pattern_detector

    async def scan(self, source_text: str, language_hint: str | None) -> ScanOutcome:
        """Scan one source text.

        Never raises. Input, unsupported-language and unexpected errors are
        reported as an outcome with success=False; adapter failures leave
        success=True and are listed in the outcome's errors.

        Args:
            source_text: Code to scan
            language_hint: Language name, alias or file extension

        Returns:
            The scan outcome

        """
        started_at = datetime.now(UTC)
        started = time.perf_counter()

        try:
            self._validate_input(source_text, language_hint)
        except ScanInputError as e:
            logger.warning(f"Scan rejected: {e}")
            return self._failure(str(e), started_at)

        try:
            language = self._language_resolver.resolve(source_text, language_hint)
            if not self._language_resolver.is_supported(language):
                raise UnsupportedLanguageError(
                    language.value, sorted(lang.value for lang in SUPPORTED_LANGUAGES)
                )

            parsed = self._parser.parse(source_text, language)
            outcomes = await asyncio.gather(
                self._run_pattern_detector(parsed),
                self._run_contextual_analyser(parsed),
            )

            findings = self._aggregator.aggregate(outcomes)
            errors = self._aggregator.collect_errors(outcomes)
            findings = self._deduplicator.deduplicate(findings)

            metadata = ScanMetadata(
                timestamp=started_at,
                duration_ms=self._elapsed_ms(started),
                language=language.value,
                lines_of_code=parsed.line_count,
                adapters_used=list(ADAPTERS_USED),
                rule_count=self._pattern_detector.rule_count,
                model_id=self._contextual_analyser.model_id,
            )
            outcome = self._formatter.format(findings, metadata)
            if errors:
                outcome = outcome.model_copy(update={"errors": errors})

        except UnsupportedLanguageError as e:
            logger.warning(f"Scan rejected: {e}")
            return self._failure(str(e), started_at, self._elapsed_ms(started))
        except Exception as e:
            logger.exception("Scan failed with an unexpected error")
            return self._failure(
                f"System error: {e}", started_at, self._elapsed_ms(started)
            )

        logger.info(
            f"Scan completed: {len(outcome.findings)} findings in "
            f"{outcome.metadata.duration_ms}ms ({language.value}, "
            f"{parsed.line_count} lines)"
        )
        return outcome

    def _validate_input(self, source_text: str, language_hint: str | None) -> None:
        if not source_text or not source_text.strip():
            raise ScanInputError("Invalid input: source code cannot be empty")
        if not language_hint or not language_hint.strip():
            raise ScanInputError("Invalid input: language must be specified")

        max_size = self._configuration.limits.max_code_size
        if len(source_text.encode("utf-8")) > max_size:
            raise ScanInputError(
                f"Invalid input: source code exceeds the maximum size of {max_size} bytes"
            )

    async def _run_pattern_detector(self, parsed: ParsedSource) -> SourceOutcome:
        try:
            findings = self._pattern_detector.detect(parsed)
        except Exception as e:
            logger.error(f"Pattern detector failed: {e}")
            return SourceOutcome(
                source=FindingSource.PATTERN, errors=(f"Pattern detector failed: {e}",)
            )
        return SourceOutcome(source=FindingSource.PATTERN, findings=tuple(findings))

    async def _run_contextual_analyser(self, parsed: ParsedSource) -> SourceOutcome:
        try:
            return await self._contextual_analyser.analyse(parsed)
        except Exception as e:
            logger.error(f"Contextual analyser failed: {e}")
            return SourceOutcome(
                source=FindingSource.CONTEXTUAL,
                errors=(f"Contextual analyser failed: {e}",),
            )

    def _failure(
        self, message: str, started_at: datetime, duration_ms: int = 0
    ) -> ScanOutcome:
        return ScanOutcome(
            success=False,
            metadata=ScanMetadata(timestamp=started_at, duration_ms=duration_ms),
            errors=[message],
        )

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.perf_counter() - started) * 1000)
