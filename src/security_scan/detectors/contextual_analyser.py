"""Language-model-backed contextual analyser.

The analyser sends the numbered source to a remote reasoning service and
turns its JSON array response into findings. Timeouts, service errors and
malformed payloads become diagnostic strings on the returned SourceOutcome
instead of exceptions.
"""

import asyncio
import json
import logging

from pydantic import AliasChoices, BaseModel, Field, ValidationError

from security_scan.detectors.json_utils import strip_code_fence
from security_scan.detectors.prompts import SYSTEM_PROMPT, get_security_analysis_prompt
from security_scan.errors import ContextualAnalysisError
from security_scan.llm import BaseLLMService, LLMServiceError
from security_scan.models import (
    Finding,
    FindingSource,
    SourceOutcome,
    normalise_severity,
)
from security_scan.parser import ParsedSource

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class ContextualFindingResponse(BaseModel):
    """One element of the model's JSON array response.

    Column bounds are optional; every other field is required. Severity is
    accepted as any JSON value and mapped onto Severity afterwards, so an
    unrecognised or non-string value becomes medium with a diagnostic.
    """

    title: str
    description: str
    severity: object
    category: str = Field(validation_alias=AliasChoices("category", "owaspCategory"))
    line: int
    column_start: int | None = Field(
        default=None, validation_alias=AliasChoices("columnStart", "column_start")
    )
    column_end: int | None = Field(
        default=None, validation_alias=AliasChoices("columnEnd", "column_end")
    )
    fix: str = Field(validation_alias=AliasChoices("fix", "remediation"))


class ContextualAnalyser:
    """Finds vulnerabilities that need reasoning about the surrounding code.

    A single bounded attempt is made per scan: the remote call is cancelled
    when the timeout expires and no retry follows.
    """

    def __init__(
        self,
        llm_service: BaseLLMService | None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialise the analyser.

        Args:
            llm_service: Remote reasoning service; None leaves the analyser
                unconfigured, so every scan reports a diagnostic instead
            timeout_seconds: Hard limit for one remote call

        """
        self._llm_service = llm_service
        self._timeout_seconds = timeout_seconds

    @property
    def source(self) -> FindingSource:
        """Provenance tag for findings from this analyser."""
        return FindingSource.CONTEXTUAL

    @property
    def model_id(self) -> str | None:
        """Identifier of the configured model, if any."""
        if self._llm_service is None:
            return None
        return self._llm_service.model_name

    async def detect(self, parsed: ParsedSource) -> list[Finding]:
        """Detect findings, discarding diagnostics."""
        outcome = await self.analyse(parsed)
        return list(outcome.findings)

    async def analyse(self, parsed: ParsedSource) -> SourceOutcome:
        """Analyse parsed source, returning findings plus diagnostics."""
        if self._llm_service is None:
            message = "Contextual analysis skipped: no language model service configured"
            logger.warning(message)
            return self._failed(message)

        prompt = get_security_analysis_prompt(parsed.lines, parsed.language.value)

        try:
            response = await asyncio.wait_for(
                self._llm_service.complete(prompt, system_prompt=SYSTEM_PROMPT),
                timeout=self._timeout_seconds,
            )
        except TimeoutError:
            message = f"Contextual analysis timed out after {self._timeout_seconds:g}s"
            logger.warning(message)
            return self._failed(message)
        except LLMServiceError as e:
            message = f"Contextual analysis failed: {e}"
            logger.error(message)
            return self._failed(message)

        try:
            payload = self._load_payload(response)
        except ContextualAnalysisError as e:
            logger.warning(str(e))
            return self._failed(str(e))

        return self._build_outcome(payload, parsed)

    def _load_payload(self, response: str) -> list[object]:
        """Decode the response body as a JSON array.

        Raises:
            ContextualAnalysisError: If the body is not JSON or not an array

        """
        try:
            payload = json.loads(strip_code_fence(response))
        except json.JSONDecodeError as e:
            raise ContextualAnalysisError(
                f"Contextual analysis returned unparseable JSON: {e.msg}"
            ) from e

        if not isinstance(payload, list):
            raise ContextualAnalysisError(
                "Contextual analysis response is not a JSON array, "
                f"got {type(payload).__name__}"
            )
        return payload

    def _build_outcome(
        self, payload: list[object], parsed: ParsedSource
    ) -> SourceOutcome:
        findings: list[Finding] = []
        errors: list[str] = []
        dropped = 0

        for element in payload:
            try:
                item = ContextualFindingResponse.model_validate(element)
            except ValidationError as e:
                dropped += 1
                logger.warning(
                    f"Dropping malformed contextual finding ({e.error_count()} errors)"
                )
                continue

            severity, warning = normalise_severity(item.severity)
            if warning:
                errors.append(f"Finding at line {item.line}: {warning}")

            line_text = parsed.line_text(item.line)
            column_start = item.column_start if item.column_start is not None else 0
            column_end = (
                item.column_end if item.column_end is not None else len(line_text)
            )
            findings.append(
                Finding(
                    title=item.title,
                    description=item.description,
                    severity=severity,
                    category=item.category,
                    line=item.line,
                    column_start=column_start,
                    column_end=column_end,
                    remediation=item.fix,
                    source=FindingSource.CONTEXTUAL,
                    snippet=line_text.strip() or None,
                )
            )

        if dropped:
            errors.append(f"Dropped {dropped} malformed contextual finding(s)")

        logger.debug(f"Contextual analysis produced {len(findings)} findings")
        return SourceOutcome(
            source=FindingSource.CONTEXTUAL,
            findings=tuple(findings),
            errors=tuple(errors),
        )

    def _failed(self, message: str) -> SourceOutcome:
        return SourceOutcome(source=FindingSource.CONTEXTUAL, errors=(message,))
