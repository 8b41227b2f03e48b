"""Data model for scan findings and outcomes.

Findings and outcomes are pydantic models whose serialised form uses the
external field names consumed by front ends (``columnStart``, ``fix``,
``issues``, ``durationMs`` ...). Inside the engine the snake_case attribute
names are used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

_EXTERNAL_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    validate_by_name=True,
    validate_by_alias=True,
    serialize_by_alias=True,
)


class Severity(str, Enum):
    """Ordinal severity of a finding, declared from most to least severe."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Sort rank, 0 for critical through 4 for info."""
        return list(Severity).index(self)

    @property
    def abbreviation(self) -> str:
        """Three letter upper-case tag used in generated finding ids."""
        return self.value[:3].upper()


class FindingSource(str, Enum):
    """Provenance tag: which detector produced a finding."""

    PATTERN = "pattern"
    CONTEXTUAL = "contextual"
    MERGED = "merged"


class SeverityNormalisation(NamedTuple):
    """Result of mapping a free-form severity onto the Severity enum.

    ``warning`` is set when the input was not recognised and the default
    was substituted.
    """

    severity: Severity
    warning: str | None = None


def normalise_severity(value: object) -> SeverityNormalisation:
    """Map a severity string case-insensitively onto Severity.

    Unrecognised values map to Severity.MEDIUM and carry a warning.
    """
    if isinstance(value, Severity):
        return SeverityNormalisation(value)

    if isinstance(value, str):
        try:
            return SeverityNormalisation(Severity(value.strip().lower()))
        except ValueError:
            pass

    warning = f"Unknown severity level {value!r}, defaulting to medium"
    logger.warning(warning)
    return SeverityNormalisation(Severity.MEDIUM, warning)


class Finding(BaseModel):
    """One detected security issue.

    Producers may leave ``id``, the text fields, ``source`` and ``snippet``
    empty. The result formatter guarantees they are populated in the final
    outcome.
    """

    model_config = _EXTERNAL_MODEL_CONFIG

    id: str | None = Field(default=None, description="Unique within a scan")
    title: str = Field(default="", description="Short title of the issue")
    description: str = Field(default="", description="Explanation of the risk")
    severity: Severity
    category: str = Field(
        default="", description="Classification code, e.g. 'A03:2021 - Injection'"
    )
    line: int = Field(description="1-indexed line number")
    column_start: int = Field(default=0, description="0-indexed start column")
    column_end: int = Field(default=0, description="0-indexed end column")
    remediation: str = Field(default="", alias="fix", description="How to fix it")
    source: FindingSource | None = Field(default=None, description="Provenance tag")
    snippet: str | None = Field(default=None, description="Offending source line")


@dataclass(frozen=True)
class SourceOutcome:
    """Findings and diagnostics produced by one adapter for one scan."""

    source: FindingSource
    findings: tuple[Finding, ...] = ()
    errors: tuple[str, ...] = ()


class ScanMetadata(BaseModel):
    """Execution details attached to every scan outcome."""

    model_config = _EXTERNAL_MODEL_CONFIG

    timestamp: Annotated[
        datetime,
        PlainSerializer(lambda v: v.isoformat(), return_type=str, when_used="json"),
    ] = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: int = Field(default=0, ge=0)
    language: str = "unknown"
    lines_of_code: int = Field(default=0, ge=0)
    adapters_used: list[str] = Field(default_factory=list)
    rule_count: int = Field(default=0, ge=0)
    model_id: str | None = None


class ScanOutcome(BaseModel):
    """Final result of a scan as returned to front ends."""

    model_config = _EXTERNAL_MODEL_CONFIG

    success: bool
    findings: list[Finding] = Field(default_factory=list, alias="issues")
    metadata: ScanMetadata = Field(default_factory=ScanMetadata)
    errors: list[str] | None = None

    def to_json(self, indent: int | None = 2) -> str:
        """Render the outcome in its external JSON shape."""
        return self.model_dump_json(indent=indent, exclude_none=True)
