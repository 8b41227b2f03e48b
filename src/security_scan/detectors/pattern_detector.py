"""Deterministic rule-based detector."""

import logging
import re
from functools import cache

from security_scan.configuration import PatternDetectorConfiguration
from security_scan.models import Finding, FindingSource
from security_scan.parser import ParsedSource
from security_scan.rulesets import SecurityPatternsRuleset, SecurityRule

logger = logging.getLogger(__name__)


@cache
def _compile_rule_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a rule pattern with case-insensitive matching."""
    return re.compile(pattern, re.IGNORECASE)


@cache
def _get_default_rules() -> tuple[SecurityRule, ...]:
    """Get the shipped rule catalog, loaded once per process."""
    return SecurityPatternsRuleset().get_rules()


class PatternDetector:
    """Matches every applied rule against every line of the source.

    The applied rules are fixed at construction time: the catalog filtered by
    the configured rule ids and severity threshold. Nothing is mutated during
    detect(), so a single detector can serve concurrent scans.
    """

    def __init__(
        self,
        configuration: PatternDetectorConfiguration | None = None,
        rules: tuple[SecurityRule, ...] | None = None,
    ) -> None:
        """Initialise the detector.

        Args:
            configuration: Rule selection settings; defaults apply every rule
            rules: Rule catalog to select from; defaults to the shipped catalog

        Raises:
            RulesetError: If the shipped catalog cannot be loaded

        """
        self._configuration = configuration or PatternDetectorConfiguration()
        catalog = rules if rules is not None else _get_default_rules()
        self._rules = tuple(
            rule
            for rule in catalog
            if self._configuration.is_rule_enabled(rule.id)
            and self._configuration.meets_severity_threshold(rule.severity)
        )
        logger.debug(
            f"Pattern detector applying {len(self._rules)} of {len(catalog)} rules"
        )

    @property
    def source(self) -> FindingSource:
        """Provenance tag for findings from this detector."""
        return FindingSource.PATTERN

    @property
    def rules(self) -> tuple[SecurityRule, ...]:
        """Rules applied by this detector."""
        return self._rules

    @property
    def rule_count(self) -> int:
        """Number of rules applied per scan."""
        return len(self._rules)

    def detect(self, parsed: ParsedSource) -> list[Finding]:
        """Emit one finding per non-overlapping rule match.

        Findings are ordered by rule, then line, then match position.
        """
        findings: list[Finding] = []
        for rule in self._rules:
            pattern = _compile_rule_pattern(rule.pattern)
            for line_number, line in enumerate(parsed.lines, start=1):
                for match in pattern.finditer(line):
                    findings.append(
                        self._create_finding(rule, line_number, line, match)
                    )

        logger.debug(f"Pattern detector found {len(findings)} matches")
        return findings

    def _create_finding(
        self, rule: SecurityRule, line_number: int, line: str, match: re.Match[str]
    ) -> Finding:
        return Finding(
            title=rule.name,
            description=rule.description,
            severity=rule.severity,
            category=rule.category,
            line=line_number,
            column_start=match.start(),
            column_end=match.end(),
            remediation=rule.remediation,
            source=FindingSource.PATTERN,
            snippet=line.strip(),
        )
