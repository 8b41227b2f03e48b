"""Pydantic types for security rulesets."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from security_scan.models import Severity


class SecurityRule(BaseModel):
    """Pattern rule for detecting one class of vulnerability in a source line.

    Attributes:
        id: Unique identifier of the rule within its ruleset
        name: Human-readable name, used as the finding title
        pattern: Regular expression matched case-insensitively against each line
        severity: Severity assigned to every match
        category: Classification code, e.g. "A03:2021 - Injection"
        description: Explanation of the risk
        remediation: How to fix a match

    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Unique rule identifier")
    name: str = Field(min_length=1, description="Human-readable rule name")
    pattern: str = Field(min_length=1, description="Regex matched per line")
    severity: Severity = Field(description="Severity of a match")
    category: str = Field(min_length=1, description="Classification code")
    description: str = Field(min_length=1, description="Risk explanation")
    remediation: str = Field(min_length=1, description="Fix recommendation")

    @field_validator("severity", mode="before")
    @classmethod
    def normalise_severity_name(cls, v: object) -> object:
        """Accept severity names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("pattern")
    @classmethod
    def validate_pattern_compiles(cls, v: str) -> str:
        """Reject patterns that are not valid regular expressions."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern {v!r}: {e}") from e
        return v


class SecurityRulesetData(BaseModel):
    """Ruleset data model for YAML parsing."""

    name: str = Field(min_length=1, description="Canonical name of the ruleset")
    version: str = Field(
        pattern=r"^\d+\.\d+\.\d+$", description='Semantic version (e.g., "1.0.0")'
    )
    description: str = Field(
        min_length=1, description="Description of what this ruleset does"
    )
    rules: list[SecurityRule] = Field(
        min_length=1, description="List of rules in this ruleset"
    )

    @field_validator("rules")
    @classmethod
    def validate_unique_rule_ids(cls, rules: list[SecurityRule]) -> list[SecurityRule]:
        """Validate that rule ids are unique within the ruleset."""
        ids = [rule.id for rule in rules]
        duplicates = sorted({rule_id for rule_id in ids if ids.count(rule_id) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule ids found: {duplicates}")
        return rules
