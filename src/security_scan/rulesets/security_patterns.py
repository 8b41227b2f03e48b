"""Security patterns ruleset.

Line-level regular expressions for common JavaScript and TypeScript
vulnerabilities, classified by OWASP Top 10 (2021) category.
"""

from typing import ClassVar

from security_scan.rulesets.base import YAMLRuleset


class SecurityPatternsRuleset(YAMLRuleset):
    """Ruleset for detecting vulnerable code patterns in source lines."""

    ruleset_name: ClassVar[str] = "security_patterns"
    ruleset_version: ClassVar[str] = "1.0.0"
