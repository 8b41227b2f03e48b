"""Rule catalogs for the pattern detector."""

from security_scan.rulesets.base import YAMLRuleset
from security_scan.rulesets.security_patterns import SecurityPatternsRuleset
from security_scan.rulesets.types import SecurityRule, SecurityRulesetData

__all__ = [
    "SecurityPatternsRuleset",
    "SecurityRule",
    "SecurityRulesetData",
    "YAMLRuleset",
]
