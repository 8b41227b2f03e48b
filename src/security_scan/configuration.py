"""Configuration for the security scan engine.

Configuration is an explicit value constructed once (usually via
``ScanEngineConfiguration.from_properties``) and passed into the engine,
which hands the relevant section to each component. There is no global
configuration state.

Every ``from_properties`` implements the same layering:
1. Explicit properties (highest priority)
2. Environment variables (fallback)
3. Field defaults (lowest priority)
"""

from __future__ import annotations

import os
from typing import Any, Self

from typing_extensions import override

from pydantic import BaseModel, ConfigDict, Field, field_validator

from security_scan.models import Severity

SUPPORTED_PROVIDERS = ("anthropic", "openai", "google")

_API_KEY_ENV_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "google": "GOOGLE_API_KEY",
}

_MODEL_ENV_VARS = {
    "anthropic": "ANTHROPIC_MODEL",
    "openai": "OPENAI_MODEL",
    "google": "GOOGLE_MODEL",
}

_DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-5",
    "openai": "gpt-4o-mini",
    "google": "gemini-2.5-flash",
}


class BaseConfiguration(BaseModel):
    """Base class for all engine configuration sections.

    Features:
        - Pydantic validation for type safety
        - Immutable (frozen) so a configuration can be shared between scans
        - Strict validation (no extra fields allowed)
        - from_properties() factory for dictionary-based creation
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
    )

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary with validation.

        Subclasses override this to add environment variable fallback.

        Raises:
            ValidationError: If properties are invalid

        """
        return cls.model_validate(properties)


def _set_from_env(config_data: dict[str, Any], key: str, env_var: str) -> None:
    """Copy an environment variable into config_data unless key is already set."""
    if key in config_data:
        return
    value = os.getenv(env_var)
    if value is not None and value.strip():
        config_data[key] = value.strip()


class LLMServiceConfiguration(BaseConfiguration):
    """Settings for the remote reasoning service used by the contextual analyser.

    Attributes:
        enabled: Whether the contextual analyser calls a remote service at all
        provider: LLM provider name (anthropic, openai or google)
        api_key: API key for the provider; None leaves the service unconfigured
        model: Model name (provider default if None)
        base_url: Base URL for OpenAI-compatible APIs (e.g. local models)
        temperature: Sampling temperature
        max_tokens: Response budget in tokens
        timeout_seconds: Hard timeout for one remote call

    """

    enabled: bool = Field(default=True, description="Enable contextual analysis")
    provider: str = Field(default="openai", description="anthropic, openai or google")
    api_key: str | None = Field(default=None, description="Provider API key")
    model: str | None = Field(default=None, description="Model name")
    base_url: str | None = Field(default=None, description="OpenAI-compatible base URL")
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0.0)

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Validate that provider is one of the supported options."""
        provider_lower = v.strip().lower()
        if provider_lower not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Provider must be one of {list(SUPPORTED_PROVIDERS)}, got: {v}"
            )
        return provider_lower

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only keys as absent."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @classmethod
    @override
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties with environment fallback.

        Environment variables used:
        - LLM_ENABLED: "true"/"false"
        - LLM_PROVIDER: Provider name (default: "openai")
        - ANTHROPIC_API_KEY / OPENAI_API_KEY / GOOGLE_API_KEY, then LLM_API_KEY
        - ANTHROPIC_MODEL / OPENAI_MODEL / GOOGLE_MODEL, then LLM_MODEL
        - OPENAI_BASE_URL: Only for the openai provider
        - LLM_TEMPERATURE, LLM_MAX_TOKENS
        - LLM_TIMEOUT: Timeout in seconds
        """
        config_data = properties.copy()

        _set_from_env(config_data, "enabled", "LLM_ENABLED")
        _set_from_env(config_data, "provider", "LLM_PROVIDER")
        provider = str(config_data.get("provider", "openai")).strip().lower()

        _set_from_env(config_data, "api_key", _API_KEY_ENV_VARS.get(provider, ""))
        _set_from_env(config_data, "api_key", "LLM_API_KEY")
        _set_from_env(config_data, "model", _MODEL_ENV_VARS.get(provider, ""))
        _set_from_env(config_data, "model", "LLM_MODEL")
        if provider == "openai":
            _set_from_env(config_data, "base_url", "OPENAI_BASE_URL")
        _set_from_env(config_data, "temperature", "LLM_TEMPERATURE")
        _set_from_env(config_data, "max_tokens", "LLM_MAX_TOKENS")
        _set_from_env(config_data, "timeout_seconds", "LLM_TIMEOUT")

        return cls.model_validate(config_data)

    def get_default_model(self) -> str:
        """Return the configured model or the provider-specific default."""
        return self.model or _DEFAULT_MODELS[self.provider]


class PatternDetectorConfiguration(BaseConfiguration):
    """Settings for the pattern detector.

    Attributes:
        enabled_rules: Rule ids to apply; None applies every rule in the catalog
        severity_threshold: Rules less severe than this are not applied

    """

    enabled_rules: tuple[str, ...] | None = Field(default=None)
    severity_threshold: Severity = Field(default=Severity.INFO)

    @field_validator("severity_threshold", mode="before")
    @classmethod
    def normalise_threshold(cls, v: object) -> object:
        """Accept severity names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @classmethod
    @override
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties with environment fallback.

        Environment variables used:
        - STATIC_ENABLED_RULES: Comma separated rule ids
        - STATIC_SEVERITY_THRESHOLD: Minimum severity name
        """
        config_data = properties.copy()

        if "enabled_rules" not in config_data:
            rules_env = os.getenv("STATIC_ENABLED_RULES", "")
            rule_ids = [r.strip() for r in rules_env.split(",") if r.strip()]
            if rule_ids:
                config_data["enabled_rules"] = tuple(rule_ids)
        _set_from_env(config_data, "severity_threshold", "STATIC_SEVERITY_THRESHOLD")

        return cls.model_validate(config_data)

    def is_rule_enabled(self, rule_id: str) -> bool:
        """Check whether a rule id is selected."""
        return self.enabled_rules is None or rule_id in self.enabled_rules

    def meets_severity_threshold(self, severity: Severity) -> bool:
        """Check whether a severity is at or above the configured threshold."""
        return severity.rank <= self.severity_threshold.rank


class ScanLimitsConfiguration(BaseConfiguration):
    """Input limits enforced before any adapter runs."""

    max_code_size: int = Field(
        default=100 * 1024, ge=1, description="Maximum source size in bytes (UTF-8)"
    )

    @classmethod
    @override
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration with SCAN_MAX_CODE_SIZE environment fallback."""
        config_data = properties.copy()
        _set_from_env(config_data, "max_code_size", "SCAN_MAX_CODE_SIZE")
        return cls.model_validate(config_data)


class ScanEngineConfiguration(BaseConfiguration):
    """Complete configuration for SecurityScanEngine.

    Example:
        ```python
        # Zero-config (reads from environment)
        config = ScanEngineConfiguration.from_properties({})

        # Explicit sections override the environment
        config = ScanEngineConfiguration.from_properties({
            "llm": {"enabled": False},
            "pattern_detector": {"severity_threshold": "high"},
        })
        ```

    """

    llm: LLMServiceConfiguration = Field(default_factory=LLMServiceConfiguration)
    pattern_detector: PatternDetectorConfiguration = Field(
        default_factory=PatternDetectorConfiguration
    )
    limits: ScanLimitsConfiguration = Field(default_factory=ScanLimitsConfiguration)

    @classmethod
    @override
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create every section via its own from_properties (environment aware)."""
        return cls(
            llm=LLMServiceConfiguration.from_properties(properties.get("llm", {})),
            pattern_detector=PatternDetectorConfiguration.from_properties(
                properties.get("pattern_detector", {})
            ),
            limits=ScanLimitsConfiguration.from_properties(
                properties.get("limits", {})
            ),
        )
