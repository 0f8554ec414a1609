"""
Centralized configuration management using Pydantic Settings.
"""
from enum import Enum
from typing import List, Optional, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmptyBreakdownPolicy(str, Enum):
    """What to do when the model returns an audit with no word breakdown."""

    ACCEPT = "accept"   # return the result as-is
    RETRY = "retry"     # spend a retry; malformed response once exhausted
    FAIL = "fail"       # malformed response immediately


class AuditorSettings(BaseSettings):
    """Auditor settings with environment variable support."""

    # API Keys
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )

    # Model selection
    model_name: str = Field(default="gemini-flash-latest", validation_alias="GEMINI_MODEL")
    fallback_models: Union[str, List[str]] = Field(
        default_factory=lambda: ["gemini-2.5-flash", "gemini-flash-lite-latest"],
        validation_alias="GEMINI_FALLBACK_MODELS",
    )
    temperature: float = Field(default=0.2, validation_alias="AUDIT_TEMPERATURE")

    # Retry policy
    max_retries: int = Field(default=3, ge=0, validation_alias="AUDIT_MAX_RETRIES")
    base_delay_ms: int = Field(default=2000, ge=0, validation_alias="AUDIT_BASE_DELAY_MS")
    max_jitter_ms: int = Field(default=500, ge=0, validation_alias="AUDIT_MAX_JITTER_MS")
    empty_breakdown_policy: EmptyBreakdownPolicy = Field(
        default=EmptyBreakdownPolicy.RETRY,
        validation_alias="AUDIT_EMPTY_BREAKDOWN_POLICY",
    )
    deadline_seconds: Optional[float] = Field(default=None, gt=0, validation_alias="AUDIT_DEADLINE_SECONDS")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("gemini_api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("fallback_models", mode="before")
    @classmethod
    def parse_fallback_models(cls, v):
        if isinstance(v, str):
            return [m.strip() for m in v.split(",") if m.strip()]
        elif v is None:
            return []
        return v

    @field_validator("empty_breakdown_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def model_candidates(self) -> List[str]:
        """Primary model first, then fallbacks, without duplicates."""
        seen: set[str] = set()
        ordered: List[str] = []
        for name in [self.model_name, *self.fallback_models]:
            if name and name not in seen:
                seen.add(name)
                ordered.append(name)
        return ordered

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=(),
    )


# Singleton instance
_settings: Optional[AuditorSettings] = None


def get_settings() -> AuditorSettings:
    """Get the settings singleton instance."""
    global _settings
    if _settings is None:
        _settings = AuditorSettings()
    return _settings


def reload_settings() -> AuditorSettings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = AuditorSettings()
    return _settings
