"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import AliasChoices, AliasPath, BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vidembed.infrastructure.providers.constants import (
    DEFAULT_CLIENT_TIMEOUT,
    DEFAULT_HOME_TIMEOUT,
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_USER_AGENT,
)

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _either(flat: str, section: str, key: str) -> AliasChoices:
    """Accept ``flat`` as well as ``section.key`` when validating."""
    return AliasChoices(flat, AliasPath(section, key))


class AppConfig(BaseModel):
    """
    Final, validated settings for one provider process.

    Built by ``load_config`` from the merged layers; constructing it
    directly (tests, embedding hosts) takes the flat field names.
    """

    environment: Environment = Field(
        default="dev",
        description="dev/test/prod; prod switches logs to JSON by default.",
    )

    # provider.*
    main_url: str = Field(
        default="https://vidembed.cc",
        validation_alias=_either("main_url", "provider", "main_url"),
        description="Site root; point it at a mirror when the domain moves.",
    )

    # http.*
    http_timeout_seconds: float = Field(
        default=DEFAULT_CLIENT_TIMEOUT,
        validation_alias=_either("http_timeout_seconds", "http", "timeout_seconds"),
        description="Per-request timeout for search, detail and episode pages.",
    )
    http_home_timeout_seconds: float = Field(
        default=DEFAULT_HOME_TIMEOUT,
        validation_alias=_either(
            "http_home_timeout_seconds", "http", "home_timeout_seconds"
        ),
        description="Per-request timeout for each home page listing.",
    )
    http_max_concurrent: int = Field(
        default=DEFAULT_MAX_CONCURRENT,
        validation_alias=_either("http_max_concurrent", "http", "max_concurrent"),
        description="Upper bound on simultaneous home page listing fetches.",
    )
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=_either("http_user_agent", "http", "user_agent"),
        description="User-Agent header sent with every request.",
    )

    # logging.*
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=_either("log_level", "logging", "level"),
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=_either("log_format", "logging", "format"),
        description="console or json; filled in from environment when unset.",
    )

    @field_validator("main_url")
    @classmethod
    def _validate_main_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("main_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("http_timeout_seconds", "http_home_timeout_seconds")
    @classmethod
    def _validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @field_validator("http_max_concurrent")
    @classmethod
    def _validate_max_concurrent(cls, v: int) -> int:
        if v < 1:
            raise ValueError("http_max_concurrent must be >= 1")
        return v

    @model_validator(mode="after")
    def _fill_log_format(self) -> "AppConfig":
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """Render as the nested mapping a ``config.yaml`` would contain."""
        return {
            "environment": self.environment,
            "provider": {"main_url": self.main_url},
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "home_timeout_seconds": self.http_home_timeout_seconds,
                "max_concurrent": self.http_max_concurrent,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    ``VIDEMBED_*`` environment variables, every one optional.

    Field names are the flat ``AppConfig`` names, so ``VIDEMBED_MAIN_URL``
    overrides ``provider.main_url`` and ``VIDEMBED_HTTP_MAX_CONCURRENT``
    overrides ``http.max_concurrent``.
    """

    model_config = SettingsConfigDict(
        env_prefix="VIDEMBED_",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Optional[Environment] = None
    main_url: Optional[str] = None
    http_timeout_seconds: Optional[float] = None
    http_home_timeout_seconds: Optional[float] = None
    http_max_concurrent: Optional[int] = None
    http_user_agent: Optional[str] = None
    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """Only the variables that are actually set."""
        return self.model_dump(exclude_none=True)
