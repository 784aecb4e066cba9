"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

from vidembed.infrastructure.providers.constants import (
    DEFAULT_CLIENT_TIMEOUT,
    DEFAULT_HOME_TIMEOUT,
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_USER_AGENT,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "environment": "dev",
    "provider": {
        "main_url": "https://vidembed.cc",
    },
    "http": {
        "timeout_seconds": DEFAULT_CLIENT_TIMEOUT,
        "home_timeout_seconds": DEFAULT_HOME_TIMEOUT,
        "max_concurrent": DEFAULT_MAX_CONCURRENT,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
