"""Fail-fast environment validation for the bingo engine.

Runs once, before the settings object is built, so a misconfigured
deployment fails at import time instead of on the first refresh.
"""

from __future__ import annotations

import os
from functools import lru_cache
from urllib.parse import urlparse

ALLOWED_ENVIRONMENTS = ("development", "staging", "production")
LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "0.0.0.0"})


def check_environment(environment: str) -> None:
    if environment not in ALLOWED_ENVIRONMENTS:
        raise RuntimeError(
            f"ENVIRONMENT must be one of: {', '.join(ALLOWED_ENVIRONMENTS)} (got {environment!r})."
        )


def check_api_url(value: str) -> None:
    """Production must talk to a real NHL API host, not a local stub."""
    host = urlparse(value).hostname
    if not host:
        raise RuntimeError(f"NHL_API_BASE_URL is not a valid URL (missing hostname): {value!r}.")
    if host in LOCAL_HOSTS:
        raise RuntimeError(f"NHL_API_BASE_URL must not point to {host} in production.")


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate environment variables before the settings are loaded.

    ENVIRONMENT defaults to development. In production an overridden
    NHL_API_BASE_URL must point at a real host.
    """
    environment = os.getenv("ENVIRONMENT", "").strip() or "development"
    check_environment(environment)

    base_url = os.getenv("NHL_API_BASE_URL", "").strip()
    if environment == "production" and base_url:
        check_api_url(base_url)
