"""
Client configuration loaded from environment or defaults.

The environment is read here, by the application bootstrap, and handed to
the entry client as an explicit ``ApiClientConfig``.
"""

import os
from dataclasses import dataclass
from typing import Mapping

API_URL_ENV = "API_URL"
API_TIMEOUT_ENV = "API_TIMEOUT"
DEFAULT_API_BASE_URL = "http://localhost:5000/api"


@dataclass(frozen=True)
class ApiClientConfig:
    """Where the entry backend lives and how long to wait for it."""

    base_url: str = DEFAULT_API_BASE_URL
    timeout: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


def get_api_base_url(environ: Mapping[str, str] | None = None) -> str:
    """Get API base URL from env or default."""
    env = os.environ if environ is None else environ
    return env.get(API_URL_ENV, "").strip() or DEFAULT_API_BASE_URL


def get_api_timeout(environ: Mapping[str, str] | None = None) -> float | None:
    """Get request timeout in seconds from env, or None for the transport default."""
    env = os.environ if environ is None else environ
    raw = env.get(API_TIMEOUT_ENV, "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ValueError(f"{API_TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from e
    if timeout <= 0:
        raise ValueError(f"{API_TIMEOUT_ENV} must be positive, got {raw!r}")
    return timeout


def load_api_client_config(environ: Mapping[str, str] | None = None) -> ApiClientConfig:
    """Build the client configuration from the environment."""
    return ApiClientConfig(
        base_url=get_api_base_url(environ),
        timeout=get_api_timeout(environ),
    )


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()
