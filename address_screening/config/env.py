"""
Environment variable loading for address screening.

- API_KEY: credential sent in the static auth header (required)
- SCREENING_API_HOST: entities API host (default: https://api.chainalysis.com)
- SCREENING_CATALOG_URL: category catalog endpoint
- SCREENING_AUTH_HEADER: header name carrying API_KEY (default: token)
- SCREENING_RATE_LIMIT: max API requests per minute (default: 3800)
- SCREENING_PARALLELISM: max simultaneous screens per batch (default: 45)
- SCREENING_REQUEST_TIMEOUT_SEC: per-request timeout (default: 30)
- LOG_LEVEL: minimum log level (default: INFO)
- LOG_FORMAT: json or console (default: json)
- Loads .env from the working directory when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from address_screening.core.exceptions import ConfigError
from address_screening.screening_logging.logger import DEFAULT_FORMAT, DEFAULT_LEVEL, level_value

DEFAULT_API_HOST = "https://api.chainalysis.com"
DEFAULT_CATALOG_URL = "https://reactor.chainalysis.com/api/v2/categories"
DEFAULT_AUTH_HEADER = "token"
DEFAULT_RATE_LIMIT = 3800
DEFAULT_PARALLELISM = 45
DEFAULT_REQUEST_TIMEOUT_SEC = 30.0


def load_screening_env(env_path: str | Path | None = None) -> None:
    """Load .env (working directory by default). Existing env vars win. Safe to call repeatedly."""
    load_dotenv(Path(env_path) if env_path else Path.cwd() / ".env")


def _get_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _get_number(name: str, default: float, cast: type) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def get_api_key() -> str | None:
    """Return API_KEY or None when unset/blank."""
    return (os.getenv("API_KEY") or "").strip() or None


def get_api_host() -> str:
    return _get_str("SCREENING_API_HOST", DEFAULT_API_HOST).rstrip("/")


def get_catalog_url() -> str:
    return _get_str("SCREENING_CATALOG_URL", DEFAULT_CATALOG_URL)


def get_auth_header() -> str:
    return _get_str("SCREENING_AUTH_HEADER", DEFAULT_AUTH_HEADER)


def get_rate_limit() -> int:
    return int(_get_number("SCREENING_RATE_LIMIT", DEFAULT_RATE_LIMIT, int))


def get_parallelism() -> int:
    return int(_get_number("SCREENING_PARALLELISM", DEFAULT_PARALLELISM, int))


def get_request_timeout_sec() -> float:
    return float(_get_number("SCREENING_REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC, float))


def get_log_level() -> str:
    level = _get_str("LOG_LEVEL", DEFAULT_LEVEL).upper()
    try:
        level_value(level)
    except ValueError as e:
        raise ConfigError(f"LOG_LEVEL must be a logging level name, got {level!r}") from e
    return level


def get_log_format() -> str:
    return _get_str("LOG_FORMAT", DEFAULT_FORMAT).lower()
