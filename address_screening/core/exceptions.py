"""
Application-level exceptions.

Only startup failures (configuration, catalog) reach the CLI. Remote failures
for a single address are raised inside the screener and folded into that
address's outcome; they never leave it.
"""

from __future__ import annotations


class ScreeningError(Exception):
    """Base class for address screening errors."""


class ConfigError(ScreeningError):
    """Invalid or missing run configuration."""


class MissingCredentialError(ConfigError):
    """API_KEY is not set in the environment or .env file."""

    def __init__(self, env_var: str = "API_KEY") -> None:
        super().__init__(f"Please set ${env_var} environment variable or add it to .env file.")
        self.env_var = env_var


class CatalogUnavailable(ScreeningError):
    """The category catalog could not be fetched; the report schema is unknown."""


class RemoteStatusError(ScreeningError):
    """Remote service answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{status_code} {reason}".strip())
