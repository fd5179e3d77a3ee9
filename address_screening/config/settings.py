"""
Run settings for address screening.

Responsibilities:
- Merge environment configuration with CLI overrides.
- Validate required settings (API_KEY) and numeric bounds.
- Expose one immutable ScreeningSettings object that is passed into every
  component at construction; nothing reads the environment after startup.
"""

from __future__ import annotations

from dataclasses import dataclass

from address_screening.config import env
from address_screening.core.exceptions import ConfigError, MissingCredentialError

# Register + retrieve per address
DEFAULT_REQUESTS_PER_ADDRESS = 2


@dataclass(frozen=True)
class ScreeningSettings:
    """
    Immutable configuration for one screening run.

    rate_limit: Max API requests per minute across the whole run.
    parallelism: Max simultaneous address screens in one batch.
    requests_per_address: Remote calls made per address; feeds the rate window capacity.
    request_timeout_sec: Timeout for each remote request; a timeout fails only that address.
    include_indirect: Split exposure columns into <category>_direct / <category>_indirect.
    """

    api_key: str
    api_host: str = env.DEFAULT_API_HOST
    catalog_url: str = env.DEFAULT_CATALOG_URL
    auth_header: str = env.DEFAULT_AUTH_HEADER
    rate_limit: int = env.DEFAULT_RATE_LIMIT
    parallelism: int = env.DEFAULT_PARALLELISM
    requests_per_address: int = DEFAULT_REQUESTS_PER_ADDRESS
    request_timeout_sec: float = env.DEFAULT_REQUEST_TIMEOUT_SEC
    include_indirect: bool = False

    def __post_init__(self) -> None:
        if not self.api_key:
            raise MissingCredentialError()
        if self.parallelism < 1:
            raise ConfigError(f"parallelism must be >= 1, got {self.parallelism}")
        if self.rate_limit < 1:
            raise ConfigError(f"rate_limit must be >= 1, got {self.rate_limit}")
        if self.requests_per_address < 1:
            raise ConfigError(f"requests_per_address must be >= 1, got {self.requests_per_address}")
        if self.request_timeout_sec <= 0:
            raise ConfigError(f"request_timeout_sec must be > 0, got {self.request_timeout_sec}")

    @property
    def headers(self) -> dict[str, str]:
        """Static auth header sent with every remote call."""
        return {self.auth_header: self.api_key}

    @property
    def entities_url(self) -> str:
        return f"{self.api_host}/api/risk/v2/entities"


def get_settings(
    *,
    include_indirect: bool = False,
    parallelism: int | None = None,
    rate_limit: int | None = None,
    request_timeout_sec: float | None = None,
    load_env: bool = True,
) -> ScreeningSettings:
    """
    Build ScreeningSettings from env (and .env), applying non-None overrides.

    Raises:
        MissingCredentialError: API_KEY is not set.
        ConfigError: a numeric setting is malformed or out of range.
    """
    if load_env:
        env.load_screening_env()
    api_key = env.get_api_key()
    if not api_key:
        raise MissingCredentialError()
    return ScreeningSettings(
        api_key=api_key,
        api_host=env.get_api_host(),
        catalog_url=env.get_catalog_url(),
        auth_header=env.get_auth_header(),
        rate_limit=rate_limit if rate_limit is not None else env.get_rate_limit(),
        parallelism=parallelism if parallelism is not None else env.get_parallelism(),
        request_timeout_sec=(
            request_timeout_sec if request_timeout_sec is not None else env.get_request_timeout_sec()
        ),
        include_indirect=include_indirect,
    )
