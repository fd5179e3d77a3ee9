"""
Core utilities: shared exceptions used across config, screening, and CLI.
"""

from address_screening.core.exceptions import (
    CatalogUnavailable,
    ConfigError,
    MissingCredentialError,
    RemoteStatusError,
    ScreeningError,
)

__all__ = [
    "CatalogUnavailable",
    "ConfigError",
    "MissingCredentialError",
    "RemoteStatusError",
    "ScreeningError",
]
