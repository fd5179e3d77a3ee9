"""
Configuration management for address screening.

Loads and validates settings from environment variables and an optional .env
file. Exposes a single immutable settings object for each run.
"""

from address_screening.config.settings import ScreeningSettings, get_settings  # noqa: F401

__all__ = ["ScreeningSettings", "get_settings"]
