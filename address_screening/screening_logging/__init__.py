"""
Structured logging for address screening. Use get_logger() in all modules;
the CLI calls configure_logging() once the environment is loaded.
"""

from address_screening.screening_logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
