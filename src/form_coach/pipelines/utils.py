"""
Shared utilities for the form-coach pipelines.
"""

import logging

from .config import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: str | None = None) -> None:
    """Apply the project log format. Intended for applications and scripts;
    the library itself never configures logging on import.

    Args:
        level: Log level name (default: ``FORM_COACH_LOG_LEVEL``).
    """
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
