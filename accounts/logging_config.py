"""Logging setup."""

import logging

from accounts.config import get_settings


def configure_logging() -> None:
    """Configure structured logging defaults for the application."""
    level = get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
