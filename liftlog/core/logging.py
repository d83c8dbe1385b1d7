"""Logging setup for the service process."""

import logging

from liftlog.core.config import Settings


def configure_logging(settings: Settings) -> None:
    """Apply level and format once at startup. Scripts may call it too."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=settings.log_format)
    # SQL echo is controlled by the engine, keep the sqlalchemy logger quiet otherwise
    if not settings.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
