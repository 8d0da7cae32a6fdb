"""
Logging Setup
=============
Applies the configured log level to the application loggers.
"""

import logging

from agent_core.app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure root logging from settings.

    Safe to call more than once; the level is re-applied each time.
    """
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level)
    logging.getLogger("agent_core").setLevel(settings.log_level)
