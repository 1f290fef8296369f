"""Process-level logging configuration for the server entry point.

Library modules only create loggers; handlers are installed here, once,
by whoever runs the application.
"""

import logging
from typing import Optional

from .config import Settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Install console (and optional file) logging handlers.

    Args:
        settings: Settings to read level and log file from (environment if None)
    """
    settings = settings or Settings.from_env()

    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding='utf-8'))

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, handlers=handlers, force=True)
    logging.getLogger(__name__).info(f"Logging configured at {settings.log_level}")
