"""
Logging setup shared by processes that embed the resolution engine.
"""

import logging

from blockflow.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings | None = None) -> int:
    """
    Configure root logging from settings.

    Args:
        settings: Settings to use. Defaults to the cached application settings.

    Returns:
        The effective log level applied to the blockflow loggers
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    # Library loggers follow the configured level even if the root logger was
    # configured earlier by the host application
    logging.getLogger("blockflow").setLevel(level)

    return level
