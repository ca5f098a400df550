import logging
import logging.config

from . import config
from .reporter import console

LOG_FORMAT = "%(name)s: %(message)s"


def logging_config(level: str = config.LOG_LEVEL) -> dict:
    # Log records go through the reporter's console so they print above the
    # live status line instead of tearing it.
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "()": "rich.logging.RichHandler",
                "console": console,
                "formatter": "default",
                "show_path": False,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def setup_logging(level: str = config.LOG_LEVEL):
    logging.config.dictConfig(logging_config(level.upper()))
