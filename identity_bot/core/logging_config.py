"""Logging configuration for the identity bot."""

import logging.config


def configure_logging(log_level: str = "INFO") -> None:
    """Install a console handler on the root logger."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {
                "level": log_level.upper(),
                "handlers": ["console"],
            },
        }
    )
