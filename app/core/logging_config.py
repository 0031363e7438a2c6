# app/core/logging_config.py

from logging.config import dictConfig


def configure_logging(level: str = "INFO") -> None:
    """Install the console handler shared by the app and the operator scripts."""
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "app": {"level": level},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    })
