import logging.config

from readytowork.core.config import settings


def configure_logging() -> None:
    """Console logging for the API process. Level comes from LOG_LEVEL."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": "[{levelname}] {asctime} {name}: {message}", "style": "{"},
            },
            "handlers": {
                "console": {"class": "logging.StreamHandler", "formatter": "standard"},
            },
            "loggers": {
                "readytowork": {
                    "handlers": ["console"],
                    "level": settings.LOG_LEVEL.upper(),
                    "propagate": False,
                },
            },
        }
    )
