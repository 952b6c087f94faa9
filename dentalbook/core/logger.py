"""Logging setup shared by the API server and the CLI helpers."""
import logging
import logging.config

from dentalbook.core.config import settings

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once. Later calls only adjust the level."""
    global _configured
    level = (level or settings.LOG_LEVEL).upper()

    if _configured:
        logging.getLogger().setLevel(level)
        return

    logging.config.dictConfig(
        {
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
            "root": {"handlers": ["console"], "level": level},
            "loggers": {
                "uvicorn.access": {"level": "WARNING"},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
        }
    )
    _configured = True
