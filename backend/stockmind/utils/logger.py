"""Logging configuration for the application."""
import logging
import sys
from stockmind.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level() -> int:
    if settings.log_level:
        return logging.getLevelName(settings.log_level.upper())
    return logging.DEBUG if settings.environment == "development" else logging.INFO


# Root of the stockmind.* logger tree; children inherit its handler
logger = logging.getLogger("stockmind")
logger.setLevel(_resolve_level())

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

logger.propagate = False


def get_logger(component: str) -> logging.Logger:
    """Child logger such as stockmind.worker, sharing the root handler."""
    return logger.getChild(component)


__all__ = ["logger", "get_logger"]
