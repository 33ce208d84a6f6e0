import logging
from logging import Logger

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> Logger:
    """Configure root logging once and return the package logger."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    return logging.getLogger("lms")
