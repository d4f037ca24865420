"""
Structured (JSON) logging for the service.
"""
import logging

from pythonjsonlogger.json import JsonFormatter

LOGGER_NAME = "posts_api"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a JSON stream handler to the service logger.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
