"""Logger helpers shared by all hubspot_mapper modules."""

import logging
from typing import Optional

ROOT_LOGGER_NAME = "hubspot_mapper"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the hubspot_mapper hierarchy.

    Module names that already live in the package (``__name__``) are used as-is,
    anything else is nested below the package logger.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: int = logging.WARNING, handler: Optional[logging.Handler] = None) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Calling this more than once replaces the handler instead of stacking them.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


# Library code must not emit "No handlers could be found" noise
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
