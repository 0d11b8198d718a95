"""
Logging setup built on loguru.

Modules call ``get_logger(__name__)`` and the entry point calls
``setup_logging`` once.
"""

import sys

from loguru import logger

_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """
    Replace loguru's default sink with a stderr sink at ``level``.

    Args:
        level: Minimum level name (e.g. "DEBUG", "WARNING").
        log_file: Optional path for an additional rotating file sink.
    """
    logger.remove()
    logger.configure(extra={"name": "nodegate"})
    logger.add(sys.stderr, level=level.upper(), format=_FORMAT)

    if log_file:
        logger.add(log_file, level="DEBUG", rotation="10 MB", retention=2)


def get_logger(name: str):
    """Return a logger bound to the given module name."""
    return logger.bind(name=name)
