"""
Logging configuration for the pronunciation coach.
Provides centralized logging setup with proper formatting.
"""
import logging
import sys
from typing import Optional

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler that flushes after every emit for container visibility."""

    def emit(self, record):
        """Emit a record and flush immediately."""
        super().emit(record)
        self.flush()


def _resolve_level(level: str) -> int:
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logger(
    name: str,
    level: str = 'INFO',
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom log format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    log_level = _resolve_level(level)
    logger.setLevel(log_level)

    # Records are handled here, not again by the root logger
    logger.propagate = False

    handler = FlushingStreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(log_format or DEFAULT_LOG_FORMAT))
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get an existing logger or create a new one with default settings.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger = setup_logger(name)

    return logger


def configure_root_logging(level: str = 'INFO', log_format: Optional[str] = None) -> logging.Logger:
    """
    Replace the root logger handlers with a single flushing stdout handler.

    Used by the application factory so gunicorn workers and third-party
    libraries share the application's format and level.

    Args:
        level: Logging level name
        log_format: Log format string

    Returns:
        The root logger
    """
    log_level = _resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = FlushingStreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format or DEFAULT_LOG_FORMAT))
    root_logger.addHandler(console_handler)

    return root_logger
