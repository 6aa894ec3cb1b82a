"""
Logging setup for docker-mcp

Every module logs through ``get_logger(__name__)``, so all loggers hang off
the ``docker_mcp`` package logger and share the handlers installed here.
"""
import logging
import logging.handlers
import os
import sys
from typing import Optional

PACKAGE_LOGGER = 'docker_mcp'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    log_level: str = 'INFO',
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 3,
    stream=None
) -> logging.Logger:
    """Configure the package logger

    Args:
        log_level: Level name, unknown names fall back to INFO
        log_file: Rotating log file path (console only when None)
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep
        stream: Console stream (default: stderr, keeps demo output on stdout clean)

    Returns:
        The ``docker_mcp`` logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Failed to setup file logging at {log_file}: {e}")

    return logger


def setup_logger_from_config(config) -> logging.Logger:
    """Configure the package logger from a ConnectorConfig"""
    return setup_logger(
        log_level=config.log_level,
        log_file=config.log_file,
        max_bytes=config.log_max_size,
        backup_count=config.log_backup_count
    )


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Get a logger below the package logger

    Args:
        name: Module name, usually ``__name__``

    Returns:
        Logger instance
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
