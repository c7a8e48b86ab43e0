################################################################################
# File Name: logging_config.py
# Purpose/Description: Structured logging configuration and utilities
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Thread name in format, rotating log file,
#               |              | setupLoggingFromConfig for the startup config
# ================================================================================
################################################################################

"""
Logging configuration module.

Provides structured logging with:
- Configurable log levels
- Console and rotating file output
- PII masking of e-mail addresses in task titles and notices
- Consistent pipe-delimited formatting including the thread name, so
  entries from the startup background worker are easy to pick out

Usage:
    from common.logging_config import setupLogging, getLogger

    setupLogging(level='INFO')
    logger = getLogger(__name__)
    logger.info("Startup complete")
"""

import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

# Default log format
DEFAULT_FORMAT = (
    '%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s'
)
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Rotating file defaults
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 3

# PII patterns for masking
PII_PATTERNS = {
    'email': re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b'),
    'phone': re.compile(r'\b\d{3}[-.]?\d{3}[-.]?\d{4}\b'),
}


class PIIMaskingFilter(logging.Filter):
    """Logging filter that masks e-mail addresses and phone numbers."""

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter and mask PII in log record.

        Args:
            record: Log record to filter

        Returns:
            True (always allows record, but modifies it)
        """
        if isinstance(record.msg, str):
            record.msg = self._maskPII(record.msg)

        return True

    def _maskPII(self, message: str) -> str:
        for name, pattern in PII_PATTERNS.items():
            message = pattern.sub(f'[{name.upper()}_MASKED]', message)

        return message


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter for structured logging.

    Appends a record's `extra` dict as key=value pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        extra = getattr(record, 'extra', None)
        if extra and isinstance(extra, dict):
            message += ' | ' + ' '.join(f'{k}={v}' for k, v in extra.items())

        return message


def setupLogging(
    level: str = 'INFO',
    logFormat: str | None = None,
    logFile: str | None = None,
    enablePIIMasking: bool = True,
    maxBytes: int = DEFAULT_MAX_BYTES,
    backupCount: int = DEFAULT_BACKUP_COUNT
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        logFormat: Custom format string
        logFile: Optional file path for log output
        enablePIIMasking: Whether to mask PII in logs
        maxBytes: Size at which the log file is rotated
        backupCount: Number of rotated log files to keep

    Returns:
        Root logger instance
    """
    rootLogger = logging.getLogger()
    rootLogger.setLevel(getattr(logging, level.upper(), logging.INFO))

    rootLogger.handlers.clear()

    formatter = StructuredFormatter(
        fmt=logFormat or DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT
    )

    consoleHandler = logging.StreamHandler(sys.stdout)
    consoleHandler.setFormatter(formatter)
    if enablePIIMasking:
        consoleHandler.addFilter(PIIMaskingFilter())
    rootLogger.addHandler(consoleHandler)

    if logFile:
        logPath = Path(logFile)
        logPath.parent.mkdir(parents=True, exist_ok=True)

        fileHandler = RotatingFileHandler(
            logFile,
            maxBytes=maxBytes,
            backupCount=backupCount,
            encoding='utf-8'
        )
        fileHandler.setFormatter(formatter)
        if enablePIIMasking:
            fileHandler.addFilter(PIIMaskingFilter())
        rootLogger.addHandler(fileHandler)

    rootLogger.info(f"Logging configured | level={level}")

    return rootLogger


def setupLoggingFromConfig(config: dict[str, Any], verbose: bool = False) -> logging.Logger:
    """
    Configure logging from the 'logging' section of the application config.

    Args:
        config: Validated configuration dictionary
        verbose: Force DEBUG level regardless of configuration

    Returns:
        Root logger instance
    """
    loggingConfig = config.get('logging', {})
    level = 'DEBUG' if verbose else loggingConfig.get('level', 'INFO')

    return setupLogging(
        level=level,
        logFormat=loggingConfig.get('format'),
        logFile=loggingConfig.get('file'),
        enablePIIMasking=loggingConfig.get('maskPII', True),
    )


def getLogger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
