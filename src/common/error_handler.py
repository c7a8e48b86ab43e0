################################################################################
# File Name: error_handler.py
# Purpose/Description: Error classification and non-throwing error reporting
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Added ErrorReporter for tagged startup faults,
#               |              | dropped retry decorator
# 2026-10-20    | M. Cornelison | Dropped RetryableError, collector report shows context
# ================================================================================
################################################################################

"""
Error handling module.

Provides centralized error handling with:
- Custom exception classes by error type
- Error classification (config, data, storage, system)
- Structured error reporting through ErrorReporter

ErrorReporter is the collaborator the startup orchestrator hands every
caught fault to. reportError() never raises, so it is safe to call from
exception handlers, background threads and the process-wide fault hook.

Usage:
    from common.error_handler import ErrorReporter, handleError

    reporter = ErrorReporter()
    try:
        operation()
    except Exception as e:
        reporter.reportError('startup-package-read', e)
"""

import logging
import sqlite3
import threading
import traceback
from collections import deque
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# Number of reported errors kept in memory for diagnostics
DEFAULT_HISTORY_SIZE = 50


class ErrorCategory(Enum):
    """Categories of errors for classification."""
    RETRYABLE = 'retryable'       # Transient, may succeed next startup
    CONFIGURATION = 'config'      # Config errors, fail fast
    DATA = 'data'                 # Data validation, log and skip
    STORAGE = 'storage'           # Database/file system failures
    SYSTEM = 'system'             # Unexpected errors


# ================================================================================
# Custom Exception Classes
# ================================================================================

class BaseError(Exception):
    """Base exception for all custom errors."""

    category: ErrorCategory = ErrorCategory.SYSTEM

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def toDict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            'type': self.__class__.__name__,
            'category': self.category.value,
            'message': self.message,
            'details': self.details
        }


class ConfigurationError(BaseError):
    """Configuration validation failure."""
    category = ErrorCategory.CONFIGURATION


class DataError(BaseError):
    """Data validation or processing error."""
    category = ErrorCategory.DATA


class StorageError(BaseError):
    """Persistent storage failure."""
    category = ErrorCategory.STORAGE


# ================================================================================
# Error Classification
# ================================================================================

def classifyError(error: BaseException) -> ErrorCategory:
    """
    Classify an error into a category.

    Args:
        error: Exception to classify

    Returns:
        ErrorCategory for the error
    """
    if isinstance(error, BaseError):
        return error.category

    errorType = type(error).__name__
    errorMessage = str(error).lower()

    if any(term in errorType.lower() for term in ['timeout', 'connection']):
        return ErrorCategory.RETRYABLE

    if 'database is locked' in errorMessage:
        return ErrorCategory.RETRYABLE

    if isinstance(error, (OSError, sqlite3.Error)):
        return ErrorCategory.STORAGE

    if any(term in errorMessage for term in ['config', 'missing', 'required']):
        return ErrorCategory.CONFIGURATION

    if isinstance(error, (ValueError, TypeError, KeyError)):
        return ErrorCategory.DATA

    return ErrorCategory.SYSTEM


# ================================================================================
# Error Handling
# ================================================================================

def handleError(
    error: Exception,
    context: dict[str, Any] | None = None,
    reraise: bool = True
) -> dict[str, Any]:
    """
    Handle an error with logging and classification.

    Args:
        error: Exception that occurred
        context: Additional context information
        reraise: Whether to re-raise the exception

    Returns:
        Error details dictionary

    Raises:
        The original exception if reraise is True
    """
    category = classifyError(error)
    context = context or {}

    errorDetails = {
        'type': type(error).__name__,
        'category': category.value,
        'message': str(error),
        'context': context,
        'traceback': traceback.format_exc()
    }

    if category == ErrorCategory.CONFIGURATION:
        logger.error(f"Configuration error: {error}")
    elif category == ErrorCategory.DATA:
        logger.warning(f"Data error: {error}")
    elif category == ErrorCategory.RETRYABLE:
        logger.warning(f"Retryable error: {error}")
    else:
        logger.error(f"Error: {error}", exc_info=True)

    if reraise:
        raise error

    return errorDetails


def formatError(error: BaseException) -> str:
    """
    Format an error for display/logging.

    Args:
        error: Exception to format

    Returns:
        Formatted error string
    """
    category = classifyError(error)

    if isinstance(error, BaseError):
        details = f" | details={error.details}" if error.details else ""
        return f"[{category.value.upper()}] {error.message}{details}"

    return f"[{category.value.upper()}] {type(error).__name__}: {error}"


class ErrorCollector:
    """
    Collects multiple errors during batch processing.

    Example:
        collector = ErrorCollector()
        for item in items:
            try:
                process(item)
            except Exception as e:
                collector.add(e, item=item)

        if collector.hasErrors():
            collector.report()
    """

    def __init__(self):
        self.errors: list[dict[str, Any]] = []

    def add(self, error: BaseException, **context: Any) -> None:
        """Add an error to the collection."""
        self.errors.append({
            'error': error,
            'category': classifyError(error).value,
            'message': str(error),
            'context': context
        })

    def hasErrors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0

    def count(self) -> int:
        """Get number of collected errors."""
        return len(self.errors)

    def report(self) -> None:
        """Log all collected errors."""
        if not self.errors:
            return

        logger.error(f"Collected {len(self.errors)} errors:")
        for i, err in enumerate(self.errors, 1):
            context = ' '.join(f'{key}={value}' for key, value in err['context'].items())
            suffix = f" | {context}" if context else ''
            logger.error(f"  {i}. [{err['category']}] {err['message']}{suffix}")

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()


# ================================================================================
# Error Reporter
# ================================================================================

class ErrorReporter:
    """
    Tagged, non-throwing error reporter.

    Logs every reported error with its tag and category, keeps a bounded
    in-memory history and forwards to optional listeners (for example an
    analytics sink). Nothing raised by a listener escapes reportError().

    Example:
        reporter = ErrorReporter()
        reporter.addListener(lambda tag, error: sendSomewhere(tag, error))
        reporter.reportError('reminder-startup', error)
    """

    def __init__(self, historySize: int = DEFAULT_HISTORY_SIZE):
        """
        Initialize the reporter.

        Args:
            historySize: Maximum number of reports kept in memory
        """
        self._lock = threading.Lock()
        self._history: deque[dict[str, Any]] = deque(maxlen=historySize)
        self._listeners: list[Callable[[str, BaseException], None]] = []

    def addListener(self, listener: Callable[[str, BaseException], None]) -> None:
        """Register a callable invoked with (tag, error) for every report."""
        with self._lock:
            self._listeners.append(listener)

    def reportError(self, tag: str, error: BaseException) -> None:
        """
        Report an error under a tag. Never raises.

        Args:
            tag: Short identifier of where the error happened
            error: The exception that was caught
        """
        try:
            category = classifyError(error)
            entry = {
                'tag': tag,
                'type': type(error).__name__,
                'category': category.value,
                'message': str(error),
                'timestamp': datetime.now(),
            }

            with self._lock:
                self._history.append(entry)
                listeners = list(self._listeners)

            logger.error(
                f"{formatError(error)} | tag={tag}",
                exc_info=(type(error), error, error.__traceback__)
            )

            for listener in listeners:
                try:
                    listener(tag, error)
                except Exception as listenerError:
                    logger.warning(
                        f"Error listener failed | tag={tag} | error={listenerError}"
                    )
        except Exception as reportFailure:
            # Last resort, the reporter itself must not raise
            logger.critical(f"Error reporting failed | tag={tag} | error={reportFailure}")

    def getHistory(self) -> list[dict[str, Any]]:
        """Get a copy of the reported error history, oldest first."""
        with self._lock:
            return list(self._history)

    def getTags(self) -> list[str]:
        """Get the tags of all reported errors, oldest first."""
        with self._lock:
            return [entry['tag'] for entry in self._history]

    def clear(self) -> None:
        """Forget all reported errors."""
        with self._lock:
            self._history.clear()
