################################################################################
# File Name: fault_handler.py
# Purpose/Description: Process-wide handler for uncaught exceptions
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################
"""
Uncaught exception handler.

Replaces sys.excepthook and threading.excepthook with hooks that report the
exception to the error reporter and then call the hook that was installed
before. KeyboardInterrupt is passed straight through.

Installing twice is a no-op; uninstallFaultHandler() restores the previous
hooks.
"""

import logging
import sys
import threading

from common.error_handler import ErrorReporter

logger = logging.getLogger(__name__)

FAULT_TAG = 'uncaught-exception'

_lock = threading.Lock()
_installed: dict = {}


def _report(reporter: ErrorReporter, error: BaseException | None) -> None:
    if error is None or isinstance(error, KeyboardInterrupt):
        return
    reporter.reportError(FAULT_TAG, error)


def installFaultHandler(reporter: ErrorReporter) -> bool:
    """
    Install the uncaught exception hooks.

    Args:
        reporter: Receives every uncaught exception

    Returns:
        True if the hooks were installed by this call
    """
    with _lock:
        if _installed:
            return False

        previousHook = sys.excepthook
        previousThreadHook = threading.excepthook

        def faultHook(excType, excValue, excTraceback):
            _report(reporter, excValue)
            previousHook(excType, excValue, excTraceback)

        def threadFaultHook(args):
            _report(reporter, args.exc_value)
            previousThreadHook(args)

        _installed['sys'] = previousHook
        _installed['threading'] = previousThreadHook
        sys.excepthook = faultHook
        threading.excepthook = threadFaultHook

    logger.info("Global exception handler installed")
    return True


def isFaultHandlerInstalled() -> bool:
    return bool(_installed)


def uninstallFaultHandler() -> None:
    """Restore the hooks that were active before installation."""
    with _lock:
        if not _installed:
            return
        sys.excepthook = _installed.pop('sys')
        threading.excepthook = _installed.pop('threading')
    logger.debug("Global exception handler removed")
