################################################################################
# File Name: analytics.py
# Purpose/Description: Logging-backed analytics event reporter
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
Analytics reporter.

Records named usage events. Events are written to the log and counted in
memory; there is no remote sink.

Usage:
    from common.analytics import AnalyticsReporter

    analytics = AnalyticsReporter()
    analytics.onEvent('lost-tasks-restored')
"""

import logging
import threading
from collections import Counter
from typing import Any

logger = logging.getLogger(__name__)


class AnalyticsReporter:
    """Thread-safe, in-memory analytics event counter."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._lock = threading.Lock()
        self._events: Counter[str] = Counter()
        self._sessionStarted = False

    def startSession(self) -> None:
        """Mark the start of an analytics session. Safe to call repeatedly."""
        with self._lock:
            if self._sessionStarted:
                return
            self._sessionStarted = True
        logger.debug("Analytics session started")

    def isSessionStarted(self) -> bool:
        return self._sessionStarted

    def onEvent(self, name: str, **properties: Any) -> None:
        """
        Record an event.

        Args:
            name: Event name
            **properties: Extra values written to the log line
        """
        if not self.enabled:
            return

        with self._lock:
            self._events[name] += 1

        extra = ' '.join(f"{key}={value}" for key, value in properties.items())
        logger.info(f"Analytics event | name={name} {extra}".rstrip())

    def getEventCount(self, name: str) -> int:
        with self._lock:
            return self._events[name]

    def getEvents(self) -> dict[str, int]:
        with self._lock:
            return dict(self._events)
