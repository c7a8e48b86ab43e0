################################################################################
# File Name: sync.py
# Purpose/Description: Background sync service and its in-progress flag
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
Background sync service.

The remote protocol is supplied by the caller as a plain callable. The
service only owns the persisted "sync in progress" flag: it is set while
the callable runs and always cleared afterwards. A flag left set by a
process that died mid-sync is cleared at startup by stopOngoing().
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from preferences.defaults import P_SYNC_LAST_RUN, P_SYNC_ONGOING
from preferences.store import PreferenceStore

logger = logging.getLogger(__name__)


def _noSync() -> None:
    logger.debug("No sync provider configured")


class SyncService:
    """Runs the injected sync callable and tracks its in-progress flag."""

    def __init__(
        self,
        preferences: PreferenceStore,
        syncCallable: Callable[[], Any] | None = None
    ):
        self._preferences = preferences
        self._syncCallable = syncCallable or _noSync

    def isOngoing(self) -> bool:
        return self._preferences.getBoolean(P_SYNC_ONGOING, False)

    def stopOngoing(self) -> bool:
        """
        Clear a stale in-progress flag.

        Returns:
            True if the flag was set
        """
        wasOngoing = self.isOngoing()
        if wasOngoing:
            logger.warning("Clearing stale sync-in-progress flag")
        self._preferences.setBoolean(P_SYNC_ONGOING, False)
        return wasOngoing

    def synchronize(self) -> None:
        """
        Run one sync.

        Raises:
            Exception: Whatever the sync callable raises; the flag is
                cleared either way
        """
        if self.isOngoing():
            logger.info("Sync already in progress, skipping")
            return

        self._preferences.setBoolean(P_SYNC_ONGOING, True)
        logger.info("Sync started")
        try:
            self._syncCallable()
            self._preferences.setString(P_SYNC_LAST_RUN, datetime.now().isoformat())
            logger.info("Sync completed")
        finally:
            self._preferences.setBoolean(P_SYNC_ONGOING, False)
