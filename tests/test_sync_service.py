################################################################################
# File Name: test_sync_service.py
# Purpose/Description: Tests for the background sync service
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
Tests for the SyncService class.

Run with:
    pytest tests/test_sync_service.py -v
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from preferences.defaults import P_SYNC_LAST_RUN, P_SYNC_ONGOING
from preferences.store import PreferenceStore
from scheduling import SyncService


class TestStopOngoing:
    """Tests for stopOngoing."""

    def test_stopOngoing_staleFlag_clearsAndReturnsTrue(self, preferenceStore: PreferenceStore):
        """
        Given: Flag left set by a process that died mid-sync
        When: stopOngoing() is called
        Then: Flag cleared, returns True
        """
        preferenceStore.setBoolean(P_SYNC_ONGOING, True)
        service = SyncService(preferenceStore)

        assert service.stopOngoing() is True
        assert service.isOngoing() is False

    def test_stopOngoing_noFlag_returnsFalse(self, preferenceStore: PreferenceStore):
        service = SyncService(preferenceStore)

        assert service.stopOngoing() is False
        assert preferenceStore.getBoolean(P_SYNC_ONGOING, True) is False


class TestSynchronize:
    """Tests for synchronize."""

    def test_synchronize_success_setsLastRunAndClearsFlag(self, preferenceStore: PreferenceStore):
        """
        Given: Sync callable that checks the flag while running
        When: synchronize() is called
        Then: Flag set during the call, cleared after, last run recorded
        """
        seen = []
        service = SyncService(preferenceStore, lambda: seen.append(service.isOngoing()))

        service.synchronize()

        assert seen == [True]
        assert service.isOngoing() is False
        assert preferenceStore.getString(P_SYNC_LAST_RUN) is not None

    def test_synchronize_callableRaises_clearsFlagAndPropagates(
        self, preferenceStore: PreferenceStore
    ):
        """
        Given: Sync callable that raises
        When: synchronize() is called
        Then: Error propagates, flag cleared, last run not recorded
        """
        service = SyncService(preferenceStore, MagicMock(side_effect=ConnectionError('down')))

        with pytest.raises(ConnectionError):
            service.synchronize()

        assert service.isOngoing() is False
        assert preferenceStore.getString(P_SYNC_LAST_RUN) is None

    def test_synchronize_alreadyOngoing_skips(self, preferenceStore: PreferenceStore):
        """
        Given: Sync already in progress
        When: synchronize() is called
        Then: Callable not invoked
        """
        preferenceStore.setBoolean(P_SYNC_ONGOING, True)
        syncCallable = MagicMock()

        SyncService(preferenceStore, syncCallable).synchronize()

        syncCallable.assert_not_called()

    def test_synchronize_noCallable_recordsRun(self, preferenceStore: PreferenceStore):
        SyncService(preferenceStore).synchronize()

        assert preferenceStore.getString(P_SYNC_LAST_RUN) is not None
