################################################################################
# File Name: inspector.py
# Purpose/Description: Restore the task database when it has gone missing
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial implementation
# 2026-10-20    | M. Cornelison | Failed restores go to the error reporter
# ================================================================================
################################################################################
"""
Lost-database recovery.

If the application has run a storage-stable version before but its
database file is gone, the newest backup snapshot is imported as a full
restore. Versions at or below the storage-stable threshold kept their data
elsewhere, so a missing file there is not a loss.

Usage:
    from recovery.inspector import RecoveryInspector

    inspector = RecoveryInspector(versionStore, database, importer, analytics, backupDir)
    restored = inspector.maybeRestore(environment)
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from backup.backup_manager import listBackupArtifacts
from backup.types import BackupArtifact
from common.analytics import AnalyticsReporter
from common.error_handler import ErrorReporter
from preferences.store import VersionStore

from .exceptions import RecoveryError

logger = logging.getLogger(__name__)

# First version whose database file is expected to persist
STORAGE_STABLE_VERSION = 135

RESTORED_EVENT = 'lost-tasks-restored'
RESTORE_TAG = 'startup-database-restore'

# importer(environment, filePath, mergeStrategy)
ImportRoutine = Callable[[Any, str, Any], Any]


class RecoveryInspector:
    """Detects a lost database and restores the newest backup."""

    def __init__(
        self,
        versionStore: VersionStore,
        database: Any,
        importer: ImportRoutine,
        analytics: AnalyticsReporter,
        backupDir: str | Path,
        storageStableVersion: int = STORAGE_STABLE_VERSION,
        reporter: ErrorReporter | None = None
    ):
        """
        Initialize the inspector.

        Args:
            versionStore: Source of the last recorded version
            database: Storage engine (provides getName)
            importer: Import routine called as importer(environment, path, None)
            analytics: Receives the restore event
            backupDir: Directory holding backup snapshots
            storageStableVersion: Recorded version above which a missing
                database file means data loss
            reporter: Receives failed restores under RESTORE_TAG; they are
                only logged when None
        """
        self._versionStore = versionStore
        self._database = database
        self._importer = importer
        self._analytics = analytics
        self._backupDir = Path(backupDir)
        self._storageStableVersion = storageStableVersion
        self._reporter = reporter

    def isDatabaseLost(self, environment: Any) -> bool:
        """True if the database should exist but its file is missing."""
        if self._versionStore.getCurrentVersion() <= self._storageStableVersion:
            return False
        databasePath = Path(environment.getDatabasePath(self._database.getName()))
        return not databasePath.exists()

    def maybeRestore(self, environment: Any) -> BackupArtifact | None:
        """
        Restore the newest backup if the database has been lost.

        Never raises; a failed restore is reported and None is returned.

        Args:
            environment: Application environment

        Returns:
            The restored artifact, or None if nothing was restored
        """
        try:
            return self._restoreIfLost(environment)
        except Exception as e:
            if self._reporter is not None:
                self._reporter.reportError(RESTORE_TAG, e)
            else:
                logger.warning(
                    f"Database restore failed | tag={RESTORE_TAG} | error={e}",
                    exc_info=True
                )
            return None

    def _restoreIfLost(self, environment: Any) -> BackupArtifact | None:
        if not self.isDatabaseLost(environment):
            return None

        logger.warning(f"Database file missing | backupDir={self._backupDir}")
        artifacts = listBackupArtifacts(self._backupDir)
        if not artifacts:
            logger.info("No backup available to restore")
            return None

        newest = artifacts[0]
        self._analytics.startSession()
        try:
            self._importer(environment, str(newest.path), None)
        except Exception as e:
            raise RecoveryError(
                f"Failed to import backup: {e}",
                details={'path': str(newest.path)}
            ) from e

        self._analytics.onEvent(RESTORED_EVENT)
        logger.info(f"Database restored from backup | path={newest.path}")
        return newest
