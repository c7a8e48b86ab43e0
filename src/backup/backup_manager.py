################################################################################
# File Name: backup_manager.py
# Purpose/Description: BackupManager class for database snapshots
# Author: Ralph Agent
# Creation Date: 2026-01-26
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-26    | Ralph Agent  | Initial implementation
# 2026-10-19    | M. Cornelison | Backup directory listing by modification time,
#               |              | retention by file count instead of metadata JSON
# 2026-10-20    | M. Cornelison | Write snapshots to a hidden temp file, then rename
# ================================================================================
################################################################################
"""
BackupManager class for database snapshots.

Provides functionality for backing up the task database to compressed .gz
files in the backup directory and trimming old snapshots.

Features:
- Compress database to .gz format (or plain copy)
- List backup artifacts newest first
- Old backup cleanup with configurable retention

Usage:
    from backup.backup_manager import BackupManager

    manager = BackupManager(backupDir='data/backups', databasePath='data/tasklight.db')
    result = manager.performBackup()
    if result.success:
        print(f"Backup created: {result.backupPath}")
"""

import gzip
import logging
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

from .exceptions import BackupOperationError
from .types import (
    BACKUP_FILE_EXTENSION,
    BACKUP_FILE_PREFIX,
    BACKUP_PLAIN_EXTENSION,
    DEFAULT_MAX_BACKUPS,
    BackupArtifact,
    BackupResult,
    BackupStatus,
)

logger = logging.getLogger(__name__)


def listBackupArtifacts(directory: str | Path) -> list[BackupArtifact]:
    """
    List the files in a backup directory, most recently modified first.

    Args:
        directory: Backup directory

    Returns:
        Artifacts ordered by modification time descending; empty if the
        directory does not exist
    """
    backupDir = Path(directory)
    if not backupDir.is_dir():
        return []

    artifacts = [
        BackupArtifact.fromPath(child)
        for child in backupDir.iterdir()
        if child.is_file() and not child.name.startswith('.')
    ]
    artifacts.sort(key=lambda artifact: artifact.modifiedTime, reverse=True)
    return artifacts


class BackupManager:
    """
    Manages database snapshots with compression and retention.

    Example:
        manager = BackupManager('data/backups', 'data/tasklight.db', maxBackups=7)
        manager.performBackup()
        manager.cleanupOldBackups()
    """

    def __init__(
        self,
        backupDir: str | Path,
        databasePath: str | Path,
        maxBackups: int = DEFAULT_MAX_BACKUPS,
        compress: bool = True
    ):
        """
        Initialize the backup manager.

        Args:
            backupDir: Directory where snapshots are written
            databasePath: Database file to snapshot
            maxBackups: Number of snapshots kept by cleanupOldBackups()
            compress: Write .db.gz snapshots instead of plain copies
        """
        self._backupDir = Path(backupDir)
        self._databasePath = Path(databasePath)
        self._maxBackups = maxBackups
        self._compress = compress
        self._status = BackupStatus.PENDING
        self._lastResult: BackupResult | None = None

    @property
    def backupDir(self) -> Path:
        return self._backupDir

    # ================================================================================
    # Backup Operations
    # ================================================================================

    def performBackup(self) -> BackupResult:
        """
        Snapshot the database into the backup directory.

        Returns:
            BackupResult; a missing database file is a failed result

        Raises:
            BackupOperationError: If writing the snapshot fails
        """
        self._status = BackupStatus.IN_PROGRESS
        timestamp = datetime.now()

        if not self._databasePath.exists():
            error = f"Database file not found: {self._databasePath}"
            logger.warning(error)
            self._status = BackupStatus.FAILED
            self._lastResult = BackupResult.createFailure(error, timestamp)
            return self._lastResult

        extension = BACKUP_FILE_EXTENSION if self._compress else BACKUP_PLAIN_EXTENSION
        backupFilename = (
            f"{BACKUP_FILE_PREFIX}{timestamp.strftime('%Y%m%d_%H%M%S_%f')}{extension}"
        )
        backupPath = self._backupDir / backupFilename

        tmpName: str | None = None
        try:
            self._backupDir.mkdir(parents=True, exist_ok=True)

            # Hidden until complete; listBackupArtifacts skips dot files
            fd, tmpName = tempfile.mkstemp(
                prefix='.snapshot-', suffix=extension, dir=str(self._backupDir)
            )
            os.close(fd)

            if self._compress:
                self._compressFile(self._databasePath, Path(tmpName))
            else:
                shutil.copy2(self._databasePath, tmpName)

            os.replace(tmpName, backupPath)
            tmpName = None
            backupSize = backupPath.stat().st_size

        except OSError as e:
            error = f"Backup failed: {e}"
            logger.error(error)
            self._status = BackupStatus.FAILED
            self._lastResult = BackupResult.createFailure(error, timestamp)
            raise BackupOperationError(error, details={'exception': str(e)}) from e

        finally:
            if tmpName is not None and os.path.exists(tmpName):
                try:
                    os.unlink(tmpName)
                except OSError:
                    logger.warning(f"Could not remove partial backup: {tmpName}")

        self._status = BackupStatus.COMPLETED
        self._lastResult = BackupResult.createSuccess(
            size=backupSize,
            backupPath=str(backupPath),
            timestamp=timestamp
        )

        logger.info(f"Backup completed: {backupFilename} ({backupSize / 1024:.1f} KB)")
        return self._lastResult

    def _compressFile(self, sourcePath: Path, destPath: Path) -> None:
        with open(sourcePath, 'rb') as sourceFile:
            with gzip.open(destPath, 'wb') as destFile:
                shutil.copyfileobj(sourceFile, destFile)

    def runScheduledBackup(self) -> None:
        """
        Snapshot and trim, as run by the periodic backup job.

        Raises:
            BackupOperationError: If the snapshot cannot be written
        """
        result = self.performBackup()
        if result.success:
            self.cleanupOldBackups()

    # ================================================================================
    # Listing and Cleanup
    # ================================================================================

    def getBackupFiles(self) -> list[BackupArtifact]:
        """
        Get snapshots written by this manager, newest first.

        Returns:
            List of backup artifacts
        """
        return [
            artifact for artifact in listBackupArtifacts(self._backupDir)
            if Path(artifact.path).name.startswith(BACKUP_FILE_PREFIX)
        ]

    def cleanupOldBackups(self, maxBackups: int | None = None) -> int:
        """
        Remove the oldest snapshots beyond the retention count.

        Args:
            maxBackups: Snapshots to keep (uses the configured value if None)

        Returns:
            Number of snapshots removed
        """
        maxToKeep = self._maxBackups if maxBackups is None else maxBackups
        backups = self.getBackupFiles()

        if len(backups) <= maxToKeep:
            logger.debug(f"No cleanup needed: {len(backups)} backups <= {maxToKeep}")
            return 0

        removedCount = 0
        for artifact in backups[maxToKeep:]:
            try:
                Path(artifact.path).unlink()
                removedCount += 1
                logger.info(f"Removed old backup: {Path(artifact.path).name}")
            except FileNotFoundError:
                removedCount += 1
            except OSError as e:
                logger.warning(f"Failed to remove backup {artifact.path}: {e}")

        logger.info(f"Cleanup complete: removed {removedCount} old backups")
        return removedCount

    # ================================================================================
    # Status
    # ================================================================================

    def getStatus(self) -> BackupStatus:
        return self._status

    def getLastResult(self) -> BackupResult | None:
        return self._lastResult
