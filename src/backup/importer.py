################################################################################
# File Name: importer.py
# Purpose/Description: Restore the task database from a backup snapshot
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
Backup import routine.

Restores a snapshot written by BackupManager over the database file the
environment reports for the configured database name. The snapshot is
decompressed into a temporary file next to the target, checked for the
SQLite header and then moved into place, so a failed import never leaves a
half-written database behind.

Only a full restore (no merge strategy) is supported.

Usage:
    from backup.importer import BackupImporter

    importer = BackupImporter(databaseName='tasklight.db')
    importer.importBackup(environment, 'data/backups/tasklight_backup_x.db.gz')
"""

import gzip
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from .exceptions import BackupConfigurationError, BackupOperationError
from .types import SQLITE_HEADER

logger = logging.getLogger(__name__)


class BackupImporter:
    """Full-restore import routine for database snapshots."""

    def __init__(self, databaseName: str):
        """
        Args:
            databaseName: File name of the database to restore into
        """
        self._databaseName = databaseName

    def __call__(
        self,
        environment: Any,
        filePath: str,
        mergeStrategy: Any = None
    ) -> None:
        self.importBackup(environment, filePath, mergeStrategy)

    def importBackup(
        self,
        environment: Any,
        filePath: str,
        mergeStrategy: Any = None
    ) -> Path:
        """
        Restore the database from a snapshot.

        Args:
            environment: Application environment (provides getDatabasePath)
            filePath: Snapshot to import (.db.gz or plain .db)
            mergeStrategy: Must be None (full restore)

        Returns:
            Path of the restored database file

        Raises:
            BackupConfigurationError: If a merge strategy is requested
            BackupOperationError: If the snapshot is unreadable or invalid
        """
        if mergeStrategy is not None:
            raise BackupConfigurationError(
                "Merging backups is not supported",
                details={'mergeStrategy': str(mergeStrategy)}
            )

        source = Path(filePath)
        target = Path(environment.getDatabasePath(self._databaseName))
        logger.info(f"Importing backup | source={source} target={target}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmpName = tempfile.mkstemp(
                prefix='.restore-', suffix='.db', dir=str(target.parent)
            )
            try:
                with os.fdopen(fd, 'wb') as destFile:
                    opener = gzip.open if source.name.endswith('.gz') else open
                    with opener(source, 'rb') as sourceFile:
                        shutil.copyfileobj(sourceFile, destFile)

                with open(tmpName, 'rb') as restored:
                    header = restored.read(len(SQLITE_HEADER))
                if header != SQLITE_HEADER:
                    raise BackupOperationError(
                        "Backup is not a database snapshot",
                        details={'path': str(source)}
                    )

                os.replace(tmpName, target)
            finally:
                if os.path.exists(tmpName):
                    os.unlink(tmpName)

        except (OSError, EOFError) as e:
            raise BackupOperationError(
                f"Failed to import backup: {e}",
                details={'path': str(source)}
            ) from e

        logger.info(f"Backup imported | target={target}")
        return target
