################################################################################
# File Name: types.py
# Purpose/Description: Backup types, enums, and dataclasses
# Author: Ralph Agent
# Creation Date: 2026-01-26
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-26    | Ralph Agent  | Initial creation
# 2026-10-19    | M. Cornelison | BackupArtifact for restore candidates, dropped
#               |              | remote upload fields
# ================================================================================
################################################################################
"""
Backup types, enums, and dataclasses.

This module contains all type definitions for the backup system:
- BackupStatus enum for backup operation states
- BackupResult dataclass for backup operation results
- BackupArtifact dataclass for a backup file found on disk

All types have zero project dependencies (stdlib only) to avoid circular imports.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

# ================================================================================
# Backup Constants
# ================================================================================

# Backup filename prefix; the timestamp follows
BACKUP_FILE_PREFIX = 'tasklight_backup_'

# Extension for compressed / uncompressed snapshots
BACKUP_FILE_EXTENSION = '.db.gz'
BACKUP_PLAIN_EXTENSION = '.db'

# Default maximum number of backups to keep
DEFAULT_MAX_BACKUPS = 7

# First bytes of every SQLite 3 database file
SQLITE_HEADER = b'SQLite format 3\x00'


# ================================================================================
# Backup Enums
# ================================================================================

class BackupStatus(Enum):
    """
    Status of a backup operation.

    Values:
        PENDING: Backup is scheduled but not yet started
        IN_PROGRESS: Backup is currently running
        COMPLETED: Backup completed successfully
        FAILED: Backup failed with an error
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


# ================================================================================
# Backup Data Classes
# ================================================================================

@dataclass(frozen=True)
class BackupArtifact:
    """
    A backup file found in the backup directory.

    Attributes:
        path: Absolute or relative path of the file
        modifiedTime: Last modification time of the file
    """

    path: str
    modifiedTime: datetime

    @classmethod
    def fromPath(cls, path: Path) -> 'BackupArtifact':
        """Build an artifact from a file on disk, reading its mtime."""
        return cls(
            path=str(path),
            modifiedTime=datetime.fromtimestamp(path.stat().st_mtime),
        )

    @property
    def isCompressed(self) -> bool:
        return self.path.endswith('.gz')


@dataclass
class BackupResult:
    """
    Result of a backup operation.

    Attributes:
        success: Whether the backup completed successfully
        timestamp: When the backup was performed
        size: Size of the backup file in bytes (None if failed)
        error: Error message if the backup failed (None if success)
        backupPath: Path to the backup file (None if failed)
    """

    success: bool
    timestamp: datetime
    size: int | None = None
    error: str | None = None
    backupPath: str | None = None

    def toDict(self) -> dict[str, Any]:
        """
        Convert to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the result
        """
        return {
            'success': self.success,
            'timestamp': self.timestamp.isoformat(),
            'size': self.size,
            'error': self.error,
            'backupPath': self.backupPath,
        }

    @classmethod
    def createSuccess(
        cls,
        size: int,
        backupPath: str,
        timestamp: datetime | None = None
    ) -> 'BackupResult':
        """Create a successful backup result."""
        return cls(
            success=True,
            timestamp=timestamp or datetime.now(),
            size=size,
            backupPath=backupPath,
        )

    @classmethod
    def createFailure(
        cls,
        error: str,
        timestamp: datetime | None = None
    ) -> 'BackupResult':
        """Create a failed backup result."""
        return cls(
            success=False,
            timestamp=timestamp or datetime.now(),
            error=error,
        )
