################################################################################
# File Name: __init__.py
# Purpose/Description: Backup subpackage for database snapshots and restore
# Author: Ralph Agent
# Creation Date: 2026-01-26
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-26    | Ralph Agent  | Initial subpackage creation
# 2026-10-19    | M. Cornelison | Added importer and artifact listing, removed
#               |              | cloud upload
# ================================================================================
################################################################################
"""
Backup Subpackage.

Exports:
    Types and Constants:
        - BackupStatus: Enum for backup operation states
        - BackupResult: Dataclass for backup operation results
        - BackupArtifact: Dataclass for a backup file on disk
        - Constants for defaults and file names

    Manager:
        - BackupManager: Writes and trims compressed database snapshots
        - listBackupArtifacts: Lists a backup directory newest first

    Import:
        - BackupImporter: Full restore of a snapshot over the database

    Exceptions:
        - BackupError: Base backup exception
        - BackupConfigurationError: Invalid backup options
        - BackupOperationError: Error during a backup or restore
"""

from .types import (
    BACKUP_FILE_EXTENSION,
    BACKUP_FILE_PREFIX,
    BACKUP_PLAIN_EXTENSION,
    DEFAULT_MAX_BACKUPS,
    BackupArtifact,
    BackupResult,
    BackupStatus,
)
from .exceptions import (
    BackupConfigurationError,
    BackupError,
    BackupOperationError,
)
from .backup_manager import BackupManager, listBackupArtifacts
from .importer import BackupImporter

__all__ = [
    'BackupStatus',
    'BackupResult',
    'BackupArtifact',
    'BACKUP_FILE_EXTENSION',
    'BACKUP_FILE_PREFIX',
    'BACKUP_PLAIN_EXTENSION',
    'DEFAULT_MAX_BACKUPS',
    'BackupError',
    'BackupConfigurationError',
    'BackupOperationError',
    'BackupManager',
    'listBackupArtifacts',
    'BackupImporter',
]
