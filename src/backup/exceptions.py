################################################################################
# File Name: exceptions.py
# Purpose/Description: Backup system exceptions
# Author: Ralph Agent
# Creation Date: 2026-01-26
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-26    | Ralph Agent  | Initial creation
# 2026-10-19    | M. Cornelison | Rebased on StorageError, dropped provider errors
# ================================================================================
################################################################################
"""
Backup system exceptions.

Exception hierarchy:
    StorageError
    └── BackupError
        ├── BackupConfigurationError
        └── BackupOperationError
"""

from common.error_handler import StorageError


class BackupError(StorageError):
    """
    Base exception for backup-related errors.

    Attributes:
        message: Human-readable error message
        details: Additional error context as a dictionary
    """

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | details={self.details}"
        return self.message


class BackupConfigurationError(BackupError):
    """
    Error in backup configuration or arguments.

    Raised for unsupported options such as an unknown merge strategy.
    """
    pass


class BackupOperationError(BackupError):
    """
    Error during a backup operation.

    Raised when creating, validating or restoring a snapshot fails.
    """
    pass
