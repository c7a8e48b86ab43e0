################################################################################
# File Name: exceptions.py
# Purpose/Description: Recovery exceptions
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
Recovery exceptions.

Exception hierarchy:
    StorageError
    └── RecoveryError
"""

from common.error_handler import StorageError


class RecoveryError(StorageError):
    """Restoring a lost database from backup failed."""
    pass
