################################################################################
# File Name: exceptions.py
# Purpose/Description: Preference store exceptions
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
Preference store exceptions.

Exception hierarchy:
    StorageError
    └── PreferenceStoreError
"""

from common.error_handler import StorageError


class PreferenceStoreError(StorageError):
    """Raised when the preference file cannot be written."""
    pass
