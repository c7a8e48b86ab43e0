################################################################################
# File Name: __init__.py
# Purpose/Description: Recovery subpackage
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial subpackage creation
# 2026-10-20    | M. Cornelison | Export RESTORE_TAG
# ================================================================================
################################################################################
"""
Recovery Subpackage.

Exports:
    - RecoveryInspector: restores a lost database from the newest backup
    - STORAGE_STABLE_VERSION, RESTORED_EVENT, RESTORE_TAG
    - RecoveryError
"""

from .exceptions import RecoveryError
from .inspector import RESTORE_TAG, RESTORED_EVENT, STORAGE_STABLE_VERSION, RecoveryInspector

__all__ = [
    'RecoveryInspector',
    'RecoveryError',
    'STORAGE_STABLE_VERSION',
    'RESTORED_EVENT',
    'RESTORE_TAG',
]
