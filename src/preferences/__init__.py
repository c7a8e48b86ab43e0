################################################################################
# File Name: __init__.py
# Purpose/Description: Preferences subpackage
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial subpackage creation
# ================================================================================
################################################################################
"""
Preferences Subpackage.

Exports:
    - PreferenceStore: JSON-backed key-value store
    - VersionStore: last recorded application version
    - DEFAULT_PREFERENCES and preference key constants
    - PreferenceStoreError
"""

from .defaults import (
    DEFAULT_PREFERENCES,
    P_LEGACY_SYNC_ONGOING,
    P_SYNC_LAST_RUN,
    P_SYNC_ONGOING,
    P_TASK_KILLER_HELP,
)
from .exceptions import PreferenceStoreError
from .store import P_CURRENT_VERSION, PreferenceStore, VersionStore

__all__ = [
    'PreferenceStore',
    'VersionStore',
    'PreferenceStoreError',
    'DEFAULT_PREFERENCES',
    'P_CURRENT_VERSION',
    'P_TASK_KILLER_HELP',
    'P_SYNC_ONGOING',
    'P_SYNC_LAST_RUN',
    'P_LEGACY_SYNC_ONGOING',
]
