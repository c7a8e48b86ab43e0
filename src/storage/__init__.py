################################################################################
# File Name: __init__.py
# Purpose/Description: Storage subpackage
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
Storage Subpackage.

Exports:
    - AppDatabase: SQLite storage engine
    - DatabaseError, DatabaseConnectionError, DatabaseInitializationError
"""

from .database import AppDatabase
from .exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
)

__all__ = [
    'AppDatabase',
    'DatabaseError',
    'DatabaseConnectionError',
    'DatabaseInitializationError',
]
