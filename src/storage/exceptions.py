################################################################################
# File Name: exceptions.py
# Purpose/Description: Storage engine exceptions
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Split out of database.py
# ================================================================================
################################################################################
"""
Storage engine exceptions.

Exception hierarchy:
    StorageError
    └── DatabaseError
        ├── DatabaseConnectionError
        └── DatabaseInitializationError
"""

from common.error_handler import StorageError


class DatabaseError(StorageError):
    """Base exception for database-related errors."""
    pass


class DatabaseConnectionError(DatabaseError):
    """Error connecting to the database or running a statement."""
    pass


class DatabaseInitializationError(DatabaseError):
    """Error creating the database schema."""
    pass
