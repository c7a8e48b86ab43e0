################################################################################
# File Name: exceptions.py
# Purpose/Description: Upgrade exceptions
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
Upgrade exceptions.

Exception hierarchy:
    BaseError
    └── UpgradeError
        ├── MigrationError
        └── DuplicateStepError
"""

from typing import Any

from common.error_handler import BaseError


class UpgradeError(BaseError):
    """Base exception for upgrade errors."""
    pass


class MigrationError(UpgradeError):
    """
    A versioned migration step failed.

    Attributes:
        step: The step that failed
    """

    def __init__(self, message: str, step: Any = None, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.step = step


class DuplicateStepError(UpgradeError):
    """Two migration steps were registered for the same threshold."""
    pass
