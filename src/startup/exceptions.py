################################################################################
# File Name: exceptions.py
# Purpose/Description: Startup orchestration exceptions
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial creation
# ================================================================================
################################################################################
"""
Startup orchestration exceptions.

Exception hierarchy:
    BaseError
    └── StartupError
        ├── PackageMetadataError
        └── ContextAlreadyBoundError
"""

from common.error_handler import BaseError, ErrorCategory


class StartupError(BaseError):
    """Base exception for startup orchestration errors."""
    pass


class PackageMetadataError(StartupError):
    """The installed package version could not be determined."""
    category = ErrorCategory.DATA


class ContextAlreadyBoundError(StartupError):
    """A different environment was bound after the context was set."""
    pass
