################################################################################
# File Name: exceptions.py
# Purpose/Description: Scheduling exceptions
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
Scheduling exceptions.

Exception hierarchy:
    BaseError
    └── SchedulingError
        └── SchedulerShutdownError
"""

from common.error_handler import BaseError


class SchedulingError(BaseError):
    """Base exception for scheduling errors."""
    pass


class SchedulerShutdownError(SchedulingError):
    """A job was registered after the timer service was shut down."""
    pass
