################################################################################
# File Name: __init__.py
# Purpose/Description: Scheduling subpackage
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
Scheduling Subpackage.

Exports:
    Types:
        - JobKind, ScheduledJob and well-known job keys

    Services:
        - TimerService: keyed threading.Timer registry
        - BackgroundScheduler: recurring/one-shot jobs and alarm recomputation
        - AlarmScheduler, ReminderScheduler: jobs from stored fire times
        - SyncService: background sync and its in-progress flag

    Exceptions:
        - SchedulingError, SchedulerShutdownError
"""

from .types import (
    ALARM_KEY_PREFIX,
    BACKUP_KEY,
    REMINDER_KEY_PREFIX,
    SYNC_KEY,
    WIDGET_REFRESH_KEY,
    JobKind,
    ScheduledJob,
)
from .exceptions import SchedulerShutdownError, SchedulingError
from .timer_service import TimerService
from .alarms import AlarmScheduler, ReminderScheduler
from .scheduler import BackgroundScheduler
from .sync import SyncService

__all__ = [
    'JobKind',
    'ScheduledJob',
    'ALARM_KEY_PREFIX',
    'REMINDER_KEY_PREFIX',
    'WIDGET_REFRESH_KEY',
    'SYNC_KEY',
    'BACKUP_KEY',
    'SchedulingError',
    'SchedulerShutdownError',
    'TimerService',
    'AlarmScheduler',
    'ReminderScheduler',
    'BackgroundScheduler',
    'SyncService',
]
