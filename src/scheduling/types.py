################################################################################
# File Name: types.py
# Purpose/Description: Scheduled job types
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
Scheduled job types.

A ScheduledJob is one registration with the timer service. Jobs are keyed;
registering a job under a key that is already pending replaces the pending
instance.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

# Key prefixes for jobs created from stored data
ALARM_KEY_PREFIX = 'alarm:'
REMINDER_KEY_PREFIX = 'reminder:'

# Well-known recurring job keys
WIDGET_REFRESH_KEY = 'widget-refresh'
SYNC_KEY = 'background-sync'
BACKUP_KEY = 'backup-snapshot'


class JobKind(Enum):
    """Kind of a scheduled job."""

    RECURRING_ALARM = 'recurringAlarm'
    ONE_SHOT_REMINDER = 'oneShotReminder'
    BACKGROUND_SYNC = 'backgroundSync'


@dataclass
class ScheduledJob:
    """
    One registration with the timer service.

    Attributes:
        kind: Kind of job
        key: Unique registration key
        handler: Callable run when the job fires
        interval: Seconds between runs for recurring jobs, None for one-shot
        firstDelay: Seconds before the first run
        createdAt: When the job was registered
    """

    kind: JobKind
    key: str
    handler: Callable[[], Any]
    interval: float | None = None
    firstDelay: float = 0.0
    createdAt: datetime = field(default_factory=datetime.now)

    @property
    def isRecurring(self) -> bool:
        return self.interval is not None

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            'kind': self.kind.value,
            'key': self.key,
            'interval': self.interval,
            'firstDelay': self.firstDelay,
            'createdAt': self.createdAt.isoformat(),
        }
