################################################################################
# File Name: alarms.py
# Purpose/Description: Alarm and reminder schedulers backed by stored tasks
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
Alarm and reminder schedulers.

Both read future fire times from the database and register one-shot jobs
with the timer service. Each scheduleAll() call first cancels the jobs the
scheduler registered before, so calling it repeatedly leaves exactly one
registration per pending alarm or reminder.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from storage.database import AppDatabase

from .timer_service import TimerService
from .types import ALARM_KEY_PREFIX, REMINDER_KEY_PREFIX, JobKind, ScheduledJob

logger = logging.getLogger(__name__)

# Called with the task or alarm id when a job fires
FireCallback = Callable[[int], Any]


def _logFired(kind: str) -> FireCallback:
    def callback(itemId: int) -> None:
        logger.info(f"{kind} fired | id={itemId}")
    return callback


class _StoredTimeScheduler:
    """Registers one-shot jobs for fire times read from the database."""

    keyPrefix = ''
    label = ''

    def __init__(
        self,
        database: AppDatabase,
        timers: TimerService,
        onFire: FireCallback | None = None
    ):
        self._database = database
        self._timers = timers
        self._onFire = onFire or _logFired(self.label)

    def _fetch(self, now: datetime) -> list[tuple[int, datetime]]:
        raise NotImplementedError

    def scheduleAll(self, now: datetime | None = None) -> int:
        """
        Replace all registrations with ones for currently pending times.

        Args:
            now: Reference time (default: current time)

        Returns:
            Number of jobs registered
        """
        now = now or datetime.now()
        self._timers.cancelPrefix(self.keyPrefix)

        pending = self._fetch(now)
        for itemId, fireAt in pending:
            self._timers.register(ScheduledJob(
                kind=JobKind.ONE_SHOT_REMINDER,
                key=f"{self.keyPrefix}{itemId}",
                handler=lambda itemId=itemId: self._onFire(itemId),
                firstDelay=(fireAt - now).total_seconds(),
            ))

        logger.info(f"{self.label}s scheduled | count={len(pending)}")
        return len(pending)


class ReminderScheduler(_StoredTimeScheduler):
    """Schedules task reminders."""

    keyPrefix = REMINDER_KEY_PREFIX
    label = 'Reminder'

    def _fetch(self, now: datetime) -> list[tuple[int, datetime]]:
        return self._database.getPendingReminders(now)


class AlarmScheduler(_StoredTimeScheduler):
    """Schedules additional task alarms."""

    keyPrefix = ALARM_KEY_PREFIX
    label = 'Alarm'

    def _fetch(self, now: datetime) -> list[tuple[int, datetime]]:
        return self._database.getPendingAlarms(now)
