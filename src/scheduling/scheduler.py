################################################################################
# File Name: scheduler.py
# Purpose/Description: Background scheduler facade over the timer service
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
Background scheduler.

Registers recurring and one-shot jobs with the timer service and
recomputes all reminder and alarm registrations from stored data.

Usage:
    from scheduling.scheduler import BackgroundScheduler

    scheduler = BackgroundScheduler(timers, reporter, [reminders, alarms])
    scheduler.scheduleRecurring(JobKind.RECURRING_ALARM, 1800, refreshWidget)
    scheduler.scheduleAllAlarms()
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from common.error_handler import ErrorReporter

from .timer_service import TimerService
from .types import JobKind, ScheduledJob

logger = logging.getLogger(__name__)


class BackgroundScheduler:
    """
    Facade over the timer service used by startup.

    Re-scheduling a job name replaces the pending registration.
    """

    def __init__(
        self,
        timers: TimerService,
        reporter: ErrorReporter,
        alarmSchedulers: Iterable[Any] = ()
    ):
        """
        Initialize the scheduler.

        Args:
            timers: Timer service jobs are registered with
            reporter: Error reporter for recomputation failures
            alarmSchedulers: Schedulers with scheduleAll() and a label
        """
        self._timers = timers
        self._reporter = reporter
        self._alarmSchedulers = list(alarmSchedulers)

    def scheduleRecurring(
        self,
        kind: JobKind,
        interval: float,
        handler: Callable[[], Any],
        name: str | None = None,
        firstDelay: float | None = None
    ) -> ScheduledJob:
        """
        Register a recurring job.

        Args:
            kind: Kind of job
            interval: Seconds between runs (must be positive)
            handler: Callable run on each interval
            name: Registration key (default: the kind's value)
            firstDelay: Seconds before the first run (default: interval)

        Returns:
            The registered job

        Raises:
            ValueError: If interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive: {interval}")

        job = ScheduledJob(
            kind=kind,
            key=name or kind.value,
            handler=handler,
            interval=float(interval),
            firstDelay=interval if firstDelay is None else firstDelay,
        )
        self._timers.register(job)
        logger.info(f"Recurring job scheduled | key={job.key} interval={interval}s")
        return job

    def scheduleOnce(
        self,
        kind: JobKind,
        delay: float,
        handler: Callable[[], Any],
        name: str
    ) -> ScheduledJob:
        """Register a one-shot job under name after delay seconds."""
        job = ScheduledJob(kind=kind, key=name, handler=handler, firstDelay=delay)
        self._timers.register(job)
        logger.debug(f"One-shot job scheduled | key={name} delay={delay}s")
        return job

    def cancel(self, name: str) -> bool:
        return self._timers.cancel(name)

    def getPendingJobs(self) -> list[str]:
        return self._timers.pendingKeys()

    def scheduleAllAlarms(self) -> None:
        """
        Recompute reminder and alarm registrations.

        Each scheduler runs on its own; a failure is reported under the
        scheduler's tag and the next scheduler still runs.
        """
        for scheduler in self._alarmSchedulers:
            tag = f"{scheduler.label.lower()}-startup"
            try:
                scheduler.scheduleAll()
            except Exception as e:
                self._reporter.reportError(tag, e)

    def shutdown(self) -> None:
        """Cancel all pending jobs."""
        self._timers.cancelAll()
