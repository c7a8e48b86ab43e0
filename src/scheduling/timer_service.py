################################################################################
# File Name: timer_service.py
# Purpose/Description: Keyed timer registry for scheduled jobs
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
Timer service.

Runs ScheduledJob registrations on daemon threading.Timer instances. Each
job key has at most one pending timer: registering a key again cancels the
pending timer first. Recurring jobs re-arm themselves after every run,
whether or not the handler raised.

Usage:
    from scheduling.timer_service import TimerService

    timers = TimerService()
    timers.register(ScheduledJob(JobKind.BACKGROUND_SYNC, 'sync', sync, interval=3600))
    ...
    timers.cancelAll()
"""

import logging
import threading

from .exceptions import SchedulerShutdownError
from .types import ScheduledJob

logger = logging.getLogger(__name__)


class TimerService:
    """
    Keyed registry of pending timers.

    Thread-safe. Handlers run on the timer threads; an exception raised by a
    handler is logged and does not cancel a recurring job.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._timers: dict[str, threading.Timer] = {}
        self._jobs: dict[str, ScheduledJob] = {}
        self._shutdown = False

    def register(self, job: ScheduledJob) -> None:
        """
        Register a job, replacing any pending job with the same key.

        Args:
            job: Job to register

        Raises:
            SchedulerShutdownError: If the service has been shut down
        """
        with self._lock:
            if self._shutdown:
                raise SchedulerShutdownError(
                    "Timer service is shut down",
                    details={'key': job.key}
                )
            replaced = self._cancelLocked(job.key)
            self._jobs[job.key] = job
            self._armLocked(job, job.firstDelay)

        logger.debug(
            f"Job registered | key={job.key} kind={job.kind.value} "
            f"interval={job.interval} replaced={replaced}"
        )

    def cancel(self, key: str) -> bool:
        """
        Cancel the pending job with the given key.

        Returns:
            True if a job was pending
        """
        with self._lock:
            return self._cancelLocked(key)

    def cancelPrefix(self, prefix: str) -> int:
        """
        Cancel every pending job whose key starts with prefix.

        Returns:
            Number of jobs cancelled
        """
        with self._lock:
            keys = [key for key in self._jobs if key.startswith(prefix)]
            for key in keys:
                self._cancelLocked(key)

        if keys:
            logger.debug(f"Jobs cancelled | prefix={prefix} count={len(keys)}")
        return len(keys)

    def cancelAll(self) -> None:
        """Cancel every pending job and refuse new registrations."""
        with self._lock:
            self._shutdown = True
            for key in list(self._jobs):
                self._cancelLocked(key)
        logger.info("Timer service shut down")

    def pendingKeys(self) -> list[str]:
        """Keys of all pending jobs, sorted."""
        with self._lock:
            return sorted(self._jobs)

    def getJob(self, key: str) -> ScheduledJob | None:
        with self._lock:
            return self._jobs.get(key)

    def isShutdown(self) -> bool:
        return self._shutdown

    # ================================================================================
    # Internals (caller holds self._lock)
    # ================================================================================

    def _cancelLocked(self, key: str) -> bool:
        timer = self._timers.pop(key, None)
        job = self._jobs.pop(key, None)
        if timer is not None:
            timer.cancel()
        return job is not None

    def _armLocked(self, job: ScheduledJob, delay: float) -> None:
        timer = threading.Timer(max(delay, 0.0), self._fire, args=(job,))
        timer.daemon = True
        timer.name = f"timer-{job.key}"
        self._timers[job.key] = timer
        timer.start()

    def _fire(self, job: ScheduledJob) -> None:
        with self._lock:
            # A replaced or cancelled job must not run
            if self._jobs.get(job.key) is not job:
                return
            if not job.isRecurring:
                self._jobs.pop(job.key, None)
                self._timers.pop(job.key, None)

        try:
            job.handler()
        except Exception as e:
            logger.error(f"Scheduled job failed | key={job.key} | error={e}", exc_info=True)

        if job.isRecurring:
            with self._lock:
                if not self._shutdown and self._jobs.get(job.key) is job:
                    self._armLocked(job, job.interval)
