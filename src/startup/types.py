################################################################################
# File Name: types.py
# Purpose/Description: Startup guard, version record, context and report types
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
Startup types.

- StartupGuard: one-time latch plus the lock that serializes startup
- ContextHolder: single-assignment holder for the bound environment
- VersionRecord: recorded vs. installed version for one run
- StartupReport: which startup steps completed and which failed

PROCESS_GUARD and PROCESS_CONTEXT are the process-wide instances used when
the orchestrator is not handed its own.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .exceptions import ContextAlreadyBoundError

# Version code meaning "unknown installed version, skip migration"
UNKNOWN_VERSION = 0


class StartupStep(Enum):
    """Startup steps in execution order."""

    FAULT_HANDLER = 'faultHandler'
    BIND_CONTEXT = 'bindContext'
    READ_RECORDED_VERSION = 'readRecordedVersion'
    READ_INSTALLED_VERSION = 'readInstalledVersion'
    RECOVERY = 'recovery'
    VERSIONED_MIGRATION = 'versionedMigration'
    SECONDARY_NORMALIZATION = 'secondaryNormalization'
    BACKGROUND_WORKER = 'backgroundWorker'
    PREFERENCE_DEFAULTS = 'preferenceDefaults'
    CLEAR_SYNC_FLAG = 'clearSyncFlag'
    SCHEDULE_SYNC = 'scheduleSync'
    SCHEDULE_BACKUP = 'scheduleBackup'
    ADVISORY_SCAN = 'advisoryScan'


class BackgroundStep(Enum):
    """Sub-steps of the background worker in execution order."""

    WIDGET_ALARM = 'widgetAlarm'
    STORAGE_OPEN = 'storageOpen'
    STORAGE_CLEANUP = 'storageCleanup'
    SCHEDULE_ALARMS = 'scheduleAlarms'


class StartupGuard:
    """
    One-time startup latch.

    Initially unset, set once, never cleared. The guard's lock is held for
    the whole startup run, so a concurrent caller waits for the first run
    to finish and then sees the guard set.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self._isSet = False

    def isSet(self) -> bool:
        return self._isSet

    def set(self) -> None:
        self._isSet = True


class ContextHolder:
    """
    Single-assignment holder for the application environment.

    Binding the same environment again is a no-op; binding a different one
    raises ContextAlreadyBoundError.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._environment: Any = None

    def bind(self, environment: Any) -> None:
        with self._lock:
            if self._environment is None:
                self._environment = environment
            elif self._environment is not environment:
                raise ContextAlreadyBoundError("Application context is already bound")

    def get(self) -> Any:
        """Get the bound environment, None before startup."""
        return self._environment

    def isBound(self) -> bool:
        return self._environment is not None


@dataclass(frozen=True)
class VersionRecord:
    """
    Recorded and installed application versions for one startup.

    Attributes:
        lastRecordedVersion: Version persisted by the previous run (0 if none)
        currentInstalledVersion: Version read from package metadata (0 if unknown)
    """

    lastRecordedVersion: int
    currentInstalledVersion: int

    @property
    def isKnown(self) -> bool:
        return self.currentInstalledVersion > UNKNOWN_VERSION

    @property
    def hasChanged(self) -> bool:
        return self.lastRecordedVersion != self.currentInstalledVersion

    @property
    def needsMigration(self) -> bool:
        return self.isKnown and self.hasChanged


@dataclass
class StartupReport:
    """
    Outcome of one startup run.

    Attributes:
        startedAt: When the run began
        versions: Version record read in the run (None until read)
        completedSteps: Steps that finished without error, in order
        failedSteps: Step name mapped to the error message
        backgroundCompleted: Background sub-steps that finished
        backgroundFailed: Background sub-step mapped to the error message
        restoredBackup: Path of the restored backup, if any
        durationSeconds: Synchronous run time

    The background fields are written by the worker thread after run()
    returned; read them after joining the worker.
    """

    startedAt: datetime = field(default_factory=datetime.now)
    versions: VersionRecord | None = None
    completedSteps: list[str] = field(default_factory=list)
    failedSteps: dict[str, str] = field(default_factory=dict)
    backgroundCompleted: list[str] = field(default_factory=list)
    backgroundFailed: dict[str, str] = field(default_factory=dict)
    restoredBackup: str | None = None
    durationSeconds: float = 0.0

    def markCompleted(self, step: StartupStep | BackgroundStep) -> None:
        if isinstance(step, BackgroundStep):
            self.backgroundCompleted.append(step.value)
        else:
            self.completedSteps.append(step.value)

    def markFailed(self, step: StartupStep | BackgroundStep, error: BaseException) -> None:
        if isinstance(step, BackgroundStep):
            self.backgroundFailed[step.value] = str(error)
        else:
            self.failedSteps[step.value] = str(error)

    @property
    def succeeded(self) -> bool:
        return not self.failedSteps

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            'startedAt': self.startedAt.isoformat(),
            'lastRecordedVersion': (
                self.versions.lastRecordedVersion if self.versions else None
            ),
            'currentInstalledVersion': (
                self.versions.currentInstalledVersion if self.versions else None
            ),
            'completedSteps': list(self.completedSteps),
            'failedSteps': dict(self.failedSteps),
            'backgroundCompleted': list(self.backgroundCompleted),
            'backgroundFailed': dict(self.backgroundFailed),
            'restoredBackup': self.restoredBackup,
            'durationSeconds': round(self.durationSeconds, 3),
        }


PROCESS_GUARD = StartupGuard()
PROCESS_CONTEXT = ContextHolder()
