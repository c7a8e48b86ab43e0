################################################################################
# File Name: orchestrator.py
# Purpose/Description: One-time application startup sequence
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial implementation
# 2026-10-20    | M. Cornelison | Recovery inspector reports through the shared reporter
# ================================================================================
################################################################################

"""
Startup orchestrator for the Tasklight application.

Brings the application from "just launched" to "ready" exactly once per
process:

1. Install the uncaught exception handler
2. Bind the environment into the process context
3. Read the recorded and installed versions
4. Restore a lost database from backup
5. Run versioned migrations if the version changed, then record it
6. Run the normalization passes
7. Start the background worker (widget alarm, open storage, cleanup,
   recompute alarms)
8. Fill in preference defaults
9. Clear a stale sync-in-progress flag
10. Schedule the periodic sync and backup services
11. Run the task killer advisory scan (non-OEM builds)
12. Set the startup guard

Every step is isolated: a failure is reported to the ErrorReporter under
the step's tag and the sequence continues. The background worker runs on
a daemon thread and is not awaited.

Usage:
    from startup.orchestrator import createStartupOrchestratorFromConfig

    orchestrator = createStartupOrchestratorFromConfig(config)
    orchestrator.run(environment)
    report = orchestrator.getReport()
"""

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from backup.backup_manager import BackupManager
from backup.importer import BackupImporter
from common.analytics import AnalyticsReporter
from common.error_handler import ErrorReporter
from common.settings import StartupSettings
from preferences.store import PreferenceStore, VersionStore
from recovery.inspector import RESTORE_TAG, RecoveryInspector
from scheduling.alarms import AlarmScheduler, ReminderScheduler
from scheduling.scheduler import BackgroundScheduler
from scheduling.sync import SyncService
from scheduling.timer_service import TimerService
from scheduling.types import BACKUP_KEY, SYNC_KEY, WIDGET_REFRESH_KEY, JobKind
from storage.database import AppDatabase
from upgrade.migrations import buildDefaultUpgradeRunner
from upgrade.runner import UpgradeRunner

from .advisory import TaskKillerAdvisor
from .fault_handler import installFaultHandler
from .notices import NoticePresenter
from .types import (
    PROCESS_CONTEXT,
    PROCESS_GUARD,
    BackgroundStep,
    ContextHolder,
    StartupGuard,
    StartupReport,
    StartupStep,
    VersionRecord,
)

logger = logging.getLogger(__name__)

# ================================================================================
# Constants
# ================================================================================

DEFAULT_WIDGET_REFRESH_SECONDS = 30 * 60
DEFAULT_SYNC_INTERVAL_SECONDS = 60 * 60
DEFAULT_BACKUP_INTERVAL_SECONDS = 24 * 60 * 60

# Error reporter tags per step
TAG_FAULT_HANDLER = 'startup-fault-handler'
TAG_BIND_CONTEXT = 'startup-bind-context'
TAG_VERSION_READ = 'startup-version-read'
TAG_PACKAGE_READ = 'startup-package-read'
TAG_DATABASE_RESTORE = RESTORE_TAG
TAG_MIGRATION = 'startup-migration'
TAG_NORMALIZATION = 'startup-normalization'
TAG_BACKGROUND_WORKER = 'startup-background-worker'
TAG_PREFERENCE_DEFAULTS = 'startup-preference-defaults'
TAG_SYNC_FLAG = 'startup-sync-flag'
TAG_SCHEDULE_SYNC = 'startup-schedule-sync'
TAG_SCHEDULE_BACKUP = 'startup-schedule-backup'
TAG_ADVISORY_SCAN = 'startup-advisory-scan'
TAG_WIDGET_ALARM = 'startup-widget-alarm'
TAG_STORAGE_OPEN = 'startup-storage-open'
TAG_STORAGE_CLEANUP = 'startup-storage-cleanup'
TAG_SCHEDULE_ALARMS = 'startup-schedule-alarms'


def _logWidgetRefresh() -> None:
    logger.debug("Widget refresh")


class StartupOrchestrator:
    """
    Runs the application startup sequence once per guard.

    run() holds the guard's lock for the whole synchronous sequence, so a
    second caller blocks until the first finishes, then sees the guard set
    and returns False.

    Example:
        orchestrator = StartupOrchestrator(
            versionStore=versionStore, recoveryInspector=inspector,
            upgradeRunner=runner, scheduler=scheduler, database=database,
            preferences=preferences, syncService=syncService,
            reporter=ErrorReporter()
        )
        orchestrator.run(environment)
    """

    def __init__(
        self,
        versionStore: VersionStore,
        recoveryInspector: RecoveryInspector,
        upgradeRunner: UpgradeRunner,
        scheduler: BackgroundScheduler,
        database: Any,
        preferences: PreferenceStore,
        syncService: SyncService,
        reporter: ErrorReporter,
        advisor: TaskKillerAdvisor | None = None,
        backupManager: BackupManager | None = None,
        widgetRefresh: Callable[[], Any] | None = None,
        widgetRefreshSeconds: float = DEFAULT_WIDGET_REFRESH_SECONDS,
        syncIntervalSeconds: float | None = DEFAULT_SYNC_INTERVAL_SECONDS,
        backupIntervalSeconds: float | None = DEFAULT_BACKUP_INTERVAL_SECONDS,
        guard: StartupGuard | None = None,
        contextHolder: ContextHolder | None = None,
        faultHandlerInstaller: Callable[[ErrorReporter], Any] = installFaultHandler
    ):
        """
        Initialize the orchestrator.

        Args:
            versionStore: Last recorded version
            recoveryInspector: Lost-database recovery
            upgradeRunner: Versioned migration and normalization
            scheduler: Background job scheduler
            database: Storage engine (openForWriting, cleanup)
            preferences: Preference store (setPreferenceDefaults)
            syncService: Sync service (stopOngoing, synchronize)
            reporter: Receives every isolated step failure
            advisor: Task killer advisor, None to skip the advisory scan
            backupManager: Snapshot writer, None to skip backup scheduling
            widgetRefresh: Widget refresh handler
            widgetRefreshSeconds: Widget refresh interval
            syncIntervalSeconds: Sync interval, None to skip sync scheduling
            backupIntervalSeconds: Backup interval, None to skip backup scheduling
            guard: Startup guard (default: process-wide guard)
            contextHolder: Context holder (default: process-wide holder)
            faultHandlerInstaller: Installs the uncaught exception handler
        """
        self._versionStore = versionStore
        self._recoveryInspector = recoveryInspector
        self._upgradeRunner = upgradeRunner
        self._scheduler = scheduler
        self._database = database
        self._preferences = preferences
        self._syncService = syncService
        self._reporter = reporter
        self._advisor = advisor
        self._backupManager = backupManager
        self._widgetRefresh = widgetRefresh or _logWidgetRefresh
        self._widgetRefreshSeconds = widgetRefreshSeconds
        self._syncIntervalSeconds = syncIntervalSeconds
        self._backupIntervalSeconds = backupIntervalSeconds
        self._guard = guard if guard is not None else PROCESS_GUARD
        self._contextHolder = contextHolder if contextHolder is not None else PROCESS_CONTEXT
        self._faultHandlerInstaller = faultHandlerInstaller

        self._report: StartupReport | None = None
        self._backgroundWorker: threading.Thread | None = None

        logger.debug("StartupOrchestrator initialized")

    # ================================================================================
    # Properties
    # ================================================================================

    @property
    def scheduler(self) -> BackgroundScheduler:
        return self._scheduler

    @property
    def reporter(self) -> ErrorReporter:
        return self._reporter

    @property
    def backgroundWorker(self) -> threading.Thread | None:
        return self._backgroundWorker

    def getReport(self) -> StartupReport | None:
        """Report of the run this orchestrator performed, None before it ran."""
        return self._report

    def hasStartedUp(self) -> bool:
        return self._guard.isSet()

    # ================================================================================
    # Startup
    # ================================================================================

    def run(self, environment: Any) -> bool:
        """
        Run the startup sequence unless it already ran.

        Args:
            environment: Application environment

        Returns:
            True if this call performed startup, False if it already happened
        """
        with self._guard.lock:
            if self._guard.isSet():
                logger.debug("Startup already performed, skipping")
                return False

            logger.info("Starting application startup...")
            startTime = time.time()
            report = StartupReport()
            self._report = report

            self._runStep(
                StartupStep.FAULT_HANDLER, TAG_FAULT_HANDLER,
                lambda: self._faultHandlerInstaller(self._reporter)
            )
            self._runStep(
                StartupStep.BIND_CONTEXT, TAG_BIND_CONTEXT,
                lambda: self._contextHolder.bind(environment)
            )

            versions = self._readVersions(environment)
            report.versions = versions
            logger.info(
                f"Startup versions | recorded={versions.lastRecordedVersion} "
                f"installed={versions.currentInstalledVersion}"
            )

            restored = self._runStep(
                StartupStep.RECOVERY, TAG_DATABASE_RESTORE,
                lambda: self._recoveryInspector.maybeRestore(environment)
            )
            if restored is not None:
                report.restoredBackup = str(restored.path)

            if versions.needsMigration:
                self._runStep(
                    StartupStep.VERSIONED_MIGRATION, TAG_MIGRATION,
                    lambda: self._migrate(versions)
                )

            self._runStep(
                StartupStep.SECONDARY_NORMALIZATION, TAG_NORMALIZATION,
                lambda: self._upgradeRunner.applySecondaryNormalization(environment)
            )
            self._runStep(
                StartupStep.BACKGROUND_WORKER, TAG_BACKGROUND_WORKER,
                self._startBackgroundWorker
            )
            self._runStep(
                StartupStep.PREFERENCE_DEFAULTS, TAG_PREFERENCE_DEFAULTS,
                self._preferences.setPreferenceDefaults
            )
            self._runStep(
                StartupStep.CLEAR_SYNC_FLAG, TAG_SYNC_FLAG,
                self._syncService.stopOngoing
            )
            self._runStep(StartupStep.SCHEDULE_SYNC, TAG_SCHEDULE_SYNC, self._scheduleSync)
            self._runStep(StartupStep.SCHEDULE_BACKUP, TAG_SCHEDULE_BACKUP, self._scheduleBackup)

            if self._advisor is not None and not getattr(environment, 'isOem', False):
                self._runStep(
                    StartupStep.ADVISORY_SCAN, TAG_ADVISORY_SCAN,
                    lambda: self._advisor.showTaskKillerHelp(environment)
                )

            self._guard.set()

            report.durationSeconds = time.time() - startTime
            logger.info(
                f"Application startup complete | "
                f"startup_time={report.durationSeconds:.2f}s "
                f"failed={sorted(report.failedSteps)}"
            )
            return True

    def _runStep(
        self,
        step: StartupStep | BackgroundStep,
        tag: str,
        action: Callable[[], Any],
        default: Any = None
    ) -> Any:
        """Run one isolated step, reporting a failure under tag."""
        try:
            result = action()
        except Exception as e:
            self._reporter.reportError(tag, e)
            if self._report is not None:
                self._report.markFailed(step, e)
            return default

        if self._report is not None:
            self._report.markCompleted(step)
        return result

    def _readVersions(self, environment: Any) -> VersionRecord:
        lastRecorded = self._runStep(
            StartupStep.READ_RECORDED_VERSION, TAG_VERSION_READ,
            self._versionStore.getCurrentVersion, default=0
        )
        installed = self._runStep(
            StartupStep.READ_INSTALLED_VERSION, TAG_PACKAGE_READ,
            environment.getPackageVersionCode, default=0
        )
        return VersionRecord(
            lastRecordedVersion=lastRecorded,
            currentInstalledVersion=installed,
        )

    def _migrate(self, versions: VersionRecord) -> None:
        self._upgradeRunner.applyVersionedMigration(
            versions.lastRecordedVersion, versions.currentInstalledVersion
        )
        self._versionStore.setCurrentVersion(versions.currentInstalledVersion)
        logger.info(f"Application version recorded | version={versions.currentInstalledVersion}")

    def _scheduleSync(self) -> None:
        if self._syncIntervalSeconds is None:
            logger.debug("Background sync disabled")
            return
        self._scheduler.scheduleRecurring(
            JobKind.BACKGROUND_SYNC, self._syncIntervalSeconds,
            self._syncService.synchronize, name=SYNC_KEY
        )

    def _scheduleBackup(self) -> None:
        if self._backupManager is None or self._backupIntervalSeconds is None:
            logger.debug("Backup snapshots disabled")
            return
        self._scheduler.scheduleRecurring(
            JobKind.RECURRING_ALARM, self._backupIntervalSeconds,
            self._backupManager.runScheduledBackup, name=BACKUP_KEY
        )

    # ================================================================================
    # Background Worker
    # ================================================================================

    def _startBackgroundWorker(self) -> None:
        worker = threading.Thread(
            target=self._runBackgroundWork,
            name='startup-background',
            daemon=True
        )
        self._backgroundWorker = worker
        worker.start()
        logger.debug("Background startup worker started")

    def _runBackgroundWork(self) -> None:
        """Background half of startup. Never raises."""
        self._runStep(
            BackgroundStep.WIDGET_ALARM, TAG_WIDGET_ALARM,
            lambda: self._scheduler.scheduleRecurring(
                JobKind.RECURRING_ALARM, self._widgetRefreshSeconds,
                self._widgetRefresh, name=WIDGET_REFRESH_KEY, firstDelay=0
            )
        )
        self._runStep(BackgroundStep.STORAGE_OPEN, TAG_STORAGE_OPEN, self._database.openForWriting)
        self._runStep(BackgroundStep.STORAGE_CLEANUP, TAG_STORAGE_CLEANUP, self._database.cleanup)
        self._runStep(
            BackgroundStep.SCHEDULE_ALARMS, TAG_SCHEDULE_ALARMS,
            self._scheduler.scheduleAllAlarms
        )
        logger.info("Background startup work finished")

    def waitForBackgroundWork(self, timeout: float | None = None) -> bool:
        """
        Wait for the background worker to finish.

        Args:
            timeout: Seconds to wait, None to wait indefinitely

        Returns:
            True if the worker finished (or never started)
        """
        worker = self._backgroundWorker
        if worker is None:
            return True
        worker.join(timeout)
        return not worker.is_alive()

    def shutdown(self) -> None:
        """Cancel every scheduled job."""
        self._scheduler.shutdown()


# ================================================================================
# Factory
# ================================================================================

def createStartupOrchestratorFromConfig(
    config: dict[str, Any],
    syncCallable: Callable[[], Any] | None = None,
    reporter: ErrorReporter | None = None,
    guard: StartupGuard | None = None,
    contextHolder: ContextHolder | None = None
) -> StartupOrchestrator:
    """
    Create a StartupOrchestrator with the default collaborators.

    Args:
        config: Validated configuration dictionary
        syncCallable: Remote sync routine run by the sync service
        reporter: Error reporter (default: new ErrorReporter)
        guard: Startup guard (default: process-wide guard)
        contextHolder: Context holder (default: process-wide holder)

    Returns:
        Configured StartupOrchestrator

    Raises:
        ConfigurationError: If the configuration has invalid values

    Example:
        config = loadConfigWithSecrets('startup_config.json')
        orchestrator = createStartupOrchestratorFromConfig(validateConfig(config))
        orchestrator.run(ApplicationEnvironment.fromSettings(settings))
    """
    settings = StartupSettings.fromDict(config)
    reporter = reporter or ErrorReporter()

    dataDir = Path(settings.paths.dataDir)
    backupDir = settings.paths.resolveBackupDir()
    databasePath = dataDir / settings.database.name

    preferences = PreferenceStore(settings.paths.resolvePreferencesFile())
    versionStore = VersionStore(preferences)
    database = AppDatabase(databasePath, walMode=settings.database.walMode)
    analytics = AnalyticsReporter()

    recoveryInspector = RecoveryInspector(
        versionStore=versionStore,
        database=database,
        importer=BackupImporter(settings.database.name),
        analytics=analytics,
        backupDir=backupDir,
        storageStableVersion=settings.recovery.storageStableVersion,
        reporter=reporter,
    )

    timers = TimerService()
    scheduler = BackgroundScheduler(
        timers, reporter,
        [ReminderScheduler(database, timers), AlarmScheduler(database, timers)]
    )

    backupManager = None
    if settings.backup.enabled:
        backupManager = BackupManager(
            backupDir, databasePath,
            maxBackups=settings.backup.maxBackups,
            compress=settings.backup.compress,
        )

    advisor = None
    if settings.advisory.enabled:
        advisor = TaskKillerAdvisor(
            preferences, NoticePresenter(),
            permission=settings.advisory.taskKillerPermission,
            systemPrefix=settings.advisory.systemPackagePrefix,
        )

    return StartupOrchestrator(
        versionStore=versionStore,
        recoveryInspector=recoveryInspector,
        upgradeRunner=buildDefaultUpgradeRunner(database, preferences),
        scheduler=scheduler,
        database=database,
        preferences=preferences,
        syncService=SyncService(preferences, syncCallable),
        reporter=reporter,
        advisor=advisor,
        backupManager=backupManager,
        widgetRefreshSeconds=settings.widget.refreshIntervalMinutes * 60,
        syncIntervalSeconds=(
            settings.sync.intervalMinutes * 60 if settings.sync.enabled else None
        ),
        backupIntervalSeconds=(
            settings.backup.intervalHours * 3600 if settings.backup.enabled else None
        ),
        guard=guard,
        contextHolder=contextHolder,
    )
