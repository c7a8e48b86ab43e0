################################################################################
# File Name: migrations.py
# Purpose/Description: Built-in migration steps and normalization passes
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial implementation
# 2026-10-20    | M. Cornelison | Unreadable quiet hours disable the setting
# ================================================================================
################################################################################
"""
Built-in upgrade steps.

Versioned steps:
    110  renameReminderPreference  'defaultReminderMode' -> 'defaultReminders'
    120  addTaskNotesColumn        tasks.notes on databases created before it
    130  convertQuietHours         quiet hours stored as "HH:MM" -> hour int

Normalization passes (every startup):
    removeLegacySyncFlag   drop the obsolete sync-in-progress key
    ensureBackupDirectory  create the backup directory

Steps that touch the database do nothing while the database file does not
exist; the schema created by openForWriting() already has every column.
"""

import logging
from pathlib import Path
from typing import Any

from preferences.defaults import P_LEGACY_SYNC_ONGOING
from preferences.store import PreferenceStore
from storage.database import AppDatabase

from .runner import UpgradeRunner
from .types import MigrationStep

logger = logging.getLogger(__name__)

LEGACY_REMINDER_KEY = 'defaultReminderMode'
QUIET_HOURS_KEYS = ('quietHoursStart', 'quietHoursEnd')
QUIET_HOURS_DISABLED = -1


def _renameReminderPreference(preferences: PreferenceStore) -> None:
    if not preferences.contains(LEGACY_REMINDER_KEY):
        return
    value = preferences.get(LEGACY_REMINDER_KEY)
    if not preferences.contains('defaultReminders'):
        preferences.set('defaultReminders', value)
    preferences.remove(LEGACY_REMINDER_KEY)


def _addTaskNotesColumn(database: AppDatabase) -> None:
    if not database.exists() or 'tasks' not in database.getTableNames():
        return
    database.addColumnIfMissing('tasks', 'notes', 'TEXT')


def _parseHour(value: Any) -> int:
    """Hour 0-23 from an int or "HH:MM" string, QUIET_HOURS_DISABLED otherwise."""
    if isinstance(value, bool):
        return QUIET_HOURS_DISABLED
    if isinstance(value, int):
        hour = value
    else:
        text = str(value).strip()
        if not text:
            return QUIET_HOURS_DISABLED
        try:
            hour = int(text.split(':', 1)[0])
        except ValueError:
            return QUIET_HOURS_DISABLED
    return hour if 0 <= hour <= 23 else QUIET_HOURS_DISABLED


def _convertQuietHours(preferences: PreferenceStore) -> None:
    for key in QUIET_HOURS_KEYS:
        if not preferences.contains(key):
            continue
        value = preferences.get(key)
        hour = _parseHour(value)
        if hour == QUIET_HOURS_DISABLED and value not in (QUIET_HOURS_DISABLED, '', None):
            logger.warning(f"Unreadable quiet hours value, disabling | key={key} value={value!r}")
        preferences.setInt(key, hour)


def buildDefaultUpgradeRunner(
    database: AppDatabase,
    preferences: PreferenceStore
) -> UpgradeRunner:
    """
    Create an UpgradeRunner with the built-in steps and passes.

    Args:
        database: Storage engine migrated by schema steps
        preferences: Preference store migrated by preference steps

    Returns:
        Configured UpgradeRunner
    """
    runner = UpgradeRunner()

    runner.registerStep(MigrationStep(
        110, 'renameReminderPreference',
        lambda old, new: _renameReminderPreference(preferences)
    ))
    runner.registerStep(MigrationStep(
        120, 'addTaskNotesColumn',
        lambda old, new: _addTaskNotesColumn(database)
    ))
    runner.registerStep(MigrationStep(
        130, 'convertQuietHours',
        lambda old, new: _convertQuietHours(preferences)
    ))

    runner.registerNormalization(
        'removeLegacySyncFlag',
        lambda environment: preferences.remove(P_LEGACY_SYNC_ONGOING)
    )
    runner.registerNormalization(
        'ensureBackupDirectory',
        lambda environment: Path(environment.backupDir).mkdir(parents=True, exist_ok=True)
    )

    logger.debug(f"Upgrade runner built | steps={len(runner.getSteps())}")
    return runner
