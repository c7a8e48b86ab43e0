################################################################################
# File Name: settings.py
# Purpose/Description: Typed startup settings parsed from validated config
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
Typed settings for the startup orchestrator.

The JSON configuration is first run through ConfigValidator (defaults and
required keys), then parsed into these pydantic models so every component
receives typed, range-checked values instead of raw dict lookups.

Usage:
    from common.settings import StartupSettings

    settings = StartupSettings.fromDict(validatedConfig)
    print(settings.backup.intervalHours)
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .error_handler import ConfigurationError


class _SettingsModel(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)


class ApplicationSettings(_SettingsModel):
    """Identity of the application being started."""

    name: str = 'Tasklight'
    packageName: str = 'tasklight'
    # Overrides the version code derived from installed package metadata
    versionCode: int | None = Field(default=None, ge=0)
    oem: bool = False


class PathSettings(_SettingsModel):
    """File system locations used during startup."""

    dataDir: str = './data'
    backupDir: str | None = None
    preferencesFile: str | None = None
    applicationsManifest: str | None = None

    def resolveBackupDir(self) -> Path:
        """Backup directory, defaulting to <dataDir>/backups."""
        if self.backupDir:
            return Path(self.backupDir)
        return Path(self.dataDir) / 'backups'

    def resolvePreferencesFile(self) -> Path:
        """Preference file, defaulting to <dataDir>/preferences.json."""
        if self.preferencesFile:
            return Path(self.preferencesFile)
        return Path(self.dataDir) / 'preferences.json'


class DatabaseSettings(_SettingsModel):
    name: str = 'tasklight.db'
    walMode: bool = True


class BackupSettings(_SettingsModel):
    enabled: bool = True
    intervalHours: float = Field(default=24.0, gt=0)
    maxBackups: int = Field(default=7, ge=1)
    compress: bool = True


class SyncSettings(_SettingsModel):
    enabled: bool = True
    intervalMinutes: float = Field(default=60.0, gt=0)


class WidgetSettings(_SettingsModel):
    refreshIntervalMinutes: float = Field(default=30.0, gt=0)


class RecoverySettings(_SettingsModel):
    # Recorded version above which a missing database means data loss
    storageStableVersion: int = Field(default=135, ge=0)


class AdvisorySettings(_SettingsModel):
    enabled: bool = True
    taskKillerPermission: str = 'RESTART_PACKAGES'
    systemPackagePrefix: str = 'com.android'


class StartupSettings(_SettingsModel):
    """
    Complete typed view of the startup configuration.

    Attributes:
        application: Application identity and version override
        paths: Data, backup, preference and manifest locations
        database: Storage engine settings
        backup: Periodic backup snapshot settings
        sync: Periodic remote sync settings
        widget: Widget refresh alarm settings
        recovery: Lost-database recovery settings
        advisory: Task killer advisory scan settings
    """

    application: ApplicationSettings = Field(default_factory=ApplicationSettings)
    paths: PathSettings = Field(default_factory=PathSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    backup: BackupSettings = Field(default_factory=BackupSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    widget: WidgetSettings = Field(default_factory=WidgetSettings)
    recovery: RecoverySettings = Field(default_factory=RecoverySettings)
    advisory: AdvisorySettings = Field(default_factory=AdvisorySettings)

    @classmethod
    def fromDict(cls, config: dict[str, Any]) -> 'StartupSettings':
        """
        Parse settings from a configuration dictionary.

        Args:
            config: Configuration dictionary (usually already validated)

        Returns:
            StartupSettings instance

        Raises:
            ConfigurationError: If a value has the wrong type or range
        """
        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid startup configuration: {e.error_count()} error(s)",
                details={'errors': [
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ]}
            ) from e
