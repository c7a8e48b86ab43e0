################################################################################
# File Name: environment.py
# Purpose/Description: Application environment queried during startup
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
Application environment.

The environment is everything startup asks the host about:
- the installed package version code
- where the data, database and backup files live
- whether this is a restricted (OEM) build
- which other applications are installed, for the advisory scan

Version codes are integers derived from the installed distribution's
version string: major * 10000 + minor * 100 + micro, so "1.3.5" is 10305.
A configured versionCode takes precedence over package metadata.

Usage:
    from startup.environment import ApplicationEnvironment

    environment = ApplicationEnvironment.fromSettings(settings)
    code = environment.getPackageVersionCode()
"""

import json
import logging
import re
from dataclasses import dataclass, field
from importlib import metadata
from pathlib import Path

from common.settings import StartupSettings

from .exceptions import PackageMetadataError

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r'^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?')


def versionToCode(version: str) -> int:
    """
    Convert a dotted version string to an integer version code.

    Args:
        version: Version such as '1.3.5' or '2.0rc1'

    Returns:
        Integer version code

    Raises:
        PackageMetadataError: If the string does not start with a number
    """
    match = VERSION_PATTERN.match(version or '')
    if not match:
        raise PackageMetadataError(
            f"Malformed version string: {version!r}",
            details={'version': version}
        )

    major, minor, micro = (int(part) if part else 0 for part in match.groups())
    return major * 10000 + minor * 100 + micro


@dataclass(frozen=True)
class InstalledApplication:
    """
    An application installed alongside this one.

    Attributes:
        packageName: Unique package identifier
        label: Human-readable name
        requestedPermissions: Permissions the application asks for
    """

    packageName: str
    label: str = ''
    requestedPermissions: tuple[str, ...] = field(default_factory=tuple)


class ApplicationEnvironment:
    """
    Host environment for one application process.

    Example:
        environment = ApplicationEnvironment('tasklight', dataDir='data')
        environment.getDatabasePath('tasklight.db')  # data/tasklight.db
    """

    def __init__(
        self,
        packageName: str,
        dataDir: str | Path = './data',
        backupDir: str | Path | None = None,
        isOem: bool = False,
        versionCodeOverride: int | None = None,
        applicationsManifest: str | Path | None = None
    ):
        """
        Initialize the environment.

        Args:
            packageName: Installed distribution name used for version lookup
            dataDir: Directory holding the database and preferences
            backupDir: Directory holding backup snapshots (<dataDir>/backups)
            isOem: True for restricted builds (no advisory notices)
            versionCodeOverride: Fixed version code instead of package metadata
            applicationsManifest: JSON list of installed applications
        """
        self.packageName = packageName
        self.dataDir = Path(dataDir)
        self.backupDir = Path(backupDir) if backupDir else self.dataDir / 'backups'
        self.isOem = isOem
        self._versionCodeOverride = versionCodeOverride
        self._applicationsManifest = (
            Path(applicationsManifest) if applicationsManifest else None
        )

    @classmethod
    def fromSettings(cls, settings: StartupSettings) -> 'ApplicationEnvironment':
        """Build the environment from typed startup settings."""
        return cls(
            packageName=settings.application.packageName,
            dataDir=settings.paths.dataDir,
            backupDir=settings.paths.resolveBackupDir(),
            isOem=settings.application.oem,
            versionCodeOverride=settings.application.versionCode,
            applicationsManifest=settings.paths.applicationsManifest,
        )

    def getPackageVersionCode(self) -> int:
        """
        Read the installed version code.

        Returns:
            Version code of the installed package

        Raises:
            PackageMetadataError: If the package is not installed or its
                version is malformed
        """
        if self._versionCodeOverride is not None:
            return self._versionCodeOverride

        try:
            version = metadata.version(self.packageName)
        except metadata.PackageNotFoundError as e:
            raise PackageMetadataError(
                f"Package not found: {self.packageName}",
                details={'package': self.packageName}
            ) from e

        return versionToCode(version)

    def getDatabasePath(self, name: str) -> Path:
        """Location of the database file with the given name."""
        return self.dataDir / name

    def listInstalledApplications(
        self,
        withPermissions: bool = True
    ) -> list[InstalledApplication]:
        """
        List applications installed in this environment.

        Read from the JSON manifest configured for the environment; without
        a manifest nothing is reported.

        Args:
            withPermissions: Include requested permissions in the result

        Returns:
            Installed applications

        Raises:
            OSError: If the manifest cannot be read
            ValueError: If the manifest is not valid JSON
        """
        if self._applicationsManifest is None:
            return []

        with open(self._applicationsManifest, 'r', encoding='utf-8') as f:
            entries = json.load(f)

        applications = []
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get('packageName'):
                continue
            permissions = entry.get('requestedPermissions') or []
            applications.append(InstalledApplication(
                packageName=entry['packageName'],
                label=entry.get('label', entry['packageName']),
                requestedPermissions=tuple(permissions) if withPermissions else (),
            ))

        logger.debug(f"Installed applications listed | count={len(applications)}")
        return applications
