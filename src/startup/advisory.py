################################################################################
# File Name: advisory.py
# Purpose/Description: Warn about installed task-killing utilities
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
Task killer advisory.

Utilities that kill background processes also kill reminders. If one is
installed (it requests the process-restart permission and is not a system
package) the user gets a one-time notice. Acknowledging the notice records
a preference so it is never shown again.
"""

import logging
from collections.abc import Iterable
from typing import Any

from preferences.defaults import P_TASK_KILLER_HELP
from preferences.store import PreferenceStore

from .environment import InstalledApplication
from .notices import Notice, NoticePresenter

logger = logging.getLogger(__name__)

DEFAULT_TASK_KILLER_PERMISSION = 'RESTART_PACKAGES'
DEFAULT_SYSTEM_PACKAGE_PREFIX = 'com.android'

NOTICE_TITLE = 'Information'
NOTICE_MESSAGE = (
    "{label} appears to be a task killer. Task killers can stop reminders "
    "from firing; exclude this application from it to keep reminders working."
)


def findTaskKiller(
    applications: Iterable[InstalledApplication | None],
    permission: str = DEFAULT_TASK_KILLER_PERMISSION,
    systemPrefix: str = DEFAULT_SYSTEM_PACKAGE_PREFIX
) -> InstalledApplication | None:
    """
    Find the first installed application that can kill other processes.

    Args:
        applications: Installed applications to scan
        permission: Permission that marks a task killer
        systemPrefix: Package prefix of system applications to skip

    Returns:
        The first match, or None
    """
    for app in applications:
        if app is None or not app.requestedPermissions:
            continue
        if app.packageName.startswith(systemPrefix):
            continue
        if permission in app.requestedPermissions:
            return app
    return None


class TaskKillerAdvisor:
    """Shows the task killer notice at most once."""

    def __init__(
        self,
        preferences: PreferenceStore,
        presenter: NoticePresenter,
        permission: str = DEFAULT_TASK_KILLER_PERMISSION,
        systemPrefix: str = DEFAULT_SYSTEM_PACKAGE_PREFIX
    ):
        self._preferences = preferences
        self._presenter = presenter
        self._permission = permission
        self._systemPrefix = systemPrefix

    def isDismissed(self) -> bool:
        return self._preferences.getBoolean(P_TASK_KILLER_HELP, False)

    def dismiss(self) -> None:
        self._preferences.setBoolean(P_TASK_KILLER_HELP, True)
        logger.info("Task killer notice dismissed")

    def showTaskKillerHelp(self, environment: Any) -> InstalledApplication | None:
        """
        Scan installed applications and present the notice if needed.

        Args:
            environment: Application environment (provides
                listInstalledApplications)

        Returns:
            The task killer the notice was shown for, or None
        """
        if self.isDismissed():
            return None

        applications = environment.listInstalledApplications(withPermissions=True)
        killer = findTaskKiller(applications, self._permission, self._systemPrefix)
        if killer is None:
            logger.debug(f"No task killer found | scanned={len(applications)}")
            return None

        logger.info(f"Task killer detected | package={killer.packageName}")
        notice = Notice(NOTICE_TITLE, NOTICE_MESSAGE.format(label=killer.label))
        self._presenter.present(notice, onDismiss=self.dismiss)
        return killer
