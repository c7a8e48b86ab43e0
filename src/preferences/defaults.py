################################################################################
# File Name: defaults.py
# Purpose/Description: Preference keys and default preference values
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial implementation
# 2026-10-20    | M. Cornelison | Sync interval comes from configuration only
# ================================================================================
################################################################################

"""
Preference keys and the defaults filled in on every startup.

Only keys that are absent receive a default; user choices are never
overwritten.
"""

from typing import Any

# Set once the user acknowledged the task killer notice
P_TASK_KILLER_HELP = 'taskKillerHelpDismissed'

# Set while a remote sync is running, cleared when it finishes
P_SYNC_ONGOING = 'syncOngoing'

# ISO timestamp of the last finished remote sync
P_SYNC_LAST_RUN = 'syncLastRun'

# Obsolete keys removed by the normalization pass
P_LEGACY_SYNC_ONGOING = 'producteev_ongoing'

DEFAULT_PREFERENCES: dict[str, Any] = {
    'defaultImportance': 2,
    'defaultUrgency': 0,
    'defaultHideUntil': 0,
    'defaultReminders': 'due',
    'notificationsEnabled': True,
    'notificationRingtone': 'default',
    'quietHoursStart': -1,
    'quietHoursEnd': -1,
    'backupsEnabled': True,
}
