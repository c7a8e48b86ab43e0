################################################################################
# File Name: __init__.py
# Purpose/Description: Main application package initialization
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Startup orchestrator packages
# ================================================================================
################################################################################

"""
Main application package.

This package contains the application source code organized as:
- common/: Shared utilities (config, settings, logging, errors, analytics)
- preferences/: Preference store and recorded version
- storage/: SQLite task database
- backup/: Database snapshots and restore
- recovery/: Lost-database recovery
- upgrade/: Versioned migrations and normalization passes
- scheduling/: Timer service, alarms, background sync
- startup/: One-time startup orchestration

Entry point: main.py
"""

__version__ = '1.0.0'
