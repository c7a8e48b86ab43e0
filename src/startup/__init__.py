################################################################################
# File Name: __init__.py
# Purpose/Description: Startup subpackage
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial subpackage creation
# ================================================================================
################################################################################
"""
Startup Subpackage.

Exports:
    Orchestration:
        - StartupOrchestrator: one-time startup sequence
        - createStartupOrchestratorFromConfig: factory with default collaborators

    Types:
        - StartupGuard, ContextHolder, VersionRecord, StartupReport
        - StartupStep, BackgroundStep
        - PROCESS_GUARD, PROCESS_CONTEXT

    Environment:
        - ApplicationEnvironment, InstalledApplication, versionToCode

    Helpers:
        - installFaultHandler, uninstallFaultHandler
        - TaskKillerAdvisor, findTaskKiller
        - NoticePresenter, Notice

    Exceptions:
        - StartupError, PackageMetadataError, ContextAlreadyBoundError
"""

from .exceptions import ContextAlreadyBoundError, PackageMetadataError, StartupError
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
from .environment import ApplicationEnvironment, InstalledApplication, versionToCode
from .fault_handler import installFaultHandler, uninstallFaultHandler
from .notices import Notice, NoticePresenter
from .advisory import TaskKillerAdvisor, findTaskKiller
from .orchestrator import StartupOrchestrator, createStartupOrchestratorFromConfig

__all__ = [
    'StartupOrchestrator',
    'createStartupOrchestratorFromConfig',
    'StartupGuard',
    'ContextHolder',
    'VersionRecord',
    'StartupReport',
    'StartupStep',
    'BackgroundStep',
    'PROCESS_GUARD',
    'PROCESS_CONTEXT',
    'ApplicationEnvironment',
    'InstalledApplication',
    'versionToCode',
    'installFaultHandler',
    'uninstallFaultHandler',
    'TaskKillerAdvisor',
    'findTaskKiller',
    'NoticePresenter',
    'Notice',
    'StartupError',
    'PackageMetadataError',
    'ContextAlreadyBoundError',
]
