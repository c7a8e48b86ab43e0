################################################################################
# File Name: __init__.py
# Purpose/Description: Upgrade subpackage
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
Upgrade Subpackage.

Exports:
    - MigrationStep, NormalizationPass
    - UpgradeRunner: versioned migration and startup normalization
    - buildDefaultUpgradeRunner: runner with the built-in steps
    - UpgradeError, MigrationError, DuplicateStepError
"""

from .types import MigrationStep, NormalizationPass
from .exceptions import DuplicateStepError, MigrationError, UpgradeError
from .runner import UpgradeRunner
from .migrations import buildDefaultUpgradeRunner

__all__ = [
    'MigrationStep',
    'NormalizationPass',
    'UpgradeRunner',
    'buildDefaultUpgradeRunner',
    'UpgradeError',
    'MigrationError',
    'DuplicateStepError',
]
