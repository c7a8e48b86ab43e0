################################################################################
# File Name: types.py
# Purpose/Description: Migration step and normalization pass types
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
Upgrade types.

A MigrationStep runs once, when an upgrade crosses its threshold version:
it applies when oldVersion < threshold <= newVersion. A NormalizationPass
runs on every startup and must be idempotent.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MigrationStep:
    """
    Versioned migration step.

    Attributes:
        threshold: Version code that introduced the change
        name: Short description used in logs and errors
        action: Callable run with (oldVersion, newVersion)
    """

    threshold: int
    name: str
    action: Callable[[int, int], Any]

    def appliesTo(self, oldVersion: int, newVersion: int) -> bool:
        return oldVersion < self.threshold <= newVersion


@dataclass(frozen=True)
class NormalizationPass:
    """
    Version-independent pass run every startup.

    Attributes:
        name: Short description used in logs
        action: Callable run with the application environment
    """

    name: str
    action: Callable[[Any], Any]
