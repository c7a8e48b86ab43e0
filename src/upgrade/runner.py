################################################################################
# File Name: runner.py
# Purpose/Description: Apply versioned migrations and startup normalization
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial implementation
# 2026-10-20    | M. Cornelison | Collect normalization failures with ErrorCollector
# ================================================================================
################################################################################
"""
Upgrade runner.

Versioned migration:
    Steps whose threshold lies in (oldVersion, newVersion] run in ascending
    threshold order. The first failing step stops the run with
    MigrationError; later steps are not attempted. The caller records the
    new version only when applyVersionedMigration() returns normally, so a
    failed upgrade is retried on the next startup.

Secondary normalization:
    Every registered pass runs on every startup. A failing pass is logged
    and the remaining passes still run.

Usage:
    from upgrade.runner import UpgradeRunner

    runner = UpgradeRunner()
    runner.registerStep(MigrationStep(120, 'addTaskNotes', addNotesColumn))
    runner.applyVersionedMigration(100, 135)
    runner.applySecondaryNormalization(environment)
"""

import logging
from collections.abc import Callable
from typing import Any

from common.error_handler import ErrorCollector

from .exceptions import DuplicateStepError, MigrationError
from .types import MigrationStep, NormalizationPass

logger = logging.getLogger(__name__)


class UpgradeRunner:
    """Registry and executor of migration steps and normalization passes."""

    def __init__(self):
        self._steps: dict[int, MigrationStep] = {}
        self._passes: list[NormalizationPass] = []

    # ================================================================================
    # Registration
    # ================================================================================

    def registerStep(self, step: MigrationStep) -> None:
        """
        Register a versioned migration step.

        Raises:
            DuplicateStepError: If a step already uses the same threshold
        """
        if step.threshold in self._steps:
            raise DuplicateStepError(
                f"Migration step already registered for version {step.threshold}",
                details={
                    'threshold': step.threshold,
                    'existing': self._steps[step.threshold].name,
                    'new': step.name,
                }
            )
        self._steps[step.threshold] = step

    def registerNormalization(self, name: str, action: Callable[[Any], Any]) -> None:
        """Register a pass run on every startup with the environment."""
        self._passes.append(NormalizationPass(name=name, action=action))

    def getSteps(self) -> list[MigrationStep]:
        """All registered steps in ascending threshold order."""
        return [self._steps[threshold] for threshold in sorted(self._steps)]

    def getPendingSteps(self, oldVersion: int, newVersion: int) -> list[MigrationStep]:
        """Steps an upgrade from oldVersion to newVersion would run, in order."""
        return [step for step in self.getSteps() if step.appliesTo(oldVersion, newVersion)]

    # ================================================================================
    # Execution
    # ================================================================================

    def applyVersionedMigration(self, oldVersion: int, newVersion: int) -> list[str]:
        """
        Run the steps between oldVersion and newVersion.

        Args:
            oldVersion: Last recorded version (0 on first run)
            newVersion: Installed version

        Returns:
            Names of the steps that ran

        Raises:
            MigrationError: On the first failing step
        """
        pending = self.getPendingSteps(oldVersion, newVersion)
        logger.info(
            f"Applying migration | from={oldVersion} to={newVersion} steps={len(pending)}"
        )

        applied = []
        for step in pending:
            logger.info(f"Migration step | threshold={step.threshold} name={step.name}")
            try:
                step.action(oldVersion, newVersion)
            except Exception as e:
                raise MigrationError(
                    f"Migration step '{step.name}' failed: {e}",
                    step=step,
                    details={
                        'threshold': step.threshold,
                        'from': oldVersion,
                        'to': newVersion,
                        'applied': list(applied),
                    }
                ) from e
            applied.append(step.name)

        logger.info(f"Migration complete | applied={applied}")
        return applied

    def applySecondaryNormalization(self, environment: Any) -> list[str]:
        """
        Run every normalization pass.

        Returns:
            Names of the passes that failed
        """
        collector = ErrorCollector()
        for normalization in self._passes:
            try:
                normalization.action(environment)
                logger.debug(f"Normalization pass done | name={normalization.name}")
            except Exception as e:
                logger.debug(f"Normalization pass failed | name={normalization.name}", exc_info=True)
                collector.add(e, name=normalization.name)

        if collector.hasErrors():
            collector.report()
        return [entry['context']['name'] for entry in collector.errors]
