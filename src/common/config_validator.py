################################################################################
# File Name: config_validator.py
# Purpose/Description: Configuration validation with required fields and defaults
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Startup orchestrator defaults (paths, backup,
#               |              | sync, widget, recovery, advisory)
# ================================================================================
################################################################################

"""
Configuration validation module.

Provides validation of configuration files with:
- Required field checking
- Default value application
- Nested configuration support
- Clear error messages for missing/invalid fields

Usage:
    from common.config_validator import ConfigValidator

    validator = ConfigValidator()
    config = validator.validate(rawConfig)
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, missingFields: list[str] | None = None):
        super().__init__(message)
        self.missingFields = missingFields or []


# Required configuration keys (dot notation)
REQUIRED_KEYS: list[str] = [
    'application.packageName',
]

# Default values for optional settings (dot notation)
DEFAULTS: dict[str, Any] = {
    'application.name': 'Tasklight',
    'application.packageName': 'tasklight',
    'application.oem': False,
    'logging.level': 'INFO',
    'logging.maskPII': True,
    'paths.dataDir': './data',
    'database.name': 'tasklight.db',
    'database.walMode': True,
    'backup.enabled': True,
    'backup.intervalHours': 24,
    'backup.maxBackups': 7,
    'backup.compress': True,
    'sync.enabled': True,
    'sync.intervalMinutes': 60,
    'widget.refreshIntervalMinutes': 30,
    'recovery.storageStableVersion': 135,
    'advisory.enabled': True,
    'advisory.taskKillerPermission': 'RESTART_PACKAGES',
    'advisory.systemPackagePrefix': 'com.android',
}


class ConfigValidator:
    """
    Validates configuration dictionaries.

    Attributes:
        requiredKeys: List of required configuration keys (dot notation)
        defaults: Dictionary of default values for optional fields
    """

    def __init__(
        self,
        requiredKeys: list[str] | None = None,
        defaults: dict[str, Any] | None = None
    ):
        """
        Initialize the validator.

        Args:
            requiredKeys: Required keys in dot notation (e.g., 'paths.dataDir')
            defaults: Default values in dot notation
        """
        self.requiredKeys = REQUIRED_KEYS if requiredKeys is None else requiredKeys
        self.defaults = DEFAULTS if defaults is None else defaults

    def validate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Validate and enhance configuration.

        Defaults are applied first so a required key that has a default
        is never reported missing.

        Args:
            config: Raw configuration dictionary

        Returns:
            Validated configuration with defaults applied

        Raises:
            ConfigValidationError: If required fields are missing
        """
        config = self._applyDefaults(config)

        missingFields = self._validateRequired(config)
        if missingFields:
            fieldList = ', '.join(missingFields)
            raise ConfigValidationError(
                f"Missing required configuration fields: {fieldList}",
                missingFields=missingFields
            )

        logger.info("Configuration validated successfully")
        return config

    def _validateRequired(self, config: dict[str, Any]) -> list[str]:
        missingFields = []

        for key in self.requiredKeys:
            value = self._getNestedValue(config, key)
            if value is None or value == '':
                missingFields.append(key)

        return missingFields

    def _applyDefaults(self, config: dict[str, Any]) -> dict[str, Any]:
        for key, defaultValue in self.defaults.items():
            if self._getNestedValue(config, key) is None:
                self._setNestedValue(config, key, defaultValue)
                logger.debug(f"Applied default for {key}: {defaultValue}")

        return config

    def _getNestedValue(self, config: dict[str, Any], key: str) -> Any:
        """
        Get a value from nested dictionary using dot notation.

        Args:
            config: Configuration dictionary
            key: Dot-notation key (e.g., 'backup.maxBackups')

        Returns:
            Value if found, None otherwise
        """
        value: Any = config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return None

        return value

    def _setNestedValue(self, config: dict[str, Any], key: str, value: Any) -> None:
        keys = key.split('.')
        current = config

        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def validateField(
        self,
        config: dict[str, Any],
        key: str,
        expectedType: type,
        allowNone: bool = False
    ) -> bool:
        """
        Validate a specific field's type.

        Args:
            config: Configuration dictionary
            key: Dot-notation key to validate
            expectedType: Expected Python type
            allowNone: Whether None is acceptable

        Returns:
            True if valid, False otherwise
        """
        value = self._getNestedValue(config, key)

        if value is None:
            return allowNone

        return isinstance(value, expectedType)


def validateConfig(config: dict[str, Any]) -> dict[str, Any]:
    """
    Convenience function to validate configuration with module defaults.

    Raises:
        ConfigValidationError: If validation fails
    """
    validator = ConfigValidator()
    return validator.validate(config)
