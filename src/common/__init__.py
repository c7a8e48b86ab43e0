################################################################################
# File Name: __init__.py
# Purpose/Description: Common utilities package initialization
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Added ErrorReporter, typed settings
# ================================================================================
################################################################################

"""
Common utilities package.

This package provides shared functionality used across the application:
- Configuration validation, loading and typed settings
- Secrets management
- Logging configuration
- Error handling and reporting

Usage:
    from common.config_validator import ConfigValidator
    from common.secrets_loader import loadConfigWithSecrets
    from common.logging_config import getLogger
    from common.error_handler import ErrorReporter
"""

from .config_validator import ConfigValidator
from .error_handler import (
    BaseError,
    ConfigurationError,
    DataError,
    ErrorReporter,
    StorageError,
    handleError,
)
from .logging_config import getLogger, setupLogging
from .secrets_loader import loadConfigWithSecrets
from .settings import StartupSettings

__all__ = [
    'ConfigValidator',
    'loadConfigWithSecrets',
    'getLogger',
    'setupLogging',
    'BaseError',
    'ConfigurationError',
    'DataError',
    'StorageError',
    'ErrorReporter',
    'handleError',
    'StartupSettings',
]
