################################################################################
# File Name: conftest.py
# Purpose/Description: Pytest fixtures and configuration
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Startup fixtures: data dir, preferences,
#               |              | environment, reporter, timers
# ================================================================================
################################################################################

"""
Pytest configuration and shared fixtures.

Fixtures defined here are available to all test files automatically.

Usage:
    def test_something(sampleConfig, preferenceStore):
        # sampleConfig and preferenceStore are automatically injected
        pass
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Generator
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
srcPath = Path(__file__).parent.parent / 'src'
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

from common.error_handler import ErrorReporter
from preferences.store import PreferenceStore, VersionStore
from scheduling.timer_service import TimerService
from startup.environment import ApplicationEnvironment
from startup.fault_handler import uninstallFaultHandler


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture
def sampleConfig(tmp_path: Path) -> dict[str, Any]:
    """
    Provide sample configuration for tests.

    Returns:
        Dictionary with test configuration values
    """
    return {
        'application': {
            'name': 'TestApp',
            'packageName': 'testapp',
            'versionCode': 140,
            'oem': False
        },
        'logging': {
            'level': 'DEBUG',
            'maskPII': True
        },
        'paths': {
            'dataDir': str(tmp_path / 'data')
        },
        'database': {
            'name': 'test.db',
            'walMode': False
        },
        'backup': {
            'enabled': True,
            'intervalHours': 24,
            'maxBackups': 3
        },
        'sync': {
            'enabled': True,
            'intervalMinutes': 60
        }
    }


@pytest.fixture
def minimalConfig() -> dict[str, Any]:
    """
    Provide minimal configuration for testing defaults.

    Returns:
        Dictionary with minimal configuration
    """
    return {
        'application': {
            'packageName': 'minimalapp'
        }
    }


@pytest.fixture
def invalidConfig() -> dict[str, Any]:
    """
    Provide invalid configuration for error testing.

    Returns:
        Dictionary with invalid/missing configuration
    """
    return {
        'application': {
            # Missing required fields
            'packageName': ''
        }
    }


# ================================================================================
# Environment Fixtures
# ================================================================================

@pytest.fixture
def envVars() -> Generator[dict[str, str], None, None]:
    """
    Set up test environment variables.

    Yields:
        Dictionary of environment variables that were set

    Automatically cleans up after test.
    """
    testVars = {
        'TASKLIGHT_PACKAGE': 'envapp',
        'TASKLIGHT_DATA_DIR': '/tmp/tasklight-test',
        'LOG_LEVEL': 'WARNING',
    }

    originalVars = {}
    for key in testVars:
        originalVars[key] = os.environ.get(key)
        os.environ[key] = testVars[key]

    yield testVars

    for key, value in originalVars.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def cleanEnv() -> Generator[None, None, None]:
    """
    Ensure clean environment with no test variables.

    Removes common test variables before test, restores after.
    """
    varsToRemove = [
        'TASKLIGHT_PACKAGE', 'TASKLIGHT_DATA_DIR', 'LOG_LEVEL',
        'TEST_VAR'  # Used by test_secrets_loader and test_main
    ]

    saved = {}
    for var in varsToRemove:
        saved[var] = os.environ.pop(var, None)

    yield

    for var, value in saved.items():
        if value is None:
            os.environ.pop(var, None)
        else:
            os.environ[var] = value


# ================================================================================
# Startup Collaborator Fixtures
# ================================================================================

@pytest.fixture
def dataDir(tmp_path: Path) -> Path:
    """Empty application data directory."""
    directory = tmp_path / 'data'
    directory.mkdir()
    return directory


@pytest.fixture
def backupDir(dataDir: Path) -> Path:
    """Empty backup directory inside the data directory."""
    directory = dataDir / 'backups'
    directory.mkdir()
    return directory


@pytest.fixture
def preferenceStore(dataDir: Path) -> PreferenceStore:
    """Preference store backed by a file in the data directory."""
    return PreferenceStore(dataDir / 'preferences.json')


@pytest.fixture
def versionStore(preferenceStore: PreferenceStore) -> VersionStore:
    return VersionStore(preferenceStore)


@pytest.fixture
def environment(dataDir: Path, backupDir: Path) -> ApplicationEnvironment:
    """Environment with installed version 140 and no applications manifest."""
    return ApplicationEnvironment(
        packageName='testapp',
        dataDir=dataDir,
        backupDir=backupDir,
        versionCodeOverride=140,
    )


@pytest.fixture
def reporter() -> ErrorReporter:
    return ErrorReporter()


@pytest.fixture
def timerService() -> Generator[TimerService, None, None]:
    """Timer service cancelled after the test."""
    timers = TimerService()
    yield timers
    timers.cancelAll()


@pytest.fixture
def restoreFaultHandler() -> Generator[None, None, None]:
    """Remove the global exception hooks installed during the test."""
    yield
    uninstallFaultHandler()


# ================================================================================
# Mock Fixtures
# ================================================================================

@pytest.fixture
def mockLogger() -> MagicMock:
    """
    Provide mock logger for testing log calls.

    Returns:
        MagicMock logger instance
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    return logger


# ================================================================================
# File System Fixtures
# ================================================================================

@pytest.fixture
def tempConfigFile(tmp_path: Path, sampleConfig: dict[str, Any]) -> Path:
    """
    Create temporary config file for testing.

    Args:
        tmp_path: Pytest temp directory fixture
        sampleConfig: Sample configuration fixture

    Returns:
        Path to temporary config file
    """
    configFile = tmp_path / 'config.json'
    with open(configFile, 'w') as f:
        json.dump(sampleConfig, f)

    return configFile


@pytest.fixture
def tempEnvFile(tmp_path: Path, envVars: dict[str, str]) -> Path:
    """
    Create temporary .env file for testing.

    Args:
        tmp_path: Pytest temp directory fixture
        envVars: Environment variables fixture

    Returns:
        Path to temporary .env file
    """
    envFile = tmp_path / '.env'
    with open(envFile, 'w') as f:
        for key, value in envVars.items():
            f.write(f'{key}={value}\n')

    return envFile


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def assertNoLogs(caplog: pytest.LogCaptureFixture) -> Generator[None, None, None]:
    """
    Assert that no error logs were emitted during test.

    Usage:
        def test_something(assertNoLogs):
            # Test code here
            # Will fail if any ERROR logs are emitted
    """
    yield

    errors = [r for r in caplog.records if r.levelname == 'ERROR']
    assert len(errors) == 0, f"Unexpected error logs: {[r.message for r in errors]}"


# ================================================================================
# Pytest Configuration
# ================================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
