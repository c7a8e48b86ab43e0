################################################################################
# File Name: test_main.py
# Purpose/Description: Tests for main application entry point
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Startup CLI: --wait, runStartup, exit codes
# ================================================================================
################################################################################

"""
Tests for the main module.

Run with:
    pytest tests/test_main.py -v
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from main import (
    DEFAULT_CONFIG,
    EXIT_CONFIG_ERROR,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_UNKNOWN_ERROR,
    loadConfiguration,
    main,
    parseArgs,
    runStartup,
)
from common.error_handler import ConfigurationError
from startup.types import ContextHolder, StartupGuard


@pytest.fixture(autouse=True)
def restoreRootLogger():
    """main() reconfigures the root logger; put it back afterwards."""
    rootLogger = logging.getLogger()
    savedHandlers = list(rootLogger.handlers)
    savedLevel = rootLogger.level
    yield
    for handler in rootLogger.handlers:
        if handler not in savedHandlers:
            handler.close()
    rootLogger.handlers[:] = savedHandlers
    rootLogger.setLevel(savedLevel)


@pytest.fixture
def freshProcessState():
    """Give each test its own process-wide guard and context holder."""
    with patch('startup.orchestrator.PROCESS_GUARD', StartupGuard()), \
            patch('startup.orchestrator.PROCESS_CONTEXT', ContextHolder()):
        yield


# ================================================================================
# CLI Argument Parsing Tests
# ================================================================================

class TestParseArgs:
    """Tests for command line argument parsing."""

    def test_parseArgs_noArgs_usesDefaults(self):
        """
        Given: No command line arguments
        When: parseArgs() is called
        Then: Returns defaults for all options
        """
        args = parseArgs([])

        assert args.config == DEFAULT_CONFIG
        assert args.env_file.endswith('.env')
        assert args.dry_run is False
        assert args.verbose is False
        assert args.wait is False

    @pytest.mark.parametrize('argv', [
        ['--config', 'my.json', '--env-file', '.env.test', '--dry-run', '--verbose', '--wait'],
        ['-c', 'my.json', '-e', '.env.test', '--dry-run', '-v', '-w'],
    ])
    def test_parseArgs_allFlags_setsAllOptions(self, argv):
        """
        Given: Long or short forms of every option
        When: parseArgs() is called
        Then: All options are set
        """
        args = parseArgs(argv)

        assert args.config == 'my.json'
        assert args.env_file == '.env.test'
        assert args.dry_run is True
        assert args.verbose is True
        assert args.wait is True

    def test_parseArgs_versionFlag_exitsWithZero(self, capsys):
        """
        Given: --version flag
        When: parseArgs() is called
        Then: Prints version and exits with code 0
        """
        with pytest.raises(SystemExit) as excInfo:
            parseArgs(['--version'])

        assert excInfo.value.code == 0
        assert '1.0.0' in capsys.readouterr().out


# ================================================================================
# Configuration Loading Tests
# ================================================================================

class TestLoadConfiguration:
    """Tests for loadConfiguration."""

    def test_loadConfiguration_validConfig_returnsValidatedConfig(
        self, tempConfigFile: Path, tmp_path: Path
    ):
        """
        Given: Valid config file
        When: loadConfiguration() is called
        Then: Returns config with defaults applied
        """
        config = loadConfiguration(str(tempConfigFile), str(tmp_path / '.env'))

        assert config['application']['packageName'] == 'testapp'
        assert config['recovery']['storageStableVersion'] == 135

    def test_loadConfiguration_withEnvFile_resolvesPlaceholders(
        self, tmp_path: Path, cleanEnv
    ):
        """
        Given: Config with placeholders and a .env defining them
        When: loadConfiguration() is called
        Then: Placeholders are resolved
        """
        configFile = tmp_path / 'config.json'
        configFile.write_text(json.dumps({
            'application': {'packageName': '${TASKLIGHT_PACKAGE}'},
            'paths': {'dataDir': '${TASKLIGHT_DATA_DIR:./data}'},
        }))
        envFile = tmp_path / '.env'
        envFile.write_text('TASKLIGHT_PACKAGE=fromdotenv\n')

        config = loadConfiguration(str(configFile), str(envFile))

        assert config['application']['packageName'] == 'fromdotenv'
        assert config['paths']['dataDir'] == './data'

    def test_loadConfiguration_missingFile_raisesConfigError(self, tmp_path: Path):
        """
        Given: Config path that does not exist
        When: loadConfiguration() is called
        Then: ConfigurationError is raised
        """
        with pytest.raises(ConfigurationError, match='not found'):
            loadConfiguration(str(tmp_path / 'missing.json'), str(tmp_path / '.env'))

    def test_loadConfiguration_invalidJson_raisesConfigError(self, tmp_path: Path):
        """
        Given: Config file with invalid JSON
        When: loadConfiguration() is called
        Then: ConfigurationError is raised
        """
        configFile = tmp_path / 'bad.json'
        configFile.write_text('{ invalid')

        with pytest.raises(ConfigurationError):
            loadConfiguration(str(configFile), str(tmp_path / '.env'))

    def test_loadConfiguration_emptyPackageName_raisesConfigError(
        self, tmp_path: Path, invalidConfig: dict[str, Any]
    ):
        """
        Given: Config with an empty package name
        When: loadConfiguration() is called
        Then: ConfigurationError is raised
        """
        configFile = tmp_path / 'invalid.json'
        configFile.write_text(json.dumps(invalidConfig))

        with pytest.raises(ConfigurationError, match='validation failed'):
            loadConfiguration(str(configFile), str(tmp_path / '.env'))

    def test_loadConfiguration_wrongType_raisesConfigError(self, tmp_path: Path):
        """
        Given: Config with a negative retention count
        When: loadConfiguration() is called
        Then: ConfigurationError from the typed settings parse
        """
        configFile = tmp_path / 'typed.json'
        configFile.write_text(json.dumps({'backup': {'maxBackups': -1}}))

        with pytest.raises(ConfigurationError):
            loadConfiguration(str(configFile), str(tmp_path / '.env'))


# ================================================================================
# Startup Tests
# ================================================================================

class TestRunStartup:
    """Tests for runStartup."""

    def test_runStartup_dryRun_doesNotCreateOrchestrator(self, sampleConfig: dict[str, Any]):
        """
        Given: Dry run
        When: runStartup() is called
        Then: Returns success without building the orchestrator
        """
        with patch('startup.orchestrator.createStartupOrchestratorFromConfig') as factory:
            result = runStartup(sampleConfig, dryRun=True)

        assert result == EXIT_SUCCESS
        factory.assert_not_called()

    def test_runStartup_wait_runsJoinsAndShutsDown(self, sampleConfig: dict[str, Any]):
        """
        Given: Mock orchestrator
        When: runStartup(wait=True) is called
        Then: run, waitForBackgroundWork and shutdown are called
        """
        orchestrator = MagicMock()
        orchestrator.getReport.return_value.toDict.return_value = {}

        with patch(
            'startup.orchestrator.createStartupOrchestratorFromConfig',
            return_value=orchestrator
        ):
            result = runStartup(sampleConfig, wait=True)

        assert result == EXIT_SUCCESS
        orchestrator.run.assert_called_once()
        orchestrator.waitForBackgroundWork.assert_called_once()
        orchestrator.shutdown.assert_called_once()

    def test_runStartup_noWait_leavesJobsScheduled(self, sampleConfig: dict[str, Any]):
        """
        Given: Mock orchestrator
        When: runStartup() is called without wait
        Then: Background work is not awaited and jobs are not cancelled
        """
        orchestrator = MagicMock()

        with patch(
            'startup.orchestrator.createStartupOrchestratorFromConfig',
            return_value=orchestrator
        ):
            runStartup(sampleConfig)

        orchestrator.waitForBackgroundWork.assert_not_called()
        orchestrator.shutdown.assert_not_called()

    def test_runStartup_keyboardInterrupt_returnsRuntimeError(
        self, sampleConfig: dict[str, Any]
    ):
        """
        Given: Orchestrator interrupted during run
        When: runStartup(wait=True) is called
        Then: Returns runtime error code and still shuts down
        """
        orchestrator = MagicMock()
        orchestrator.run.side_effect = KeyboardInterrupt

        with patch(
            'startup.orchestrator.createStartupOrchestratorFromConfig',
            return_value=orchestrator
        ):
            result = runStartup(sampleConfig, wait=True)

        assert result == EXIT_RUNTIME_ERROR
        orchestrator.shutdown.assert_called_once()


# ================================================================================
# Main Entry Point Tests
# ================================================================================

class TestMain:
    """Tests for main()."""

    def test_main_dryRun_returnsSuccess(self, tempConfigFile: Path, tmp_path: Path):
        """
        Given: Valid config and --dry-run
        When: main() is called
        Then: Returns EXIT_SUCCESS
        """
        result = main(['-c', str(tempConfigFile), '-e', str(tmp_path / '.env'), '--dry-run'])

        assert result == EXIT_SUCCESS

    def test_main_missingConfig_returnsConfigError(self, tmp_path: Path):
        """
        Given: Missing config file
        When: main() is called
        Then: Returns EXIT_CONFIG_ERROR
        """
        result = main(['-c', str(tmp_path / 'missing.json'), '-e', str(tmp_path / '.env')])

        assert result == EXIT_CONFIG_ERROR

    def test_main_unexpectedError_returnsUnknownError(
        self, tempConfigFile: Path, tmp_path: Path
    ):
        """
        Given: runStartup raising an unexpected exception
        When: main() is called
        Then: Returns EXIT_UNKNOWN_ERROR
        """
        with patch('main.runStartup', side_effect=RuntimeError('boom')):
            result = main(['-c', str(tempConfigFile), '-e', str(tmp_path / '.env')])

        assert result == EXIT_UNKNOWN_ERROR

    def test_main_keyboardInterrupt_returnsRuntimeError(
        self, tempConfigFile: Path, tmp_path: Path
    ):
        """
        Given: Interrupt while loading configuration
        When: main() is called
        Then: Returns EXIT_RUNTIME_ERROR
        """
        with patch('main.loadConfiguration', side_effect=KeyboardInterrupt):
            result = main(['-c', str(tempConfigFile), '-e', str(tmp_path / '.env')])

        assert result == EXIT_RUNTIME_ERROR

    @pytest.mark.integration
    def test_main_fullStartup_recordsVersionAndCreatesDatabase(
        self,
        tempConfigFile: Path,
        tmp_path: Path,
        freshProcessState,
        restoreFaultHandler
    ):
        """
        Given: Valid config with versionCode 140 and an empty data directory
        When: main() runs with --wait
        Then: Version 140 is recorded and the database file exists
        """
        result = main(['-c', str(tempConfigFile), '-e', str(tmp_path / '.env'), '--wait'])

        assert result == EXIT_SUCCESS
        preferences = json.loads((tmp_path / 'data' / 'preferences.json').read_text())
        assert preferences['currentVersion'] == 140
        assert (tmp_path / 'data' / 'test.db').exists()
