################################################################################
# File Name: test_secrets_loader.py
# Purpose/Description: Tests for .env loading and placeholder resolution
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | python-dotenv parsing, startup variables
# ================================================================================
################################################################################

"""
Tests for the secrets_loader module.

Run with:
    pytest tests/test_secrets_loader.py -v
"""

import json
import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from common.secrets_loader import loadConfigWithSecrets, loadEnvFile, resolveSecrets


class TestLoadEnvFile:
    """Tests for loadEnvFile function."""

    def test_loadEnvFile_validFile_loadsVariables(self, tmp_path: Path, cleanEnv):
        """
        Given: .env file with two variables
        When: loadEnvFile() is called
        Then: Both are in os.environ and reported without values
        """
        envFile = tmp_path / '.env'
        envFile.write_text('TASKLIGHT_PACKAGE=fromfile\nLOG_LEVEL=DEBUG\n')

        result = loadEnvFile(str(envFile))

        assert os.environ['TASKLIGHT_PACKAGE'] == 'fromfile'
        assert os.environ['LOG_LEVEL'] == 'DEBUG'
        assert result == {'TASKLIGHT_PACKAGE': '[LOADED]', 'LOG_LEVEL': '[LOADED]'}

    def test_loadEnvFile_missingFile_returnsEmpty(self, tmp_path: Path, cleanEnv):
        """
        Given: Path to a file that does not exist
        When: loadEnvFile() is called
        Then: Returns empty dict
        """
        assert loadEnvFile(str(tmp_path / 'missing.env')) == {}

    def test_loadEnvFile_quotesAndComments_parsedByDotenv(self, tmp_path: Path, cleanEnv):
        """
        Given: .env file with quoted values, comments and blank lines
        When: loadEnvFile() is called
        Then: Quotes are stripped and comments ignored
        """
        envFile = tmp_path / '.env'
        envFile.write_text(
            '# data location\n'
            '\n'
            'TASKLIGHT_DATA_DIR="/srv/tasks"\n'
            "TEST_VAR='single quoted'\n"
        )

        loadEnvFile(str(envFile))

        assert os.environ['TASKLIGHT_DATA_DIR'] == '/srv/tasks'
        assert os.environ['TEST_VAR'] == 'single quoted'

    def test_loadEnvFile_existingVar_doesNotOverride(self, tmp_path: Path, envVars):
        """
        Given: Variable already set in the environment
        When: .env file defines it differently
        Then: Existing value is kept
        """
        envFile = tmp_path / '.env'
        envFile.write_text('TASKLIGHT_PACKAGE=fromfile\n')

        result = loadEnvFile(str(envFile))

        assert os.environ['TASKLIGHT_PACKAGE'] == 'envapp'
        assert result == {}


class TestResolveSecrets:
    """Tests for resolveSecrets function."""

    def test_resolveSecrets_placeholder_resolvesFromEnv(self, envVars):
        """
        Given: String with ${VAR} placeholder
        When: resolveSecrets() is called
        Then: Placeholder is replaced with env value
        """
        assert resolveSecrets('${TASKLIGHT_PACKAGE}') == 'envapp'

    def test_resolveSecrets_default_usedWhenMissing(self, cleanEnv):
        """
        Given: ${VAR:default} with VAR unset
        When: resolveSecrets() is called
        Then: Default is used
        """
        assert resolveSecrets('${TASKLIGHT_DATA_DIR:./data}') == './data'

    def test_resolveSecrets_emptyDefault_usesEmptyString(self, cleanEnv):
        """
        Given: ${VAR:} with VAR unset
        When: resolveSecrets() is called
        Then: Empty string
        """
        assert resolveSecrets('${TEST_VAR:}') == ''

    def test_resolveSecrets_unresolved_remainsUnchanged(self, cleanEnv):
        """
        Given: Placeholder without value or default
        When: resolveSecrets() is called
        Then: Placeholder is left as is
        """
        assert resolveSecrets('${TEST_VAR}') == '${TEST_VAR}'

    def test_resolveSecrets_nestedStructures_resolvesAll(self, envVars):
        """
        Given: Nested dict and list with placeholders and non-strings
        When: resolveSecrets() is called
        Then: Strings are resolved and other values untouched
        """
        config = {
            'application': {'packageName': '${TASKLIGHT_PACKAGE}', 'oem': False},
            'paths': ['${TASKLIGHT_DATA_DIR}/a', 'b'],
            'recovery': {'storageStableVersion': 135},
        }

        result = resolveSecrets(config)

        assert result['application'] == {'packageName': 'envapp', 'oem': False}
        assert result['paths'] == ['/tmp/tasklight-test/a', 'b']
        assert result['recovery']['storageStableVersion'] == 135


class TestLoadConfigWithSecrets:
    """Tests for loadConfigWithSecrets function."""

    def test_loadConfigWithSecrets_validFile_loadsAndResolves(self, tmp_path: Path, cleanEnv):
        """
        Given: Config file with placeholders and a .env defining them
        When: loadConfigWithSecrets() is called
        Then: Placeholders are resolved from the .env values
        """
        configFile = tmp_path / 'config.json'
        configFile.write_text(json.dumps({
            'application': {'packageName': '${TASKLIGHT_PACKAGE}'},
            'logging': {'level': '${LOG_LEVEL:INFO}'},
        }))
        envFile = tmp_path / '.env'
        envFile.write_text('TASKLIGHT_PACKAGE=dotenvapp\n')

        config = loadConfigWithSecrets(str(configFile), str(envFile))

        assert config['application']['packageName'] == 'dotenvapp'
        assert config['logging']['level'] == 'INFO'

    def test_loadConfigWithSecrets_missingFile_raisesError(self, tmp_path: Path):
        """
        Given: Config path that does not exist
        When: loadConfigWithSecrets() is called
        Then: FileNotFoundError is raised
        """
        with pytest.raises(FileNotFoundError):
            loadConfigWithSecrets(str(tmp_path / 'nope.json'), str(tmp_path / '.env'))

    def test_loadConfigWithSecrets_invalidJson_raisesError(self, tmp_path: Path):
        """
        Given: Config file with invalid JSON
        When: loadConfigWithSecrets() is called
        Then: json.JSONDecodeError is raised
        """
        configFile = tmp_path / 'config.json'
        configFile.write_text('{not json')

        with pytest.raises(json.JSONDecodeError):
            loadConfigWithSecrets(str(configFile), str(tmp_path / '.env'))
