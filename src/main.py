################################################################################
# File Name: main.py
# Purpose/Description: Main application entry point
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Run the startup orchestrator; --wait flag,
#               |              | logging from config
# ================================================================================
################################################################################

"""
Main application entry point.

This module provides the main entry point for the application with:
- CLI argument parsing
- Configuration loading and validation
- One-time application startup through the StartupOrchestrator
- Error handling and exit codes

Usage:
    python src/main.py --help
    python src/main.py --config path/to/config.json
    python src/main.py --dry-run
    python src/main.py --wait
"""

import argparse
import sys
from pathlib import Path

# Resolve project paths relative to this script (not CWD)
srcPath = Path(__file__).resolve().parent
projectRoot = srcPath.parent
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

DEFAULT_CONFIG = str(srcPath / 'startup_config.json')
DEFAULT_ENV = str(projectRoot / '.env')

from common.config_validator import ConfigValidationError, ConfigValidator
from common.error_handler import ConfigurationError, handleError
from common.logging_config import getLogger, setupLogging, setupLoggingFromConfig
from common.secrets_loader import loadConfigWithSecrets
from common.settings import StartupSettings

__version__ = '1.0.0'

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 2
EXIT_UNKNOWN_ERROR = 3


def parseArgs(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='Tasklight application startup',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py                    Start with default config
  python main.py --config my.json   Start with custom config
  python main.py --dry-run          Validate config without starting
  python main.py --wait             Wait for background startup work
        '''
    )

    parser.add_argument(
        '--config', '-c',
        default=DEFAULT_CONFIG,
        help='Path to configuration file (default: src/startup_config.json)'
    )

    parser.add_argument(
        '--env-file', '-e',
        default=DEFAULT_ENV,
        help='Path to environment file (default: .env)'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Validate configuration without running startup'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (debug) logging'
    )

    parser.add_argument(
        '--wait', '-w',
        action='store_true',
        help='Wait for the background startup worker before exiting'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(argv)


def loadConfiguration(
    configPath: str,
    envPath: str | None = None
) -> dict:
    """
    Load and validate configuration.

    Args:
        configPath: Path to configuration file
        envPath: Path to environment file

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigurationError: If configuration is missing or invalid
    """
    logger = getLogger(__name__)

    try:
        config = loadConfigWithSecrets(configPath, envPath)
        config = ConfigValidator().validate(config)

        # Typed parse catches wrong types and ranges up front
        StartupSettings.fromDict(config)

        logger.info(f"Configuration loaded from {configPath}")
        return config

    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {e}") from e
    except ValueError as e:
        raise ConfigurationError(f"Configuration file is not valid JSON: {e}") from e
    except ConfigValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def runStartup(
    config: dict,
    dryRun: bool = False,
    wait: bool = False
) -> int:
    """
    Run application startup.

    Args:
        config: Validated configuration dictionary
        dryRun: If True, validate config but don't run startup
        wait: If True, join the background worker and stop scheduled jobs

    Returns:
        Exit code: 0 when startup ran, non-zero for errors
    """
    from startup.environment import ApplicationEnvironment
    from startup.orchestrator import createStartupOrchestratorFromConfig

    logger = getLogger(__name__)

    if dryRun:
        logger.info("DRY RUN MODE - Validating config without running startup")
        logger.info("Configuration is valid")
        return EXIT_SUCCESS

    settings = StartupSettings.fromDict(config)
    environment = ApplicationEnvironment.fromSettings(settings)
    orchestrator = createStartupOrchestratorFromConfig(config)

    try:
        orchestrator.run(environment)
        report = orchestrator.getReport()

        if wait:
            logger.info("Waiting for background startup work...")
            orchestrator.waitForBackgroundWork()

        if report is not None:
            logger.info(f"Startup report | {report.toDict()}")

    except KeyboardInterrupt:
        logger.warning("Startup interrupted by user")
        return EXIT_RUNTIME_ERROR

    finally:
        if wait:
            orchestrator.shutdown()

    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parseArgs(argv)

    setupLogging(level='DEBUG' if args.verbose else 'INFO')
    logger = getLogger(__name__)

    logger.info("=" * 60)
    logger.info("Application starting...")
    logger.info("=" * 60)

    try:
        config = loadConfiguration(args.config, args.env_file)
        setupLoggingFromConfig(config, verbose=args.verbose)

        exitCode = runStartup(config, dryRun=args.dry_run, wait=args.wait)

        if exitCode == EXIT_SUCCESS:
            logger.info("Application started successfully")
        else:
            logger.warning(f"Application finished with exit code {exitCode}")

        return exitCode

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    except KeyboardInterrupt:
        logger.warning("Application interrupted by user")
        return EXIT_RUNTIME_ERROR

    except Exception as e:
        handleError(e, reraise=False)
        logger.error(f"Unexpected error: {e}")
        return EXIT_UNKNOWN_ERROR

    finally:
        logger.info("=" * 60)
        logger.info("Application finished")
        logger.info("=" * 60)


if __name__ == '__main__':
    sys.exit(main())
