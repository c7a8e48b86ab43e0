################################################################################
# File Name: test_error_handler.py
# Purpose/Description: Tests for error classification and reporting
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | ErrorReporter tests, storage category
# 2026-10-20    | M. Cornelison | Collector report context, BaseError subclass category
# ================================================================================
################################################################################

"""
Tests for the error_handler module.

Run with:
    pytest tests/test_error_handler.py -v
"""

import logging
import sqlite3
import sys
import threading
from pathlib import Path

import pytest

srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from common.error_handler import (
    BaseError,
    ConfigurationError,
    DataError,
    ErrorCategory,
    ErrorCollector,
    ErrorReporter,
    StorageError,
    classifyError,
    formatError,
    handleError,
)


class TestErrorCategories:
    """Tests for error classification."""

    def test_classifyError_baseErrorSubclass_returnsOwnCategory(self):
        """
        Given: BaseError subclass declaring a category
        When: classifyError() is called
        Then: Returns the declared category
        """
        class LockedError(BaseError):
            category = ErrorCategory.RETRYABLE

        result = classifyError(LockedError("Database busy"))

        assert result == ErrorCategory.RETRYABLE

    def test_classifyError_storageError_returnsStorage(self):
        """
        Given: StorageError instance
        When: classifyError() is called
        Then: Returns STORAGE category
        """
        assert classifyError(StorageError("disk full")) == ErrorCategory.STORAGE

    def test_classifyError_configError_returnsConfig(self):
        """
        Given: ConfigurationError instance
        When: classifyError() is called
        Then: Returns CONFIGURATION category
        """
        assert classifyError(ConfigurationError("bad")) == ErrorCategory.CONFIGURATION

    def test_classifyError_standardTimeoutError_returnsRetryable(self):
        """
        Given: Built-in TimeoutError
        When: classifyError() is called
        Then: Returns RETRYABLE category
        """
        assert classifyError(TimeoutError("slow")) == ErrorCategory.RETRYABLE

    def test_classifyError_osError_returnsStorage(self):
        """
        Given: Built-in OSError (not timeout related)
        When: classifyError() is called
        Then: Returns STORAGE category
        """
        assert classifyError(PermissionError("denied")) == ErrorCategory.STORAGE

    def test_classifyError_sqliteError_returnsStorage(self):
        """
        Given: sqlite3.OperationalError
        When: classifyError() is called
        Then: Returns STORAGE category
        """
        assert classifyError(sqlite3.OperationalError("no such table")) == ErrorCategory.STORAGE

    def test_classifyError_databaseLocked_returnsRetryable(self):
        """
        Given: sqlite error reporting a locked database
        When: classifyError() is called
        Then: Returns RETRYABLE category
        """
        error = sqlite3.OperationalError("database is locked")

        assert classifyError(error) == ErrorCategory.RETRYABLE

    def test_classifyError_valueError_returnsData(self):
        """
        Given: ValueError with a neutral message
        When: classifyError() is called
        Then: Returns DATA category
        """
        assert classifyError(ValueError("bad number")) == ErrorCategory.DATA

    def test_classifyError_unknownError_returnsSystem(self):
        """
        Given: Generic exception
        When: classifyError() is called
        Then: Returns SYSTEM category
        """
        assert classifyError(RuntimeError("boom")) == ErrorCategory.SYSTEM


class TestHandleError:
    """Tests for handleError function."""

    def test_handleError_withReraise_raisesError(self):
        """
        Given: An error and reraise=True
        When: handleError() is called
        Then: Error is re-raised
        """
        with pytest.raises(ValueError):
            handleError(ValueError("test"), reraise=True)

    def test_handleError_withoutReraise_returnsDetails(self):
        """
        Given: An error and reraise=False
        When: handleError() is called
        Then: Returns error details dict
        """
        result = handleError(DataError("bad record"), reraise=False)

        assert result['type'] == 'DataError'
        assert result['category'] == 'data'
        assert result['message'] == 'bad record'

    def test_handleError_withContext_includesContext(self):
        """
        Given: An error with context
        When: handleError() is called without reraise
        Then: Context is returned in the details
        """
        result = handleError(RuntimeError("x"), context={'step': 'cleanup'}, reraise=False)

        assert result['context'] == {'step': 'cleanup'}


class TestFormatError:
    """Tests for formatError function."""

    def test_formatError_customError_formatsWithCategory(self):
        """
        Given: BaseError subclass with details
        When: formatError() is called
        Then: Output has category prefix, message and details
        """
        error = StorageError("write failed", details={'path': '/tmp/x'})

        result = formatError(error)

        assert result.startswith('[STORAGE] write failed')
        assert "details={'path': '/tmp/x'}" in result

    def test_formatError_standardError_formatsCorrectly(self):
        """
        Given: Standard exception
        When: formatError() is called
        Then: Output has category, type name and message
        """
        assert formatError(RuntimeError("boom")) == '[SYSTEM] RuntimeError: boom'

    def test_formatError_errorWithoutDetails_noDetailsInOutput(self):
        """
        Given: BaseError without details
        When: formatError() is called
        Then: No details section
        """
        assert 'details' not in formatError(DataError("plain"))


class TestErrorCollector:
    """Tests for ErrorCollector class."""

    def test_errorCollector_addErrors_collectsAll(self):
        """
        Given: ErrorCollector
        When: Multiple errors are added
        Then: All errors are kept with category and context
        """
        collector = ErrorCollector()

        collector.add(ValueError("one"), item=1)
        collector.add(StorageError("two"), item=2)

        assert collector.count() == 2
        assert collector.errors[1]['category'] == 'storage'
        assert collector.errors[0]['context'] == {'item': 1}

    def test_errorCollector_report_logsMessageAndContext(self, caplog: pytest.LogCaptureFixture):
        """
        Given: ErrorCollector with an error added under a name
        When: report() is called
        Then: Logs the count, then the category, message and context
        """
        collector = ErrorCollector()
        collector.add(PermissionError("denied"), name='ensureBackupDirectory')

        with caplog.at_level(logging.ERROR, logger='common.error_handler'):
            collector.report()

        assert 'Collected 1 errors' in caplog.text
        assert '[storage] denied | name=ensureBackupDirectory' in caplog.text

    def test_errorCollector_reportEmpty_logsNothing(self, caplog: pytest.LogCaptureFixture):
        """
        Given: Empty ErrorCollector
        When: report() is called
        Then: Nothing is logged
        """
        with caplog.at_level(logging.DEBUG, logger='common.error_handler'):
            ErrorCollector().report()

        assert caplog.records == []

    def test_errorCollector_clear_removesAllErrors(self):
        """
        Given: ErrorCollector with errors
        When: clear() is called
        Then: hasErrors() is False
        """
        collector = ErrorCollector()
        collector.add(ValueError("one"))

        collector.clear()

        assert not collector.hasErrors()


class TestCustomExceptions:
    """Tests for BaseError subclasses."""

    def test_baseError_toDict_returnsCorrectStructure(self):
        """
        Given: DataError with details
        When: toDict() is called
        Then: Contains type, category, message and details
        """
        error = DataError("bad", details={'field': 'x'})

        result = error.toDict()

        assert result == {
            'type': 'DataError',
            'category': 'data',
            'message': 'bad',
            'details': {'field': 'x'},
        }


class TestErrorReporter:
    """Tests for ErrorReporter."""

    def test_reportError_recordsTagAndCategory(self):
        """
        Given: ErrorReporter
        When: An error is reported under a tag
        Then: History holds tag, type and category
        """
        reporter = ErrorReporter()

        reporter.reportError('startup-migration', StorageError("disk"))

        history = reporter.getHistory()
        assert len(history) == 1
        assert history[0]['tag'] == 'startup-migration'
        assert history[0]['type'] == 'StorageError'
        assert history[0]['category'] == 'storage'
        assert reporter.getTags() == ['startup-migration']

    def test_reportError_logsAtErrorLevel(self, caplog):
        """
        Given: ErrorReporter
        When: An error is reported
        Then: An ERROR record containing the tag is logged
        """
        reporter = ErrorReporter()

        with caplog.at_level(logging.ERROR, logger='common.error_handler'):
            reporter.reportError('reminder-startup', RuntimeError("boom"))

        assert any('tag=reminder-startup' in r.message for r in caplog.records)

    def test_reportError_historyBounded_dropsOldest(self):
        """
        Given: ErrorReporter with historySize=2
        When: Three errors are reported
        Then: Only the last two remain
        """
        reporter = ErrorReporter(historySize=2)

        for tag in ('a', 'b', 'c'):
            reporter.reportError(tag, RuntimeError(tag))

        assert reporter.getTags() == ['b', 'c']

    def test_reportError_listenerCalled_withTagAndError(self):
        """
        Given: ErrorReporter with a listener
        When: An error is reported
        Then: Listener receives tag and error
        """
        reporter = ErrorReporter()
        received = []
        reporter.addListener(lambda tag, error: received.append((tag, error)))
        error = RuntimeError("boom")

        reporter.reportError('x', error)

        assert received == [('x', error)]

    def test_reportError_listenerRaises_doesNotPropagate(self):
        """
        Given: ErrorReporter with a failing listener
        When: An error is reported
        Then: reportError() returns normally and history is kept
        """
        reporter = ErrorReporter()

        def badListener(tag, error):
            raise RuntimeError("listener broke")

        reporter.addListener(badListener)

        reporter.reportError('x', ValueError("original"))

        assert reporter.getTags() == ['x']

    def test_reportError_concurrentReports_allRecorded(self):
        """
        Given: ErrorReporter shared by several threads
        When: Each thread reports errors
        Then: Every report is in the history
        """
        reporter = ErrorReporter(historySize=100)

        def worker(index):
            for n in range(5):
                reporter.reportError(f"t{index}", RuntimeError(str(n)))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(reporter.getHistory()) == 20

    def test_clear_emptiesHistory(self):
        """
        Given: ErrorReporter with history
        When: clear() is called
        Then: History is empty
        """
        reporter = ErrorReporter()
        reporter.reportError('x', RuntimeError("y"))

        reporter.clear()

        assert reporter.getHistory() == []
