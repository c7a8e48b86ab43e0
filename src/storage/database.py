################################################################################
# File Name: database.py
# Purpose/Description: SQLite storage engine for task data
# Author: Michael Cornelison
# Creation Date: 2026-01-22
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Task/alarm schema, openForWriting, cleanup and
#               |              | pending alarm queries for startup
# ================================================================================
################################################################################

"""
SQLite storage engine for the Tasklight application.

Provides:
- Schema creation with IF NOT EXISTS for idempotent setup
- WAL mode configuration
- Connection management with context managers
- Startup cleanup of empty tasks and orphaned rows
- Queries used to recompute pending reminders and alarms

Tables:
- tasks: task rows with optional due and reminder times (epoch seconds)
- alarms: additional alarm times attached to a task
- metadata: free-form key/value rows attached to a task

Usage:
    from storage.database import AppDatabase

    db = AppDatabase('./data/tasklight.db')
    db.openForWriting()
    with db.connect() as conn:
        conn.execute('SELECT * FROM tasks')
"""

import logging
import os
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from .exceptions import DatabaseConnectionError, DatabaseInitializationError

logger = logging.getLogger(__name__)


# ================================================================================
# Schema Definitions
# ================================================================================

SCHEMA_TASKS = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT,
    notes TEXT,
    importance INTEGER NOT NULL DEFAULT 2,
    due_at INTEGER NOT NULL DEFAULT 0,
    reminder_at INTEGER NOT NULL DEFAULT 0,
    completed_at INTEGER NOT NULL DEFAULT 0,
    deleted_at INTEGER NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

SCHEMA_ALARMS = """
CREATE TABLE IF NOT EXISTS alarms (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    task_id INTEGER NOT NULL,
    fire_at INTEGER NOT NULL,
    CONSTRAINT FK_alarms_task FOREIGN KEY (task_id)
        REFERENCES tasks(id)
        ON DELETE CASCADE
);
"""

SCHEMA_METADATA = """
CREATE TABLE IF NOT EXISTS metadata (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    task_id INTEGER NOT NULL,
    key TEXT NOT NULL,
    value TEXT,
    CONSTRAINT FK_metadata_task FOREIGN KEY (task_id)
        REFERENCES tasks(id)
        ON DELETE CASCADE
);
"""

INDEX_TASKS_REMINDER = """
CREATE INDEX IF NOT EXISTS IX_tasks_reminder_at ON tasks(reminder_at);
"""

INDEX_ALARMS_FIRE_AT = """
CREATE INDEX IF NOT EXISTS IX_alarms_fire_at ON alarms(fire_at);
"""

INDEX_METADATA_TASK = """
CREATE INDEX IF NOT EXISTS IX_metadata_task ON metadata(task_id, key);
"""

ALL_SCHEMAS = [
    ('tasks', SCHEMA_TASKS),
    ('alarms', SCHEMA_ALARMS),
    ('metadata', SCHEMA_METADATA),
]

ALL_INDEXES = [
    ('IX_tasks_reminder_at', INDEX_TASKS_REMINDER),
    ('IX_alarms_fire_at', INDEX_ALARMS_FIRE_AT),
    ('IX_metadata_task', INDEX_METADATA_TASK),
]

# Rows removed by cleanup(): tasks without a title, then rows whose task is gone
CLEANUP_STATEMENTS = [
    ('emptyTasks', "DELETE FROM tasks WHERE title IS NULL OR trim(title) = ''"),
    ('orphanAlarms', "DELETE FROM alarms WHERE task_id NOT IN (SELECT id FROM tasks)"),
    ('orphanMetadata', "DELETE FROM metadata WHERE task_id NOT IN (SELECT id FROM tasks)"),
]


# ================================================================================
# Database Class
# ================================================================================

class AppDatabase:
    """
    SQLite storage engine for task data.

    Attributes:
        dbPath: Path to the SQLite database file
        walMode: Whether to use WAL (Write-Ahead Logging) mode

    Example:
        db = AppDatabase('./data/tasklight.db')
        db.openForWriting()
        removed = db.cleanup()
    """

    def __init__(self, dbPath: str | Path, walMode: bool = True):
        """
        Initialize database manager.

        Args:
            dbPath: Path to the SQLite database file
            walMode: Enable WAL mode for better concurrency (default: True)
        """
        self.dbPath = str(dbPath)
        self.walMode = walMode
        self._open = False

    def getName(self) -> str:
        """Get the database file name (without directory)."""
        return os.path.basename(self.dbPath)

    def exists(self) -> bool:
        """Check whether the database file exists on disk."""
        return os.path.exists(self.dbPath)

    def isOpen(self) -> bool:
        """Check whether openForWriting() has completed."""
        return self._open

    @contextmanager
    def connect(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for database connections.

        Commits on success, rolls back on error.

        Yields:
            sqlite3.Connection: Database connection

        Raises:
            DatabaseConnectionError: If connection or a statement fails
        """
        conn = None
        try:
            conn = self._getConnection()
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            raise DatabaseConnectionError(
                f"Database connection error: {e}",
                details={'path': self.dbPath, 'error': str(e)}
            ) from e
        finally:
            if conn:
                conn.close()

    def _getConnection(self) -> sqlite3.Connection:
        try:
            dbDir = os.path.dirname(self.dbPath)
            if dbDir:
                Path(dbDir).mkdir(parents=True, exist_ok=True)

            conn = sqlite3.connect(self.dbPath, timeout=30.0)
            conn.row_factory = sqlite3.Row
            conn.execute('PRAGMA foreign_keys = ON')

            if self.walMode:
                conn.execute('PRAGMA journal_mode = WAL')
                conn.execute('PRAGMA synchronous = NORMAL')

            return conn

        except sqlite3.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to database: {e}",
                details={'path': self.dbPath, 'error': str(e)}
            ) from e

    def openForWriting(self) -> None:
        """
        Open the database for writing, creating the schema if needed.

        Safe to call multiple times.

        Raises:
            DatabaseInitializationError: If schema creation fails
        """
        logger.info(f"Opening database for writing | path={self.dbPath}")

        try:
            with self.connect() as conn:
                for tableName, schema in ALL_SCHEMAS:
                    logger.debug(f"Creating table: {tableName}")
                    conn.execute(schema)

                for indexName, indexSql in ALL_INDEXES:
                    logger.debug(f"Creating index: {indexName}")
                    conn.execute(indexSql)

        except DatabaseConnectionError as e:
            raise DatabaseInitializationError(
                f"Failed to open database: {e.message}",
                details=e.details
            ) from e

        self._open = True
        logger.info("Database open")

    def cleanup(self) -> dict[str, int]:
        """
        Remove untitled tasks and rows orphaned by deleted tasks.

        Returns:
            Number of rows removed per cleanup statement

        Raises:
            DatabaseConnectionError: If a statement fails
        """
        removed: dict[str, int] = {}

        with self.connect() as conn:
            for name, statement in CLEANUP_STATEMENTS:
                cursor = conn.execute(statement)
                removed[name] = cursor.rowcount

            conn.execute('PRAGMA optimize')

        logger.info(
            "Database cleanup complete | "
            + ' '.join(f"{k}={v}" for k, v in removed.items())
        )
        return removed

    # ================================================================================
    # Queries
    # ================================================================================

    def getPendingReminders(self, now: datetime | None = None) -> list[tuple[int, datetime]]:
        """
        Get future reminder times of open tasks.

        Args:
            now: Reference time (defaults to now)

        Returns:
            List of (taskId, reminderTime) ordered by time
        """
        nowTs = int((now or datetime.now()).timestamp())
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT id, reminder_at FROM tasks "
                "WHERE reminder_at > ? AND completed_at = 0 AND deleted_at = 0 "
                "ORDER BY reminder_at",
                (nowTs,)
            ).fetchall()

        return [(row['id'], datetime.fromtimestamp(row['reminder_at'])) for row in rows]

    def getPendingAlarms(self, now: datetime | None = None) -> list[tuple[int, datetime]]:
        """
        Get future alarm times attached to open tasks.

        Args:
            now: Reference time (defaults to now)

        Returns:
            List of (alarmId, fireTime) ordered by time
        """
        nowTs = int((now or datetime.now()).timestamp())
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT a.id, a.fire_at FROM alarms a "
                "JOIN tasks t ON t.id = a.task_id "
                "WHERE a.fire_at > ? AND t.completed_at = 0 AND t.deleted_at = 0 "
                "ORDER BY a.fire_at",
                (nowTs,)
            ).fetchall()

        return [(row['id'], datetime.fromtimestamp(row['fire_at'])) for row in rows]

    def getTableNames(self) -> list[str]:
        """Get list of all user tables in the database."""
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            ).fetchall()
            return [row[0] for row in rows]

    def getColumnNames(self, tableName: str) -> list[str]:
        """Get the column names of a table (empty if the table is missing)."""
        with self.connect() as conn:
            rows = conn.execute(f"PRAGMA table_info({tableName})").fetchall()
            return [row['name'] for row in rows]

    def addColumnIfMissing(self, tableName: str, columnName: str, declaration: str) -> bool:
        """
        Add a column to a table unless it already exists.

        Args:
            tableName: Table to alter
            columnName: New column name
            declaration: Column type and constraints, e.g. "TEXT DEFAULT ''"

        Returns:
            True if the column was added
        """
        if columnName in self.getColumnNames(tableName):
            return False

        with self.connect() as conn:
            conn.execute(f"ALTER TABLE {tableName} ADD COLUMN {columnName} {declaration}")

        logger.info(f"Added column | table={tableName} column={columnName}")
        return True

    def getStats(self) -> dict[str, Any]:
        """
        Get database statistics.

        Returns:
            Dictionary with file_size_bytes and table_counts
        """
        stats: dict[str, Any] = {'file_size_bytes': 0, 'table_counts': {}}

        if os.path.exists(self.dbPath):
            stats['file_size_bytes'] = os.path.getsize(self.dbPath)

        with self.connect() as conn:
            for tableName, _ in ALL_SCHEMAS:
                try:
                    count = conn.execute(f'SELECT COUNT(*) FROM {tableName}').fetchone()[0]
                    stats['table_counts'][tableName] = count
                except sqlite3.Error:
                    stats['table_counts'][tableName] = -1

        return stats
