"""
Base Repository for database operations

Provides shared connection, lock, and common utilities for all repositories.
"""

import sqlite3
import threading
import uuid
from typing import Optional

from exceptions import DatabaseConnectionError, DatabaseError, DataIntegrityError


def new_id() -> str:
    """Random UUID primary key"""
    return str(uuid.uuid4())


class BaseRepository:
    """Base class for all repositories with shared connection

    Every statement runs under the database lock: the connection is shared by
    the request threadpool, and an RLock lets repository calls nest inside an
    open transaction() on the same thread.
    """

    def __init__(self, conn: Optional[sqlite3.Connection] = None, lock: Optional[threading.RLock] = None):
        """
        Initialize repository with database connection

        Args:
            conn: SQLite connection (shared across all repositories)
            lock: Lock serializing access to conn
        """
        self.conn = conn
        self.lock = lock or threading.RLock()

    def _execute(self, query: str, params: tuple = ()) -> sqlite3.Cursor:
        """
        Execute SQL query with parameters

        Args:
            query: SQL query string
            params: Query parameters

        Returns:
            Cursor with results

        Raises:
            DatabaseConnectionError: If connection not established or the database stays locked
            DataIntegrityError: If a constraint rejects the statement
            DatabaseError: If query execution fails
        """
        if self.conn is None:
            raise DatabaseConnectionError("Database connection not established")

        with self.lock:
            try:
                cursor = self.conn.cursor()
                cursor.execute(query, params)
                return cursor
            except sqlite3.IntegrityError as e:
                raise DataIntegrityError(f"Constraint violation: {e}", constraint=str(e))
            except sqlite3.OperationalError as e:
                if "locked" in str(e) or "busy" in str(e):
                    raise DatabaseConnectionError(f"Database busy: {e}", context={'query': query[:100]})
                raise DatabaseError(f"Query execution failed: {e}", context={'query': query[:100]})
            except sqlite3.Error as e:
                raise DatabaseError(f"Query execution failed: {e}", context={'query': query[:100]})

    def _fetch_one(self, query: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        """
        Execute query and fetch one result

        Args:
            query: SQL query string
            params: Query parameters

        Returns:
            Single row or None
        """
        with self.lock:
            cursor = self._execute(query, params)
            return cursor.fetchone()

    def _fetch_all(self, query: str, params: tuple = ()) -> list[sqlite3.Row]:
        """
        Execute query and fetch all results

        Args:
            query: SQL query string
            params: Query parameters

        Returns:
            List of rows
        """
        with self.lock:
            cursor = self._execute(query, params)
            return cursor.fetchall()

    def _count(self, query: str, params: tuple = ()) -> int:
        """Run a single-column COUNT query"""
        row = self._fetch_one(query, params)
        return row[0] if row else 0
