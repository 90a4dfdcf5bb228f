"""
Database transaction management

Provides context managers for explicit transaction control.

The connection runs in autocommit mode (isolation_level=None); multi-statement
work that must be atomic goes through transaction(), which holds the database
lock for its whole duration so no other thread can interleave statements on
the shared connection.
"""

import sqlite3
import threading
from contextlib import contextmanager

from config import get_logger
from exceptions import DatabaseConnectionError

logger = get_logger(__name__).bind(component="transaction")


@contextmanager
def transaction(conn: sqlite3.Connection, lock: threading.RLock, immediate: bool = True):
    """Context manager for database transactions

    Args:
        conn: SQLite connection object (autocommit mode)
        lock: Lock guarding the shared connection
        immediate: Take SQLite's write lock at BEGIN (BEGIN IMMEDIATE). Required
            for check-then-insert sequences so a second connection cannot slip
            a write between the check and the insert. Use False for read
            snapshots.

    Yields:
        The connection object (for convenience)

    Example:
        with transaction(db.conn, db.lock):
            if not db.ballots.has_voted(voter_id, election_id, position_id):
                db.ballots.insert_ballot(ballot)
            # Automatic commit on success, rollback on exception
    """
    with lock:
        try:
            conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
        except sqlite3.OperationalError as e:
            raise DatabaseConnectionError(f"Could not start transaction: {e}") from e
        try:
            yield conn
        except BaseException as e:
            conn.rollback()
            logger.warning("transaction rolled back", error=str(e), error_type=type(e).__name__)
            raise
        else:
            try:
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise
            logger.debug("transaction committed")
