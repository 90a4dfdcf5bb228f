"""
Election Database for SecureVote - Repository Pattern

Single SQLite database with a facade that wires focused repositories
and the ballot services together:
- UserRepository: Accounts
- ClubRepository: Clubs and positions
- ElectionRepository: Elections
- CandidateRepository: Candidacies
- BallotRepository: Append-only ballots
- BallotLedger / TallyAggregator / CompletionView: vote integrity and read-side views
"""

import sqlite3
import threading
from pathlib import Path
from typing import Optional

from config import config, get_logger
from database.repositories.ballots import BallotRepository
from database.repositories.candidates import CandidateRepository
from database.repositories.clubs import ClubRepository
from database.repositories.elections import ElectionRepository
from database.repositories.users import UserRepository
from database.services.completion import CompletionView
from database.services.ledger import BallotLedger
from database.services.tally import TallyAggregator
from exceptions import DatabaseConnectionError

logger = get_logger(__name__).bind(component="database")


SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    username TEXT UNIQUE NOT NULL,
    email TEXT UNIQUE NOT NULL,
    password_hash TEXT NOT NULL,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    role TEXT NOT NULL DEFAULT 'student' CHECK (role IN ('student', 'candidate', 'admin')),
    is_verified BOOLEAN NOT NULL DEFAULT FALSE,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS clubs (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    icon TEXT NOT NULL DEFAULT 'fas fa-users',
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS positions (
    id TEXT PRIMARY KEY,
    club_id TEXT NOT NULL,
    name TEXT NOT NULL,
    description TEXT,
    created_at TEXT NOT NULL,
    FOREIGN KEY (club_id) REFERENCES clubs(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS elections (
    id TEXT PRIMARY KEY,
    club_id TEXT NOT NULL,
    title TEXT NOT NULL,
    description TEXT,
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    created_at TEXT NOT NULL,
    FOREIGN KEY (club_id) REFERENCES clubs(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS candidates (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    election_id TEXT NOT NULL,
    position_id TEXT NOT NULL,
    manifesto TEXT,
    is_approved BOOLEAN NOT NULL DEFAULT FALSE,
    created_at TEXT NOT NULL,
    UNIQUE (user_id, election_id, position_id),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
    FOREIGN KEY (election_id) REFERENCES elections(id) ON DELETE CASCADE,
    FOREIGN KEY (position_id) REFERENCES positions(id) ON DELETE CASCADE
);

-- One ballot per voter per position per election
CREATE TABLE IF NOT EXISTS ballots (
    id TEXT PRIMARY KEY,
    voter_id TEXT NOT NULL,
    candidate_id TEXT NOT NULL,
    election_id TEXT NOT NULL,
    position_id TEXT NOT NULL,
    created_at TEXT NOT NULL,
    UNIQUE (voter_id, election_id, position_id),
    FOREIGN KEY (voter_id) REFERENCES users(id) ON DELETE CASCADE,
    FOREIGN KEY (candidate_id) REFERENCES candidates(id) ON DELETE CASCADE,
    FOREIGN KEY (election_id) REFERENCES elections(id) ON DELETE CASCADE,
    FOREIGN KEY (position_id) REFERENCES positions(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_positions_club ON positions(club_id);
CREATE INDEX IF NOT EXISTS idx_elections_club ON elections(club_id);
CREATE INDEX IF NOT EXISTS idx_elections_live ON elections(is_active, end_date);
CREATE INDEX IF NOT EXISTS idx_candidates_election ON candidates(election_id, is_approved);
CREATE INDEX IF NOT EXISTS idx_ballots_candidate ON ballots(candidate_id);
CREATE INDEX IF NOT EXISTS idx_ballots_election ON ballots(election_id, position_id);
"""


class ElectionDatabase:
    """
    Single database interface for all SecureVote data.
    Delegates to focused repositories and services.

    Threading Model:
    - One SQLite connection per instance, shared by the request threadpool
    - self.lock serializes every statement on that connection
    - Write transactions use BEGIN IMMEDIATE, so separate instances (or
      processes) on the same file are serialized by SQLite's write lock
    """

    conn: sqlite3.Connection

    def __init__(self, db_path: Optional[str] = None, busy_timeout: Optional[float] = None):
        self.db_path = db_path or config.DB_PATH
        self.busy_timeout = config.DB_BUSY_TIMEOUT if busy_timeout is None else busy_timeout
        self.lock = threading.RLock()
        self._connect()
        self._init_schema()

        self.users = UserRepository(self.conn, self.lock)
        self.clubs = ClubRepository(self.conn, self.lock)
        self.elections = ElectionRepository(self.conn, self.lock)
        self.candidates = CandidateRepository(self.conn, self.lock)
        self.ballots = BallotRepository(self.conn, self.lock)

        self.ledger = BallotLedger(self)
        self.tally = TallyAggregator(self)
        self.completion = CompletionView(self)

        logger.info("initialized election database", db_path=self.db_path)

    def _connect(self):
        """Create database connection

        isolation_level=None puts the connection in autocommit mode;
        multi-statement atomicity is explicit via database.transaction.
        """
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(
            self.db_path,
            check_same_thread=False,
            timeout=self.busy_timeout,
            isolation_level=None,
        )
        self.conn.row_factory = sqlite3.Row

        if self.db_path != ":memory:":
            self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA synchronous=NORMAL")
        self.conn.execute("PRAGMA foreign_keys=ON")

    def _init_schema(self):
        if self.conn is None:
            raise DatabaseConnectionError("Database connection not established")

        with self.lock:
            self.conn.executescript(SCHEMA)

    def get_stats(self) -> dict:
        """Admin dashboard counters"""
        return {
            "total_votes": self.ballots.get_ballot_count(),
            "total_users": self.users.get_user_count(),
            "active_elections": self.elections.count_live_elections(),
            "total_candidates": self.candidates.get_candidate_count(),
        }

    def close(self):
        """Close database connection"""
        with self.lock:
            if self.conn:
                self.conn.close()
                logger.info("database connection closed")
