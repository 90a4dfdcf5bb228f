"""
Test suite for the SQLite repositories

Constraint handling, ordering and the few mutations the schema allows.
"""

import os
import tempfile
import unittest
from datetime import timedelta

from database.db import ElectionDatabase
from database.models import Ballot, Role, utcnow
from database.repositories.base import new_id
from exceptions import ConflictError, DataIntegrityError
from tests.builders import make_candidate, make_club, make_election, make_position, make_user


class RepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db = ElectionDatabase(db_path=os.path.join(self.tmpdir.name, "repos.db"))
        self.club = make_club(self.db)
        self.position = make_position(self.db, self.club, "President")

    def tearDown(self):
        self.db.close()
        self.tmpdir.cleanup()


class TestUserRepository(RepositoryTestCase):

    def test_duplicate_username_conflicts(self):
        make_user(self.db, "alice")
        with self.assertRaises(ConflictError):
            make_user(self.db, "alice")

    def test_email_stored_lowercase(self):
        user = make_user(self.db, "Bob")
        self.assertEqual(user.email, "bob@college.edu")
        stored = self.db.users.get_user_by_email(user.email.upper())
        self.assertEqual(stored.id, user.id)

    def test_set_role(self):
        user = make_user(self.db, "carl")
        updated = self.db.users.set_role(user.id, Role.ADMIN)
        self.assertEqual(updated.role, Role.ADMIN)

    def test_to_dict_hides_password_hash(self):
        user = make_user(self.db, "dina")
        self.assertNotIn("password_hash", user.to_dict())


class TestElectionRepository(RepositoryTestCase):

    def test_live_elections_exclude_closed(self):
        live = make_election(self.db, self.club, title="Live")
        make_election(self.db, self.club, title="Expired", ends_in=timedelta(hours=-1))
        make_election(self.db, self.club, title="Inactive", is_active=False)

        ids = [e.id for e in self.db.elections.get_live_elections()]

        self.assertEqual(ids, [live.id])
        self.assertEqual(self.db.elections.count_live_elections(), 1)

    def test_live_elections_soonest_closing_first(self):
        later = make_election(self.db, self.club, title="Later", ends_in=timedelta(days=10))
        sooner = make_election(self.db, self.club, title="Sooner", ends_in=timedelta(days=2))

        ids = [e.id for e in self.db.elections.get_live_elections()]

        self.assertEqual(ids, [sooner.id, later.id])

    def test_set_active_round_trip(self):
        election = make_election(self.db, self.club)
        self.assertFalse(self.db.elections.set_active(election.id, False).is_active)
        self.assertTrue(self.db.elections.set_active(election.id, True).is_active)

    def test_timestamps_are_utc(self):
        election = make_election(self.db, self.club)
        stored = self.db.elections.get_election(election.id)
        self.assertEqual(stored.end_date, election.end_date)
        self.assertEqual(stored.end_date.utcoffset(), timedelta(0))


class TestCandidateRepository(RepositoryTestCase):

    def setUp(self):
        super().setUp()
        self.election = make_election(self.db, self.club)
        self.user = make_user(self.db, "erin")

    def test_duplicate_candidacy_conflicts(self):
        make_candidate(self.db, self.user, self.election, self.position, approved=False)
        with self.assertRaises(ConflictError):
            make_candidate(self.db, self.user, self.election, self.position, approved=False)

    def test_approval_is_one_way_and_idempotent(self):
        candidate = make_candidate(self.db, self.user, self.election, self.position, approved=False)
        self.assertFalse(candidate.is_approved)

        first = self.db.candidates.approve_candidate(candidate.id)
        second = self.db.candidates.approve_candidate(candidate.id)

        self.assertTrue(first.is_approved)
        self.assertTrue(second.is_approved)
        self.assertEqual(self.db.candidates.get_pending_candidates(), [])

    def test_roster_only_approved_with_details(self):
        approved = make_candidate(self.db, self.user, self.election, self.position)
        make_candidate(self.db, make_user(self.db, "fred"), self.election, self.position, approved=False)

        roster = self.db.candidates.get_roster(self.election.id)

        self.assertEqual([c["id"] for c in roster], [approved.id])
        self.assertEqual(roster[0]["user"]["username"], "erin")
        self.assertEqual(roster[0]["position"]["name"], "President")

    def test_approve_missing_candidate_returns_none(self):
        self.assertIsNone(self.db.candidates.approve_candidate("missing"))


class TestBallotRepository(RepositoryTestCase):

    def test_unique_triple_enforced_by_schema(self):
        """The constraint holds even when the ledger is bypassed"""
        election = make_election(self.db, self.club)
        voter = make_user(self.db, "gail")
        candidate = make_candidate(self.db, make_user(self.db, "hank"), election, self.position)

        def ballot():
            return Ballot(
                id=new_id(),
                voter_id=voter.id,
                candidate_id=candidate.id,
                election_id=election.id,
                position_id=self.position.id,
                created_at=utcnow(),
            )

        self.db.ballots.insert_ballot(ballot())
        with self.assertRaises(DataIntegrityError):
            self.db.ballots.insert_ballot(ballot())

        self.assertEqual(self.db.ballots.get_ballot_count(), 1)


class TestDatabaseStats(RepositoryTestCase):

    def test_stats_counts(self):
        election = make_election(self.db, self.club)
        voter = make_user(self.db, "ivy")
        candidate = make_candidate(self.db, make_user(self.db, "jon"), election, self.position)
        self.db.ledger.cast_vote(voter.id, candidate.id, election.id, self.position.id)

        self.assertEqual(
            self.db.get_stats(),
            {"total_votes": 1, "total_users": 2, "active_elections": 1, "total_candidates": 1},
        )


if __name__ == "__main__":
    unittest.main()
