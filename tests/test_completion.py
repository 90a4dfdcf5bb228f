"""
Test suite for CompletionView

Voter progress through an election's positions.
"""

import os
import tempfile
import unittest

from database.db import ElectionDatabase
from database.models import CompletionStatus
from database.services.completion import compute_status
from exceptions import NotFoundError
from tests.builders import make_candidate, make_club, make_election, make_position, make_user


class TestCompletionView(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db = ElectionDatabase(db_path=os.path.join(self.tmpdir.name, "completion.db"))

        self.club = make_club(self.db)
        self.positions = [make_position(self.db, self.club, name) for name in ("President", "Secretary", "Treasurer")]
        self.election = make_election(self.db, self.club)
        self.candidates = [
            make_candidate(self.db, make_user(self.db, f"cand{i}"), self.election, position)
            for i, position in enumerate(self.positions)
        ]
        self.voter = make_user(self.db, "voter")

    def tearDown(self):
        self.db.close()
        self.tmpdir.cleanup()

    def status(self):
        return self.db.completion.completion_status(self.voter.id, self.election.id)

    def test_transitions_not_started_partial_completed(self):
        self.assertEqual(self.status(), CompletionStatus.NOT_STARTED)

        observed = []
        for candidate in self.candidates:
            self.db.ledger.cast_vote(self.voter.id, candidate.id, self.election.id, candidate.position_id)
            observed.append(self.status())

        self.assertEqual(
            observed,
            [CompletionStatus.PARTIAL, CompletionStatus.PARTIAL, CompletionStatus.COMPLETED],
        )

    def test_progress_voted_map(self):
        first = self.candidates[0]
        self.db.ledger.cast_vote(self.voter.id, first.id, self.election.id, first.position_id)

        progress = self.db.completion.progress(self.voter.id, self.election.id)

        self.assertEqual(
            progress.voted,
            {self.positions[0].id: True, self.positions[1].id: False, self.positions[2].id: False},
        )
        self.assertEqual(progress.to_dict()["status"], "Partial")

    def test_status_is_idempotent(self):
        first = self.candidates[0]
        self.db.ledger.cast_vote(self.voter.id, first.id, self.election.id, first.position_id)

        self.assertEqual(self.status(), self.status())

    def test_club_without_positions_not_started(self):
        empty_club = make_club(self.db, "Debate Society")
        empty_election = make_election(self.db, empty_club)

        status = self.db.completion.completion_status(self.voter.id, empty_election.id)

        self.assertEqual(status, CompletionStatus.NOT_STARTED)

    def test_votes_in_other_election_ignored(self):
        other = make_election(self.db, self.club, title="By-election")
        candidate = make_candidate(self.db, make_user(self.db, "other"), other, self.positions[0])
        self.db.ledger.cast_vote(self.voter.id, candidate.id, other.id, self.positions[0].id)

        self.assertEqual(self.status(), CompletionStatus.NOT_STARTED)

    def test_missing_election(self):
        with self.assertRaises(NotFoundError):
            self.db.completion.completion_status(self.voter.id, "no-such-election")


class TestComputeStatus:

    def test_none_voted(self):
        assert compute_status(["a", "b"], set()) == CompletionStatus.NOT_STARTED

    def test_some_voted(self):
        assert compute_status(["a", "b"], {"a"}) == CompletionStatus.PARTIAL

    def test_all_voted(self):
        assert compute_status(["a", "b"], {"a", "b"}) == CompletionStatus.COMPLETED

    def test_voted_outside_position_set_ignored(self):
        assert compute_status(["a", "b"], {"z"}) == CompletionStatus.NOT_STARTED

    def test_no_positions(self):
        assert compute_status([], set()) == CompletionStatus.NOT_STARTED


if __name__ == "__main__":
    unittest.main()
