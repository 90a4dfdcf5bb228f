"""
Test suite for TallyAggregator

Ordering, zero-vote candidates, winners and the final-results flag.
"""

import os
import tempfile
import unittest
from datetime import timedelta

from database.db import ElectionDatabase
from database.services.tally import determine_outcomes
from database.models import TallyRow
from exceptions import NotFoundError
from tests.builders import make_candidate, make_club, make_election, make_position, make_user


class TestTally(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db = ElectionDatabase(db_path=os.path.join(self.tmpdir.name, "tally.db"))

        self.club = make_club(self.db)
        self.president = make_position(self.db, self.club, "President")
        self.secretary = make_position(self.db, self.club, "Secretary")
        self.election = make_election(self.db, self.club)

        # Created in this order: c1, c2, c3
        self.c1 = make_candidate(self.db, make_user(self.db, "cara"), self.election, self.president)
        self.c2 = make_candidate(self.db, make_user(self.db, "cole"), self.election, self.president)
        self.c3 = make_candidate(self.db, make_user(self.db, "cruz"), self.election, self.president)

        self.voters = [make_user(self.db, f"voter{i}") for i in range(6)]

    def tearDown(self):
        self.db.close()
        self.tmpdir.cleanup()

    def vote(self, voter, candidate):
        self.db.ledger.cast_vote(voter.id, candidate.id, self.election.id, candidate.position_id)

    def seed_tied_votes(self):
        """c1: 0, c2: 3, c3: 3 with c3's ballots cast first"""
        for voter in self.voters[:3]:
            self.vote(voter, self.c3)
        for voter in self.voters[3:]:
            self.vote(voter, self.c2)

    def test_tie_broken_by_candidate_creation_then_zero_last(self):
        self.seed_tied_votes()

        rows = self.db.tally.tally(self.election.id)

        self.assertEqual([r.candidate_id for r in rows], [self.c2.id, self.c3.id, self.c1.id])
        self.assertEqual([r.vote_count for r in rows], [3, 3, 0])

    def test_rows_carry_names(self):
        self.vote(self.voters[0], self.c1)

        row = self.db.tally.tally(self.election.id)[0]

        self.assertEqual(row.position_name, "President")
        self.assertEqual(row.candidate_name, "Test Cara")
        self.assertEqual(row.vote_count, 1)

    def test_zero_vote_candidates_listed(self):
        rows = self.db.tally.tally(self.election.id)

        self.assertEqual(len(rows), 3)
        self.assertTrue(all(r.vote_count == 0 for r in rows))

    def test_unapproved_candidates_listed_with_zero(self):
        pending = make_candidate(
            self.db, make_user(self.db, "pat"), self.election, self.president, approved=False
        )

        counts = {r.candidate_id: r.vote_count for r in self.db.tally.tally(self.election.id)}

        self.assertEqual(counts[pending.id], 0)

    def test_positions_in_creation_order(self):
        sec = make_candidate(self.db, make_user(self.db, "sam"), self.election, self.secretary)
        for voter in self.voters:
            self.vote(voter, sec)

        rows = self.db.tally.tally(self.election.id)

        self.assertEqual(
            [r.position_id for r in rows],
            [self.president.id] * 3 + [self.secretary.id],
        )

    def test_tally_is_idempotent(self):
        self.seed_tied_votes()

        first = self.db.tally.tally(self.election.id)
        second = self.db.tally.tally(self.election.id)

        self.assertEqual(first, second)
        self.assertEqual(self.db.ballots.get_ballot_count(), 6)

    def test_other_elections_do_not_leak(self):
        other = make_election(self.db, self.club, title="Autumn Election")
        rival = make_candidate(self.db, make_user(self.db, "otto"), other, self.president)
        self.db.ledger.cast_vote(self.voters[0].id, rival.id, other.id, self.president.id)

        rows = self.db.tally.tally(self.election.id)

        self.assertNotIn(rival.id, [r.candidate_id for r in rows])
        self.assertTrue(all(r.vote_count == 0 for r in rows))

    def test_winners_report_tie(self):
        self.seed_tied_votes()

        outcome = self.db.tally.winners(self.election.id)[0]

        self.assertTrue(outcome.is_tie)
        self.assertEqual([w.candidate_id for w in outcome.winners], [self.c2.id, self.c3.id])

    def test_results_not_final_while_live(self):
        self.seed_tied_votes()

        results = self.db.tally.results(self.election.id)

        self.assertFalse(results.final)
        self.assertEqual(len(results.tally), 3)

    def test_results_final_after_end_date(self):
        results = self.db.tally.results(self.election.id, now=self.election.end_date)
        self.assertTrue(results.final)

    def test_results_final_after_deactivation(self):
        self.db.elections.set_active(self.election.id, False)
        self.assertTrue(self.db.tally.results(self.election.id).final)

    def test_results_missing_election(self):
        with self.assertRaises(NotFoundError):
            self.db.tally.results("no-such-election")

    def test_results_before_end_then_after(self):
        """Live counts change; the final snapshot equals the last live count"""
        self.vote(self.voters[0], self.c1)
        live = self.db.tally.results(self.election.id)
        after = self.db.tally.results(self.election.id, now=self.election.end_date + timedelta(seconds=1))

        self.assertEqual(live.tally, after.tally)
        self.assertTrue(after.final)


def _row(position, candidate, count):
    return TallyRow(
        position_id=position,
        position_name=position.title(),
        candidate_id=candidate,
        candidate_user_id=f"user-{candidate}",
        candidate_name=candidate.title(),
        vote_count=count,
    )


class TestDetermineOutcomes:
    """Winner selection over an already ordered tally"""

    def test_single_leader(self):
        rows = [_row("president", "ann", 4), _row("president", "ben", 2)]
        outcome = determine_outcomes(rows)[0]
        assert [w.candidate_id for w in outcome.winners] == ["ann"]
        assert not outcome.is_tie

    def test_no_votes_means_no_winner(self):
        rows = [_row("president", "ann", 0), _row("president", "ben", 0)]
        outcome = determine_outcomes(rows)[0]
        assert outcome.winners == []
        assert not outcome.is_tie

    def test_one_outcome_per_position(self):
        rows = [
            _row("president", "ann", 1),
            _row("treasurer", "cat", 0),
            _row("treasurer", "dan", 2),
        ]
        outcomes = determine_outcomes(rows)
        assert [o.position_id for o in outcomes] == ["president", "treasurer"]
        assert [w.candidate_id for w in outcomes[1].winners] == ["dan"]

    def test_empty_tally(self):
        assert determine_outcomes([]) == []


if __name__ == "__main__":
    unittest.main()
