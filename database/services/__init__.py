"""
Database Services

Ballot rules and read-side views layered over the repositories.
"""

from database.services.completion import CompletionView
from database.services.ledger import BallotLedger
from database.services.tally import TallyAggregator

__all__ = ['BallotLedger', 'CompletionView', 'TallyAggregator']
