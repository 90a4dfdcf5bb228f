"""
Chatbot Rule Table

Immutable configuration for the assistant: canned answers keyed by topic,
and an ordered tuple of regex rules. A rule either points at a topic key or
carries its own literal reply. Order matters: the first matching rule wins.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Pattern, Tuple


@dataclass(frozen=True)
class Answer:
    response: str
    suggestions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Rule:
    pattern: Pattern
    response: str
    suggestions: Optional[Tuple[str, ...]] = None

    @classmethod
    def compile(cls, pattern: str, response: str, suggestions: Optional[Tuple[str, ...]] = None) -> 'Rule':
        return cls(re.compile(pattern, re.IGNORECASE), response, suggestions)


@dataclass(frozen=True)
class ChatConfig:
    topics: Mapping[str, Answer]
    rules: Tuple[Rule, ...]
    fallback: Answer
    welcome: Answer = field(default_factory=lambda: Answer(""))


TOPICS = MappingProxyType({
    "how to vote": Answer(
        "To vote in SecureVote: 1) Log in to your account, 2) View active elections on "
        "your dashboard, 3) Click 'Vote Now' on any election, 4) Select a candidate for "
        "each position, 5) Submit your vote. You can only vote once per position per election.",
        ("What elections are active?", "Can I change my vote?", "Who can vote?"),
    ),
    "active elections": Answer(
        "You can view all active elections on your dashboard. Active elections are shown "
        "with their end dates and your voting progress. Elections remain open until their "
        "end date passes or an administrator closes them.",
        ("How to vote", "Election results", "Candidate information"),
    ),
    "voting eligibility": Answer(
        "All registered students can vote in elections. You need to create an account with "
        "your college email to participate. Admin users can manage elections but also vote "
        "as students.",
        ("How to register", "Student verification", "Role differences"),
    ),
    "election results": Answer(
        "Election results are calculated from the recorded ballots. Admins can view live "
        "counts during an election. Final results are available once the election end "
        "date has passed.",
        ("Live vote counts", "Result publication", "Winner declaration"),
    ),
    "candidate registration": Answer(
        "Students can register as candidates for specific positions. Candidate registration "
        "requires admin approval. Once approved, candidates appear on the ballot for their "
        "registered positions.",
        ("How to become candidate", "Candidate approval", "Campaign guidelines"),
    ),
    "security measures": Answer(
        "SecureVote protects elections through hashed passwords, session-based "
        "authentication, one vote per person per position enforced by the database, and "
        "ballots that cannot be edited once recorded. Ballots are linked to your account "
        "so that duplicate votes can be rejected.",
        ("Vote privacy", "Data protection", "Authentication methods"),
    ),
    "technical issues": Answer(
        "If you experience technical issues: 1) Refresh your browser, 2) Clear browser "
        "cache, 3) Try a different browser, 4) Check your internet connection, 5) Contact "
        "system administrators if problems persist.",
        ("Login problems", "Voting errors", "Browser compatibility"),
    ),
    "election timeline": Answer(
        "Elections have specific start and end dates set by administrators. You can only "
        "vote while an election is active. Check the dashboard for election deadlines and "
        "plan accordingly.",
        ("Election schedule", "Voting deadline", "Important dates"),
    ),
})

RULES = (
    # Voting
    Rule.compile(r"how.*vote|voting.*process|cast.*vote", "how to vote"),
    Rule.compile(r"active.*election|current.*election|ongoing.*election", "active elections"),
    Rule.compile(r"who.*vote|eligibility|qualified.*vote", "voting eligibility"),
    Rule.compile(r"result|winner|outcome|who.*won", "election results"),
    # Candidates
    Rule.compile(r"candidate.*register|become.*candidate|run.*election", "candidate registration"),
    # Security
    Rule.compile(r"secure|security|safe|privacy|anonymous", "security measures"),
    # Technical
    Rule.compile(r"problem|error|issue|not.*work|technical", "technical issues"),
    # Timeline
    Rule.compile(r"when.*election|deadline|schedule|timeline|end.*date", "election timeline"),
    # Greetings
    Rule.compile(
        r"hello|hi|hey|good.*morning|good.*afternoon|good.*evening",
        "Hello! I'm your SecureVote assistant. I can help you with questions about voting, "
        "elections, candidates, and system features. What would you like to know?",
        ("How to vote", "Active elections", "Security measures"),
    ),
    # Help
    Rule.compile(
        r"help|assist|support|what.*you.*do",
        "I can help you with: voting procedures, election information, candidate details, "
        "security features, technical support, and general questions about SecureVote. "
        "What specific topic interests you?",
        ("Voting process", "Election results", "Technical issues"),
    ),
    # Thanks
    Rule.compile(
        r"thank|thanks|appreciate",
        "You're welcome! Feel free to ask if you have any other questions about the voting "
        "system. Happy voting!",
    ),
)

DEFAULT_CONFIG = ChatConfig(
    topics=TOPICS,
    rules=RULES,
    fallback=Answer(
        "I'm here to help with voting and election questions. Could you please rephrase "
        "your question or try asking about: voting procedures, active elections, candidate "
        "information, or technical support?",
        ("How to vote", "Active elections", "Security measures", "Technical help"),
    ),
    welcome=Answer(
        "Welcome to SecureVote! I'm your voting assistant. I can help you with voting "
        "procedures, election information, candidate details, and answer any questions "
        "about the voting system. How can I assist you today?",
        ("How do I vote?", "What elections are active?", "Is voting secure?", "Technical support"),
    ),
)
