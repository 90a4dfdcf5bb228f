"""
Tests for the scripted assistant
"""

from chatbot import DEFAULT_CONFIG, ChatConfig, Rule, respond, welcome
from chatbot.rules import Answer, TOPICS


class TestRespond:

    def test_exact_topic_key(self):
        reply = respond("  How To Vote ")
        assert reply.response == TOPICS["how to vote"].response
        assert reply.suggestions == list(TOPICS["how to vote"].suggestions)

    def test_pattern_resolves_to_topic(self):
        reply = respond("Is voting secure?")
        assert reply.response == TOPICS["security measures"].response

    def test_first_matching_rule_wins(self):
        # Matches both the voting and the timeline rules
        reply = respond("how do I vote before the deadline")
        assert reply.response == TOPICS["how to vote"].response

    def test_literal_rule_response(self):
        reply = respond("hello there")
        assert reply.response.startswith("Hello!")
        assert reply.suggestions == ["How to vote", "Active elections", "Security measures"]

    def test_literal_rule_without_suggestions(self):
        reply = respond("thank you")
        assert reply.response.startswith("You're welcome")
        assert reply.suggestions is None
        assert "suggestions" not in reply.to_dict()

    def test_fallback(self):
        reply = respond("qwerty")
        assert reply.response == DEFAULT_CONFIG.fallback.response
        assert len(reply.suggestions) == 4

    def test_stateless(self):
        assert respond("who won?") == respond("who won?")

    def test_injected_config(self):
        config = ChatConfig(
            topics={"ping": Answer("pong", ("again",))},
            rules=(Rule.compile(r"marco", "polo"),),
            fallback=Answer("?"),
        )
        assert respond("ping", config).response == "pong"
        assert respond("MARCO!", config).response == "polo"
        assert respond("hello", config).response == "?"


class TestWelcome:

    def test_welcome_message(self):
        reply = welcome()
        assert reply.response.startswith("Welcome to SecureVote")
        assert "How do I vote?" in reply.suggestions
