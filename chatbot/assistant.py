"""
Chatbot matching

respond() is a pure function of (message, config): no conversation state is
kept between calls, so it is safe to share across request threads.
"""

from dataclasses import dataclass
from typing import List, Optional

from chatbot.rules import DEFAULT_CONFIG, Answer, ChatConfig


@dataclass(frozen=True)
class ChatReply:
    response: str
    suggestions: Optional[List[str]] = None

    def to_dict(self) -> dict:
        data = {"response": self.response}
        if self.suggestions is not None:
            data["suggestions"] = list(self.suggestions)
        return data


def _reply(answer: Answer) -> ChatReply:
    return ChatReply(answer.response, list(answer.suggestions) if answer.suggestions else None)


def respond(message: str, config: ChatConfig = DEFAULT_CONFIG) -> ChatReply:
    """Answer one message

    Resolution order:
    1. Exact topic key (after lowercasing and trimming)
    2. First rule whose pattern matches; a rule naming a topic returns that topic
    3. The fallback answer
    """
    normalized = message.lower().strip()

    if normalized in config.topics:
        return _reply(config.topics[normalized])

    for rule in config.rules:
        if rule.pattern.search(normalized):
            if rule.response in config.topics:
                return _reply(config.topics[rule.response])
            return ChatReply(
                rule.response,
                list(rule.suggestions) if rule.suggestions else None,
            )

    return _reply(config.fallback)


def welcome(config: ChatConfig = DEFAULT_CONFIG) -> ChatReply:
    return _reply(config.welcome)
