"""Scripted FAQ assistant"""

from chatbot.assistant import ChatReply, respond, welcome
from chatbot.rules import DEFAULT_CONFIG, ChatConfig, Rule

__all__ = ["ChatConfig", "ChatReply", "DEFAULT_CONFIG", "Rule", "respond", "welcome"]
