"""Chatbot routes"""

from fastapi import APIRouter

from chatbot import respond, welcome
from config import config
from exceptions import ConfigurationError
from server.metrics import metrics
from server.models.requests import ChatRequest

router = APIRouter(prefix="/api/chat", tags=["chat"])


def _require_enabled():
    if not config.CHATBOT_ENABLED:
        raise ConfigurationError("Chat assistant is disabled", config_key="SECUREVOTE_CHATBOT_ENABLED")


@router.post("")
def chat(chat_request: ChatRequest):
    """Answer one message from the canned rule table"""
    _require_enabled()
    metrics.chat_messages.inc()
    return respond(chat_request.message).to_dict()


@router.get("/welcome")
def chat_welcome():
    _require_enabled()
    return welcome().to_dict()
