"""
Shared pytest fixtures for the chat relay tests.

The trained intent classifier and the sentiment lexicon are immutable once
built, so they are created once per test session and shared. Websocket
behavior is exercised two ways: against `FakeWebSocket` instances for the
connection manager unit tests, and through FastAPI's TestClient for the
end-to-end event tests.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

import pytest
from fastapi.testclient import TestClient

from chat_relay.api.websocket.connection_manager import ConnectionManager
from chat_relay.domain.services.assistant_responder import AssistantResponder
from chat_relay.domain.services.message_router import MessageRouter
from chat_relay.domain.services.smart_reply_service import SmartReplyService
from chat_relay.domain.services.typing_relay import TypingRelay
from chat_relay.infrastructure.ai.intent.intent_classifier import build_intent_classifier
from chat_relay.infrastructure.ai.sentiment.sentiment_scorer import SentimentScorer

FIXED_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeWebSocket:
    """Stand-in for a starlette WebSocket that records what is sent to it."""

    def __init__(self, fail_on_send: bool = False):
        self.accepted = False
        self.fail_on_send = fail_on_send
        self.sent: List[Any] = []

    async def accept(self):
        self.accepted = True

    async def send_json(self, data: Any):
        if self.fail_on_send:
            raise RuntimeError("socket is closed")
        self.sent.append(data)

    def events(self, name: Optional[str] = None) -> List[Any]:
        return [frame for frame in self.sent if name is None or frame["event"] == name]


@pytest.fixture(scope="session")
def intent_classifier():
    return build_intent_classifier()


@pytest.fixture(scope="session")
def sentiment_scorer():
    return SentimentScorer()


@pytest.fixture
def smart_replies():
    return SmartReplyService()


@pytest.fixture
def assistant(intent_classifier):
    return AssistantResponder(intent_classifier)


@pytest.fixture
def message_router(assistant, sentiment_scorer, smart_replies):
    return MessageRouter(
        assistant=assistant,
        sentiment_scorer=sentiment_scorer,
        smart_replies=smart_replies,
        clock=lambda: FIXED_TIME
    )


@pytest.fixture
def typing_relay():
    return TypingRelay()


@pytest.fixture
def manager():
    return ConnectionManager()


@pytest.fixture
def client():
    from chat_relay.main import app

    with TestClient(app) as test_client:
        yield test_client
