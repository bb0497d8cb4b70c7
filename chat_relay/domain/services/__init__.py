"""
Domain Services Package.

This package contains the services that implement the relay's behavior:
routing messages to peers or the assistant, composing assistant replies,
suggesting smart replies and relaying typing indicators. Each service returns
outbound events instead of writing to sockets, which keeps them free of
transport concerns.
"""

from chat_relay.domain.services.assistant_responder import AssistantResponder
from chat_relay.domain.services.message_router import MessageRouter
from chat_relay.domain.services.smart_reply_service import SmartReplyService
from chat_relay.domain.services.typing_relay import TypingRelay

__all__ = [
    "AssistantResponder",
    "MessageRouter",
    "SmartReplyService",
    "TypingRelay",
]
