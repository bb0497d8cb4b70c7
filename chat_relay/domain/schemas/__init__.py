"""
Pydantic schemas for the websocket event protocol.
"""

from chat_relay.domain.schemas.events import (
    ChatMessagePayload,
    ConnectedPayload,
    EventFrame,
    InboundEventType,
    OutboundEventType,
    SendMessagePayload,
    SentimentPayload,
    TypingNoticePayload,
    TypingPayload,
    parse_inbound_event,
    serialize_payload,
)

__all__ = [
    "ChatMessagePayload",
    "ConnectedPayload",
    "EventFrame",
    "InboundEventType",
    "OutboundEventType",
    "SendMessagePayload",
    "SentimentPayload",
    "TypingNoticePayload",
    "TypingPayload",
    "parse_inbound_event",
    "serialize_payload",
]
