"""
Domain models for the events that flow through the relay.

Inbound models are built from validated websocket frames; outbound events are
what the routing services produce and the connection manager delivers.
"""

from dataclasses import dataclass
from typing import Any, Optional

# Reserved destination (and author) identifying the automated assistant.
AI_SENTINEL = "AI"


@dataclass(frozen=True)
class InboundMessage:
    """
    A chat message sent by a live connection.

    `to` is a room key, the AI sentinel, or None.
    """
    text: str
    sender_id: str
    to: Optional[str] = None

    @property
    def is_peer_directed(self) -> bool:
        """True when the message goes to a peer room rather than the assistant."""
        return bool(self.to) and self.to != AI_SENTINEL


@dataclass(frozen=True)
class TypingSignal:
    """Ephemeral presence signal from `sender_id` aimed at room `to`."""
    sender_id: str
    to: str


@dataclass(frozen=True)
class OutboundEvent:
    """
    A single emission the transport must perform.

    Attributes:
        event: Outbound event name (receiveMessage, messageSentiment, ...)
        payload: Pydantic model or JSON-compatible value sent as the frame data
        room: Room key (or connection id) addressed by the emission
        exclude: Connection id that must not receive the emission
    """
    event: str
    payload: Any
    room: str
    exclude: Optional[str] = None
