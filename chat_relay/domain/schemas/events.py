"""
Websocket event schemas.

Every frame exchanged with a client is a JSON object of the form
``{"event": <name>, "data": <payload>}``. This module defines the Pydantic
schemas used to validate inbound frames and to serialize outbound payloads.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from chat_relay.domain.models.message import InboundMessage, TypingSignal
from chat_relay.utils.exceptions import MalformedEventException


class InboundEventType(str, Enum):
    """Events a client may send."""
    JOIN_ROOM = "joinRoom"
    SEND_MESSAGE = "sendMessage"
    TYPING = "typing"


class OutboundEventType(str, Enum):
    """Events the relay emits."""
    CONNECTED = "connected"
    RECEIVE_MESSAGE = "receiveMessage"
    MESSAGE_SENTIMENT = "messageSentiment"
    SMART_REPLIES = "smartReplies"
    TYPING = "typing"


class EventFrame(BaseModel):
    """Envelope shared by inbound and outbound frames."""
    event: str = Field(..., description="Name of the event")
    data: Any = Field(None, description="Event payload")


class SendMessagePayload(BaseModel):
    """Payload of a sendMessage event"""
    text: StrictStr = Field(..., description="Message text")
    to: Optional[StrictStr] = Field(None, description="Room key or the AI sentinel")


class TypingPayload(BaseModel):
    """Payload of an inbound typing event"""
    to: StrictStr = Field(..., description="Room key to notify")


class ConnectedPayload(BaseModel):
    id: str = Field(..., description="Connection id assigned by the server")


class ChatMessagePayload(BaseModel):
    """Payload of a receiveMessage event"""
    text: str = Field(..., description="Message text")
    from_: str = Field(..., alias="from", description="Connection id or the AI sentinel")
    timestamp: datetime = Field(..., description="When the relay handled the message")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "text": "Hello! How can I help you today?",
                "from": "AI",
                "timestamp": "2024-01-01T00:00:00Z"
            }
        }
    )


class SentimentPayload(BaseModel):
    """Payload of a messageSentiment event"""
    text: str = Field(..., description="Text that was scored")
    score: int = Field(..., description="Signed lexicon score")


class TypingNoticePayload(BaseModel):
    """Payload of an outbound typing event"""
    from_: str = Field(..., alias="from", description="Connection id of the typist")

    model_config = ConfigDict(populate_by_name=True)


ParsedEvent = Union[str, InboundMessage, TypingSignal]


def serialize_payload(payload: Any) -> Any:
    """Convert an outbound payload into JSON-compatible data."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True)
    if isinstance(payload, list):
        return [serialize_payload(item) for item in payload]
    return payload


def parse_inbound_event(raw: str, connection_id: str) -> Tuple[InboundEventType, ParsedEvent]:
    """
    Validate a raw websocket frame and convert it into a domain object.

    Args:
        raw: Raw text frame received from the client
        connection_id: Id of the connection the frame arrived on

    Returns:
        The event type and its parsed payload: the room key for joinRoom,
        an InboundMessage for sendMessage, a TypingSignal for typing

    Raises:
        MalformedEventException: If the frame is not valid JSON, names an
            unknown event, or is missing a required field
    """
    try:
        frame = EventFrame.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise MalformedEventException(f"Invalid event frame: {str(e)}")

    try:
        event_type = InboundEventType(frame.event)
    except ValueError:
        raise MalformedEventException(f"Unknown event: {frame.event}", event=frame.event)

    try:
        if event_type == InboundEventType.JOIN_ROOM:
            if not isinstance(frame.data, str):
                raise MalformedEventException("joinRoom expects a room key string", event=frame.event)
            return event_type, frame.data

        if event_type == InboundEventType.SEND_MESSAGE:
            payload = SendMessagePayload.model_validate(frame.data)
            return event_type, InboundMessage(text=payload.text, sender_id=connection_id, to=payload.to)

        payload = TypingPayload.model_validate(frame.data)
        return event_type, TypingSignal(sender_id=connection_id, to=payload.to)

    except ValidationError as e:
        raise MalformedEventException(
            f"Invalid {frame.event} payload",
            event=frame.event,
            details={"errors": e.errors(include_url=False)}
        )

