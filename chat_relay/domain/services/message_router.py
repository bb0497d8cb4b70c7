"""
Service responsible for routing chat messages.

For every inbound message the router decides whether it goes to a peer room or
to the assistant, then always adds the sentiment score and, when the text
matches, the smart reply suggestions. Routing has no side effects: the result
is the ordered list of outbound events the transport must deliver.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List

from chat_relay.domain.models.message import AI_SENTINEL, InboundMessage, OutboundEvent
from chat_relay.domain.schemas.events import (
    ChatMessagePayload,
    OutboundEventType,
    SentimentPayload,
)
from chat_relay.domain.services.assistant_responder import AssistantResponder
from chat_relay.domain.services.smart_reply_service import SmartReplyService
from chat_relay.infrastructure.ai.sentiment.sentiment_scorer import SentimentScorer
from chat_relay.utils.logger import get_logger


class Destination(str, Enum):
    PEER = "peer"
    ASSISTANT = "assistant"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MessageRouter:
    """
    Routes a message to a peer room or to the assistant.

    The router keeps no state between messages; the models it depends on are
    immutable and shared across connections.
    """

    def __init__(
        self,
        assistant: AssistantResponder,
        sentiment_scorer: SentimentScorer,
        smart_replies: SmartReplyService,
        clock: Callable[[], datetime] = utc_now
    ):
        """
        Initialize the message router with dependencies.

        Args:
            assistant: Composes assistant replies
            sentiment_scorer: Scores message sentiment
            smart_replies: Suggests canned replies
            clock: Source of message timestamps
        """
        self.assistant = assistant
        self.sentiment_scorer = sentiment_scorer
        self.smart_replies = smart_replies
        self.clock = clock
        self.logger = get_logger(__name__)

    @staticmethod
    def destination_for(message: InboundMessage) -> Destination:
        """
        Decide where a message goes.

        A message with a non-empty destination other than the assistant sentinel
        goes to that peer room; anything else goes to the assistant.
        """
        return Destination.PEER if message.is_peer_directed else Destination.ASSISTANT

    def route(self, message: InboundMessage) -> List[OutboundEvent]:
        """
        Compute the outbound events for a message.

        Args:
            message: The message to route

        Returns:
            Outbound events in emission order
        """
        destination = self.destination_for(message)
        self.logger.info(
            f"Message from {message.sender_id} to {message.to or AI_SENTINEL}",
            extra={"connection_id": message.sender_id, "destination": destination.value}
        )

        if destination == Destination.PEER:
            events = self._route_to_peer(message)
        else:
            events = self._route_to_assistant(message)

        events.extend(self._augment(message))
        return events

    def _route_to_peer(self, message: InboundMessage) -> List[OutboundEvent]:
        envelope = ChatMessagePayload(
            text=message.text,
            from_=message.sender_id,
            timestamp=self.clock()
        )

        # The sender also gets its own message so it shows in its view
        return [
            OutboundEvent(OutboundEventType.RECEIVE_MESSAGE.value, envelope, room=message.to),
            OutboundEvent(OutboundEventType.RECEIVE_MESSAGE.value, envelope, room=message.sender_id),
        ]

    def _route_to_assistant(self, message: InboundMessage) -> List[OutboundEvent]:
        reply = ChatMessagePayload(
            text=self.assistant.respond(message.text),
            from_=AI_SENTINEL,
            timestamp=self.clock()
        )
        return [OutboundEvent(OutboundEventType.RECEIVE_MESSAGE.value, reply, room=message.sender_id)]

    def _augment(self, message: InboundMessage) -> List[OutboundEvent]:
        """Sentiment and smart replies, sent back to the sender on both paths."""
        result = self.sentiment_scorer.analyze(message.text)
        events = [
            OutboundEvent(
                OutboundEventType.MESSAGE_SENTIMENT.value,
                SentimentPayload(text=result.text, score=result.score),
                room=message.sender_id
            )
        ]

        replies = self.smart_replies.suggest(message.text)
        if replies:
            events.append(
                OutboundEvent(OutboundEventType.SMART_REPLIES.value, replies, room=message.sender_id)
            )

        return events
