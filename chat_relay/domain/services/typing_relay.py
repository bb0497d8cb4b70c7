from typing import List

from chat_relay.domain.models.message import OutboundEvent, TypingSignal
from chat_relay.domain.schemas.events import OutboundEventType, TypingNoticePayload
from chat_relay.utils.logger import get_logger


class TypingRelay:
    """
    Forwards typing indicators to a room.

    Indicators are ephemeral: nothing is stored and nothing is retried. The
    typist never receives its own indicator.
    """

    def __init__(self):
        self.logger = get_logger(__name__)

    def relay(self, signal: TypingSignal) -> List[OutboundEvent]:
        """
        Build the typing notice for a signal.

        Args:
            signal: Typing signal from a connection

        Returns:
            A single typing event for the target room, excluding the typist
        """
        self.logger.debug(
            f"Typing indicator from {signal.sender_id} to {signal.to}",
            extra={"connection_id": signal.sender_id}
        )
        return [
            OutboundEvent(
                OutboundEventType.TYPING.value,
                TypingNoticePayload(from_=signal.sender_id),
                room=signal.to,
                exclude=signal.sender_id
            )
        ]
