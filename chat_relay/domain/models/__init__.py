from chat_relay.domain.models.intent import IntentClassification, IntentType
from chat_relay.domain.models.message import AI_SENTINEL, InboundMessage, OutboundEvent, TypingSignal

__all__ = [
    "AI_SENTINEL",
    "InboundMessage",
    "IntentClassification",
    "IntentType",
    "OutboundEvent",
    "TypingSignal",
]
