"""
Service that turns a classified intent into the assistant's reply text.
"""

from typing import Dict

from chat_relay.domain.models.intent import IntentClassification, IntentType
from chat_relay.infrastructure.ai.intent.intent_classifier import IntentClassifier
from chat_relay.utils.logger import get_logger

REPLY_TABLE: Dict[IntentType, str] = {
    IntentType.GREETING: "Hello! How can I help you today?",
    IntentType.FAREWELL: "Goodbye! Have a great day!",
    IntentType.GRATITUDE: "You're welcome! 😊",
    IntentType.HELP: "I can help with general questions. What do you need?",
}

FALLBACK_REPLY = "I didn't understand that. Can you rephrase?"


class AssistantResponder:
    """
    Composes the assistant reply for a message.

    The reply depends only on the intent label; any label without an entry in
    the reply table, including UNKNOWN, gets the fallback reply.
    """

    def __init__(self, intent_classifier: IntentClassifier):
        """
        Initialize the responder.

        Args:
            intent_classifier: Trained classifier shared by all connections
        """
        self.classifier = intent_classifier
        self.logger = get_logger(__name__)

    @staticmethod
    def reply_for(intent_type: IntentType) -> str:
        """
        Look up the reply for an intent.

        Args:
            intent_type: Classified intent

        Returns:
            The canned reply text
        """
        return REPLY_TABLE.get(intent_type, FALLBACK_REPLY)

    def classify(self, text: str) -> IntentClassification:
        return self.classifier.classify(text)

    def respond(self, text: str) -> str:
        """
        Classify the text and return the assistant's reply.

        Args:
            text: Message text addressed to the assistant

        Returns:
            Reply text
        """
        classification = self.classify(text)
        self.logger.debug(
            f"Assistant intent: {classification.label}",
            extra={"confidence": classification.confidence}
        )
        return self.reply_for(classification.intent_type)
