from chat_relay.infrastructure.ai.intent.intent_classifier import IntentClassifier, build_intent_classifier
from chat_relay.infrastructure.ai.intent.training_data import TRAINING_CORPUS

__all__ = ["IntentClassifier", "build_intent_classifier", "TRAINING_CORPUS"]
