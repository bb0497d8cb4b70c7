from dataclasses import dataclass, field
from typing import Dict
from enum import Enum


class IntentType(Enum):
    """Enumeration of the intents the assistant understands"""
    GREETING = "greeting"
    FAREWELL = "farewell"
    GRATITUDE = "gratitude"
    HELP = "help"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, label: str) -> "IntentType":
        """
        Map a classifier label to an intent type.

        Labels outside the enumeration resolve to UNKNOWN.
        """
        try:
            return cls(label)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class IntentClassification:
    """
    Immutable value object representing an intent classification with confidence.
    """
    intent_type: IntentType
    confidence: float
    scores: Dict[str, float] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.intent_type.value

    def __repr__(self) -> str:
        return f"IntentClassification(intent={self.intent_type.value}, " \
               f"confidence={self.confidence:.2f})"
