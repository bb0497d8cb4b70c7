"""
Lexicon-based sentiment scoring.

Scores are the sum of the AFINN-165 valences of the words found in the text,
so they are signed integers: positive for positive affect, negative for
negative affect and zero when no lexicon word is present.
"""

from dataclasses import dataclass
import logging

from afinn import Afinn

from chat_relay.utils.exceptions import ModelInitializationException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SentimentResult:
    """Sentiment score of a single text."""
    text: str
    score: int


class SentimentScorer:
    """Scores text against the English AFINN lexicon."""

    def __init__(self, emoticons: bool = False):
        """
        Load the lexicon.

        Args:
            emoticons: Also score emoticons such as ":)" and ":("

        Raises:
            ModelInitializationException: If the lexicon cannot be loaded
        """
        try:
            self._lexicon = Afinn(language="en", emoticons=emoticons)
        except Exception as e:
            raise ModelInitializationException(
                "sentiment_lexicon",
                message=f"Failed to load sentiment lexicon: {str(e)}"
            ) from e

        logger.info("Loaded sentiment lexicon", extra={"emoticons": emoticons})

    def score(self, text: str) -> int:
        """Return the summed valence of the words in the text."""
        if not text:
            return 0
        # Single-word entries only; multi-word phrases in the lexicon are not matched
        return int(round(self._lexicon.score_with_wordlist(text.lower())))

    def analyze(self, text: str) -> SentimentResult:
        return SentimentResult(text=text, score=self.score(text))
