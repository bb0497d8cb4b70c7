from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

SMART_REPLY_TABLE: Mapping[str, Sequence[str]] = MappingProxyType({
    "hello": ("Hi there!", "Hello!", "Hey!"),
    "how are you?": ("I'm good, thanks!", "Doing well!", "All good here!"),
    "thanks": ("You're welcome!", "No problem!", "Anytime!"),
    "help": ("How can I help?", "What do you need help with?", "I'm here to help!"),
})


def normalize_text(text: str) -> str:
    """Lower-case and trim text for table lookup."""
    return text.strip().lower()


class SmartReplyService:
    """
    Suggests canned quick replies for a message.

    Lookup is an exact match of the whole normalized text; there is no
    substring or fuzzy matching.
    """

    def __init__(self, table: Mapping[str, Sequence[str]] = SMART_REPLY_TABLE):
        self._table = MappingProxyType(
            {normalize_text(key): tuple(replies) for key, replies in table.items()}
        )

    def suggest(self, text: str) -> Optional[List[str]]:
        """
        Return the replies for the text, or None when it has no entry.

        Args:
            text: Raw message text

        Returns:
            Ordered list of reply strings, or None
        """
        replies = self._table.get(normalize_text(text or ""))
        return list(replies) if replies is not None else None
