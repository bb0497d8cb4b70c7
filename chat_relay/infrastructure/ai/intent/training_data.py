"""Labeled corpus the intent classifier is trained on at startup."""

from typing import List, Tuple

TRAINING_CORPUS: Tuple[Tuple[str, str], ...] = (
    ("hello", "greeting"),
    ("hi", "greeting"),
    ("hey", "greeting"),
    ("how are you?", "greeting"),
    ("bye", "farewell"),
    ("goodbye", "farewell"),
    ("thanks", "gratitude"),
    ("thank you", "gratitude"),
    ("help", "help"),
)


def split_corpus(corpus=TRAINING_CORPUS) -> Tuple[List[str], List[str]]:
    """Split (text, label) pairs into parallel text and label lists."""
    texts = [text for text, _ in corpus]
    labels = [label for _, label in corpus]
    return texts, labels
