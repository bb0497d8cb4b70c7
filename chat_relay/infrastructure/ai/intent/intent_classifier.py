from typing import Dict, List, Optional, Sequence
import logging
import os

import numpy as np
import joblib
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.naive_bayes import MultinomialNB

from chat_relay.domain.models.intent import IntentClassification, IntentType
from chat_relay.infrastructure.ai.intent.training_data import split_corpus
from chat_relay.utils.exceptions import ModelInitializationException

# Lower-cased word tokens; whitespace and punctuation separate them.
TOKEN_PATTERN = r"(?u)\b\w+\b"


class IntentClassifier:
    """
    Classifies user intent from text input.

    A multinomial naive Bayes model over token counts: Laplace-smoothed
    per-label token likelihoods plus an add-one smoothed label prior. The model
    is trained once and treated as read-only afterwards.
    """

    def __init__(self, model_path: Optional[str] = None):
        """
        Initialize an untrained intent classifier.

        Args:
            model_path: Optional joblib file the trained model is saved to
        """
        self.logger = logging.getLogger(__name__)
        self.model_path = model_path
        self.labels: List[str] = []
        self.model: Optional[MultinomialNB] = None
        self.vectorizer: Optional[CountVectorizer] = None
        self._label_order: Optional[np.ndarray] = None

    @property
    def is_trained(self) -> bool:
        return self.model is not None and self.vectorizer is not None

    def train(self, texts: Sequence[str], labels: Sequence[str]) -> Dict[str, int]:
        """
        Train the intent model.

        Args:
            texts: Training text samples
            labels: Corresponding intent labels

        Returns:
            Dictionary with the training corpus dimensions

        Raises:
            ValueError: If the corpus is empty or texts and labels differ in length
        """
        if len(texts) != len(labels):
            raise ValueError("Texts and labels must have the same length")

        if not texts:
            raise ValueError("Training corpus is empty")

        # Labels in the order they are first seen; ties resolve toward the earliest
        labels_in_order = list(dict.fromkeys(labels))

        vectorizer = CountVectorizer(lowercase=True, token_pattern=TOKEN_PATTERN)
        features = vectorizer.fit_transform(texts)

        # classes_ of MultinomialNB are sorted, so the prior must follow that order
        sorted_labels, label_counts = np.unique(np.asarray(labels), return_counts=True)
        class_prior = (label_counts + 1) / (len(labels) + len(sorted_labels))

        model = MultinomialNB(alpha=1.0, class_prior=class_prior)
        model.fit(features, labels)

        self.vectorizer = vectorizer
        self.model = model
        self.labels = labels_in_order
        self._label_order = self._build_label_order()

        self.logger.info(
            f"Trained intent classifier on {len(texts)} samples",
            extra={"labels": self.labels, "vocabulary_size": len(vectorizer.vocabulary_)}
        )

        if self.model_path:
            self.save(self.model_path)

        return {
            "num_samples": len(texts),
            "num_classes": len(self.labels),
            "vocabulary_size": len(vectorizer.vocabulary_),
        }

    def _build_label_order(self) -> np.ndarray:
        classes = list(self.model.classes_)
        return np.array([classes.index(label) for label in self.labels])

    def score(self, text: str) -> Dict[str, float]:
        """
        Compute the joint log likelihood of every label for the text.

        Args:
            text: Input text to score

        Returns:
            Mapping of label to log score, in training label order
        """
        if not self.is_trained:
            raise RuntimeError("Intent classifier has not been trained")

        features = self.vectorizer.transform([text or ""])
        joint_log_likelihood = self.model.predict_joint_log_proba(features)[0]
        ordered = joint_log_likelihood[self._label_order]

        return {label: float(value) for label, value in zip(self.labels, ordered)}

    def classify(self, text: str) -> IntentClassification:
        """
        Classify the intent of the input text.

        Args:
            text: Input text to classify

        Returns:
            The winning intent with its posterior confidence and all label scores
        """
        scores = self.score(text)
        values = np.fromiter(scores.values(), dtype=float)

        # np.argmax returns the first maximum, which keeps ties deterministic
        best = int(np.argmax(values))
        posteriors = np.exp(values - values[best])
        confidence = float(posteriors[best] / posteriors.sum())

        label = self.labels[best]
        self.logger.debug(f"Classified text as {label} ({confidence:.3f})")

        return IntentClassification(
            intent_type=IntentType.from_label(label),
            confidence=confidence,
            scores=scores
        )

    def save(self, path: str) -> None:
        """Persist the trained model and vectorizer with joblib."""
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        joblib.dump(
            {"model": self.model, "vectorizer": self.vectorizer, "labels": self.labels},
            path
        )
        self.logger.info(f"Saved intent classifier model to {path}")

    @classmethod
    def load(cls, path: str) -> "IntentClassifier":
        """Load a model previously written by `save`."""
        model_data = joblib.load(path)

        classifier = cls(model_path=path)
        classifier.model = model_data["model"]
        classifier.vectorizer = model_data["vectorizer"]
        classifier.labels = list(model_data["labels"])
        classifier._label_order = classifier._build_label_order()

        classifier.logger.info(f"Loaded intent classifier model from {path}")
        return classifier


def build_intent_classifier(model_path: Optional[str] = None) -> IntentClassifier:
    """
    Build the process-wide intent classifier.

    Loads a saved model when `model_path` points to an existing file, otherwise
    trains on the built-in corpus (and saves to `model_path` when given).

    Raises:
        ModelInitializationException: If the model cannot be loaded or trained
    """
    try:
        if model_path and os.path.exists(model_path):
            return IntentClassifier.load(model_path)

        classifier = IntentClassifier(model_path=model_path)
        texts, labels = split_corpus()
        classifier.train(texts, labels)
        return classifier

    except Exception as e:
        raise ModelInitializationException(
            "intent_classifier",
            message=f"Failed to build intent classifier: {str(e)}"
        ) from e
