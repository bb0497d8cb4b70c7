from chat_relay.infrastructure.ai.sentiment.sentiment_scorer import SentimentResult, SentimentScorer

__all__ = ["SentimentResult", "SentimentScorer"]
