"""HTTP routers for the chat relay service."""

from chat_relay.api.routers import health

__all__ = ["health"]
