"""
WebSocket implementation package for the chat relay service.

This package contains the connection manager, which tracks live connections
and room membership, and the event server that dispatches client frames.
"""

from chat_relay.api.websocket.connection_manager import ConnectionInfo, ConnectionManager

__all__ = [
    "ConnectionInfo",
    "ConnectionManager",
]
