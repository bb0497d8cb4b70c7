from fastapi import Depends
from starlette.requests import HTTPConnection

from chat_relay.api.websocket.connection_manager import ConnectionManager
from chat_relay.domain.services.message_router import MessageRouter
from chat_relay.domain.services.typing_relay import TypingRelay
from chat_relay.utils.logger import LoggerAdapter, get_request_logger


# Connection manager dependency
def get_connection_manager(connection: HTTPConnection) -> ConnectionManager:
    """
    Provides the connection manager instance from app state.
    """
    return connection.app.state.connection_manager


# Message router dependency
def get_message_router(connection: HTTPConnection) -> MessageRouter:
    """
    Provides the message router built at startup.
    """
    return connection.app.state.message_router


# Typing relay dependency
def get_typing_relay(connection: HTTPConnection) -> TypingRelay:
    return connection.app.state.typing_relay


# Correlation ID dependency
def get_correlation_id(connection: HTTPConnection) -> str:
    """
    Extracts the correlation ID from request state.

    Requires the correlation ID middleware to be active.
    """
    return getattr(connection.state, "correlation_id", "unknown")


def get_request_logger_dependency(
    correlation_id: str = Depends(get_correlation_id)
) -> LoggerAdapter:
    """
    Dependency to provide a logger bound to the request correlation ID.
    """
    return get_request_logger("chat_relay.api", correlation_id)
