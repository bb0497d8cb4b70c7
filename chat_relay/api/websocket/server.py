"""
WebSocket event server.

Accepts client connections, validates each inbound frame and hands it to the
connection manager (joinRoom), the message router (sendMessage) or the typing
relay (typing). Frames from one connection are handled one at a time in
arrival order.
"""

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from chat_relay.config import get_settings
from chat_relay.api.dependencies import (
    get_connection_manager,
    get_message_router,
    get_typing_relay,
)
from chat_relay.api.websocket.connection_manager import ConnectionManager
from chat_relay.domain.schemas.events import InboundEventType, ParsedEvent, parse_inbound_event
from chat_relay.domain.services.message_router import MessageRouter
from chat_relay.domain.services.typing_relay import TypingRelay
from chat_relay.utils.exceptions import AppException, MalformedEventException
from chat_relay.utils.logger import LoggerAdapter, get_connection_logger

settings = get_settings()
router = APIRouter()


async def handle_event(
    connection_id: str,
    event_type: InboundEventType,
    event: ParsedEvent,
    manager: ConnectionManager,
    message_router: MessageRouter,
    typing_relay: TypingRelay
) -> None:
    """
    Apply a parsed inbound event and deliver whatever it produces.

    Args:
        connection_id: Connection the event arrived on
        event_type: Kind of inbound event
        event: Parsed payload for the event type
        manager: Connection manager holding room membership
        message_router: Router for chat messages
        typing_relay: Relay for typing indicators
    """
    if event_type == InboundEventType.JOIN_ROOM:
        manager.join(connection_id, event)
    elif event_type == InboundEventType.SEND_MESSAGE:
        await manager.dispatch(message_router.route(event))
    elif event_type == InboundEventType.TYPING:
        await manager.dispatch(typing_relay.relay(event))


async def _process_frame(
    raw: str,
    connection_id: str,
    logger: LoggerAdapter,
    manager: ConnectionManager,
    message_router: MessageRouter,
    typing_relay: TypingRelay
) -> None:
    try:
        event_type, event = parse_inbound_event(raw, connection_id)
    except MalformedEventException as e:
        logger.warning(f"Discarded malformed event: {e.message}", extra={"details": e.details})
        return

    try:
        await handle_event(connection_id, event_type, event, manager, message_router, typing_relay)
    except AppException as e:
        logger.warning(f"Failed to handle {event_type.value}: {e.message}", extra={"details": e.details})
    except Exception as e:
        logger.error(f"Unexpected error handling {event_type.value}: {str(e)}", exc_info=True)


@router.websocket(settings.WS_PATH)
async def websocket_endpoint(
    websocket: WebSocket,
    manager: ConnectionManager = Depends(get_connection_manager),
    message_router: MessageRouter = Depends(get_message_router),
    typing_relay: TypingRelay = Depends(get_typing_relay)
):
    """
    Serve one client connection until it disconnects.
    """
    connection_id = await manager.connect(websocket)
    logger = get_connection_logger(__name__, connection_id)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            raw = message.get("text")
            if raw is None:
                logger.warning("Discarded non-text frame")
                continue

            await _process_frame(raw, connection_id, logger, manager, message_router, typing_relay)
    except WebSocketDisconnect:
        pass
    finally:
        await manager.disconnect(connection_id)
