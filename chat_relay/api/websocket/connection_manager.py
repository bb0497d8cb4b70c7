from fastapi import WebSocket, WebSocketDisconnect
from typing import Any, Dict, Iterable, List, Optional, Set
import logging
import uuid

from chat_relay.domain.models.message import OutboundEvent
from chat_relay.domain.schemas.events import ConnectedPayload, OutboundEventType, serialize_payload
from chat_relay.utils.exceptions import ConnectionNotFoundException


class ConnectionInfo:
    """
    Stores information about a WebSocket connection.
    """
    def __init__(
        self,
        websocket: WebSocket,
        connection_id: str
    ):
        self.websocket = websocket
        self.connection_id = connection_id
        self.room: Optional[str] = None


class ConnectionManager:
    """
    Manages WebSocket connections and their room membership.

    Each connection belongs to at most one room, named by a caller-supplied
    key. Every connection can also be addressed by its own id, so a room key
    equal to a connection id reaches that connection. Delivery is best-effort:
    an empty room drops the event and a failing socket is skipped.
    """
    def __init__(self):
        # connection_id -> ConnectionInfo
        self.active_connections: Dict[str, ConnectionInfo] = {}

        # room key -> connection ids that joined it
        self.rooms: Dict[str, Set[str]] = {}

    async def connect(
        self,
        websocket: WebSocket,
        connection_id: Optional[str] = None
    ) -> str:
        """
        Registers a new WebSocket connection.

        Returns the connection_id for the connection.
        """
        if not connection_id:
            connection_id = str(uuid.uuid4())

        await websocket.accept()

        self.active_connections[connection_id] = ConnectionInfo(
            websocket=websocket,
            connection_id=connection_id
        )

        logging.info(
            f"New client connected: {connection_id}",
            extra={"connection_id": connection_id}
        )

        await self.send_event(
            connection_id,
            OutboundEventType.CONNECTED.value,
            ConnectedPayload(id=connection_id)
        )

        return connection_id

    async def disconnect(self, connection_id: str) -> None:
        """
        Removes a WebSocket connection and its room membership.
        """
        if connection_id not in self.active_connections:
            return

        self.leave(connection_id)
        del self.active_connections[connection_id]

        logging.info(
            f"Client disconnected: {connection_id}",
            extra={"connection_id": connection_id}
        )

    def join(self, connection_id: str, room_key: str) -> None:
        """
        Associates a connection with a room, replacing any previous room.

        Raises:
            ConnectionNotFoundException: If the connection is not live
        """
        connection_info = self.active_connections.get(connection_id)
        if connection_info is None:
            raise ConnectionNotFoundException(connection_id)

        self.leave(connection_id)

        self.rooms.setdefault(room_key, set()).add(connection_id)
        connection_info.room = room_key

        logging.info(
            f"Connection {connection_id} joined room: {room_key}",
            extra={"connection_id": connection_id, "room": room_key}
        )

    def leave(self, connection_id: str) -> None:
        """
        Removes the room association of a connection, if it has one.
        """
        connection_info = self.active_connections.get(connection_id)
        if connection_info is None or connection_info.room is None:
            return

        room_key = connection_info.room
        members = self.rooms.get(room_key)
        if members is not None:
            members.discard(connection_id)
            # Cleanup empty rooms
            if not members:
                del self.rooms[room_key]

        connection_info.room = None

    def get_room(self, connection_id: str) -> Optional[str]:
        connection_info = self.active_connections.get(connection_id)
        return connection_info.room if connection_info else None

    def room_members(self, room_key: str) -> List[str]:
        """
        Returns the live connection ids addressed by a room key.
        """
        members = set(self.rooms.get(room_key, ()))
        if room_key in self.active_connections:
            members.add(room_key)
        return sorted(members)

    def get_room_size(self, room_key: str) -> int:
        return len(self.room_members(room_key))

    def get_connection_count(self) -> int:
        """
        Returns the number of active connections.
        """
        return len(self.active_connections)

    async def send_event(
        self,
        connection_id: str,
        event: str,
        payload: Any
    ) -> bool:
        """
        Sends an event to a specific WebSocket connection.

        Returns True if the event was sent successfully, False otherwise.
        """
        connection_info = self.active_connections.get(connection_id)
        if connection_info is None:
            return False

        try:
            await connection_info.websocket.send_json(
                {"event": event, "data": serialize_payload(payload)}
            )
            return True
        except WebSocketDisconnect:
            await self.disconnect(connection_id)
        except Exception as e:
            logging.error(
                f"Error sending {event} to WebSocket: {str(e)}",
                extra={"connection_id": connection_id},
                exc_info=True
            )

        return False

    async def broadcast_to_room(
        self,
        room_key: str,
        event: str,
        payload: Any,
        exclude: Optional[str] = None
    ) -> int:
        """
        Broadcasts an event to every connection in a room.

        Returns the number of connections that received the event.
        """
        sent_count = 0

        for connection_id in self.room_members(room_key):
            if connection_id == exclude:
                continue
            if await self.send_event(connection_id, event, payload):
                sent_count += 1

        if sent_count == 0:
            logging.debug(f"Dropped {event} for room {room_key}: no live members")

        return sent_count

    async def dispatch(self, events: Iterable[OutboundEvent]) -> int:
        """
        Delivers outbound events in order.

        Returns the total number of deliveries.
        """
        sent_count = 0
        for outbound in events:
            sent_count += await self.broadcast_to_room(
                outbound.room,
                outbound.event,
                outbound.payload,
                exclude=outbound.exclude
            )
        return sent_count
