"""
Tests for the connection manager: connection lifecycle, room membership and
best-effort delivery, including full message routing through `dispatch`.
"""

import pytest

from chat_relay.domain.models.message import InboundMessage
from chat_relay.utils.exceptions import ConnectionNotFoundException
from tests.conftest import FakeWebSocket


async def _connect(manager, connection_id):
    websocket = FakeWebSocket()
    await manager.connect(websocket, connection_id=connection_id)
    websocket.sent.clear()
    return websocket


async def test_connect_accepts_and_announces_id(manager):
    websocket = FakeWebSocket()

    connection_id = await manager.connect(websocket)

    assert websocket.accepted
    assert websocket.sent == [{"event": "connected", "data": {"id": connection_id}}]
    assert manager.get_connection_count() == 1


async def test_join_replaces_previous_room(manager):
    await _connect(manager, "conn-a")

    manager.join("conn-a", "u1")
    manager.join("conn-a", "u2")

    assert manager.get_room("conn-a") == "u2"
    assert "u1" not in manager.rooms
    assert manager.rooms["u2"] == {"conn-a"}


async def test_leave_without_room_is_a_no_op(manager):
    await _connect(manager, "conn-a")

    manager.leave("conn-a")
    manager.leave("never-connected")

    assert manager.get_room("conn-a") is None


async def test_join_requires_live_connection(manager):
    with pytest.raises(ConnectionNotFoundException):
        manager.join("ghost", "u1")


async def test_disconnect_clears_room_membership(manager):
    await _connect(manager, "conn-a")
    manager.join("conn-a", "u1")

    await manager.disconnect("conn-a")

    assert manager.get_connection_count() == 0
    assert manager.get_room_size("u1") == 0
    assert "conn-a" not in manager.active_connections


async def test_room_collisions_reach_every_member(manager):
    first = await _connect(manager, "conn-a")
    second = await _connect(manager, "conn-b")
    manager.join("conn-a", "shared")
    manager.join("conn-b", "shared")

    sent = await manager.broadcast_to_room("shared", "ping", {"n": 1})

    assert sent == 2
    assert first.events("ping") and second.events("ping")


async def test_broadcast_honours_exclude(manager):
    first = await _connect(manager, "conn-a")
    second = await _connect(manager, "conn-b")
    manager.join("conn-a", "u1")
    manager.join("conn-b", "u1")

    sent = await manager.broadcast_to_room("u1", "typing", {"from": "conn-a"}, exclude="conn-a")

    assert sent == 1
    assert first.sent == []
    assert second.sent == [{"event": "typing", "data": {"from": "conn-a"}}]


async def test_connection_id_is_addressable_as_room(manager):
    websocket = await _connect(manager, "conn-a")

    assert await manager.broadcast_to_room("conn-a", "ping", None) == 1
    assert websocket.sent == [{"event": "ping", "data": None}]


async def test_empty_room_drops_silently(manager):
    await _connect(manager, "conn-a")

    assert await manager.broadcast_to_room("nobody-here", "ping", None) == 0


async def test_failing_socket_does_not_block_others(manager):
    await manager.connect(FakeWebSocket(fail_on_send=True), connection_id="broken")
    healthy = await _connect(manager, "conn-b")
    manager.join("broken", "u1")
    manager.join("conn-b", "u1")

    sent = await manager.broadcast_to_room("u1", "ping", None)

    assert sent == 1
    assert healthy.events("ping")


async def test_round_trip_between_two_rooms(manager, message_router):
    sender = await _connect(manager, "conn-a")
    recipient = await _connect(manager, "conn-b")
    manager.join("conn-a", "u1")
    manager.join("conn-b", "u2")

    await manager.dispatch(message_router.route(InboundMessage(text="hi", sender_id="conn-a", to="u2")))

    received = recipient.events("receiveMessage")
    assert len(received) == 1
    assert received[0]["data"]["from"] == "conn-a"
    assert received[0]["data"]["text"] == "hi"
    assert sender.events("receiveMessage") == received
    assert recipient.events("messageSentiment") == []


async def test_message_to_missing_room_is_dropped_but_scored(manager, message_router):
    sender = await _connect(manager, "conn-a")
    bystander = await _connect(manager, "conn-b")
    manager.join("conn-b", "u2")

    await manager.dispatch(
        message_router.route(InboundMessage(text="hi", sender_id="conn-a", to="nonexistent-room"))
    )

    assert bystander.sent == []
    assert len(sender.events("messageSentiment")) == 1
    assert sender.events("messageSentiment")[0]["data"]["text"] == "hi"


async def test_assistant_reply_reaches_sender_only(manager, message_router):
    sender = await _connect(manager, "conn-a")
    other = await _connect(manager, "conn-b")

    await manager.dispatch(message_router.route(InboundMessage(text="hello", sender_id="conn-a", to="AI")))

    assert [frame["event"] for frame in sender.sent] == ["receiveMessage", "messageSentiment", "smartReplies"]
    assert sender.sent[0]["data"]["from"] == "AI"
    assert sender.sent[0]["data"]["text"] == "Hello! How can I help you today?"
    assert other.sent == []
