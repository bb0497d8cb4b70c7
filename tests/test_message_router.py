import pytest

from chat_relay.domain.models.message import AI_SENTINEL, InboundMessage, TypingSignal
from chat_relay.domain.schemas.events import serialize_payload
from chat_relay.domain.services.message_router import Destination, MessageRouter
from tests.conftest import FIXED_TIME


def _event_names(events):
    return [event.event for event in events]


def test_peer_message_goes_to_room_and_back_to_sender(message_router):
    events = message_router.route(InboundMessage(text="hi", sender_id="conn-a", to="u2"))

    assert _event_names(events) == ["receiveMessage", "receiveMessage", "messageSentiment"]
    to_room, echo = events[0], events[1]
    assert to_room.room == "u2"
    assert echo.room == "conn-a"
    assert serialize_payload(to_room.payload) == {
        "text": "hi",
        "from": "conn-a",
        "timestamp": FIXED_TIME.isoformat().replace("+00:00", "Z"),
    }
    assert echo.payload == to_room.payload


@pytest.mark.parametrize("to", [None, AI_SENTINEL, ""])
def test_assistant_message_replies_to_sender_only(message_router, to):
    events = message_router.route(InboundMessage(text="hello", sender_id="conn-a", to=to))

    replies = [event for event in events if event.event == "receiveMessage"]
    assert len(replies) == 1
    assert replies[0].room == "conn-a"
    assert replies[0].payload.from_ == AI_SENTINEL
    assert replies[0].payload.text == "Hello! How can I help you today?"


@pytest.mark.parametrize("to, expected", [
    ("u2", Destination.PEER),
    ("conn-a", Destination.PEER),
    (AI_SENTINEL, Destination.ASSISTANT),
    (None, Destination.ASSISTANT),
])
def test_each_message_takes_exactly_one_path(to, expected):
    message = InboundMessage(text="hi", sender_id="conn-a", to=to)
    assert MessageRouter.destination_for(message) == expected


def test_sentiment_is_always_sent_to_sender(message_router):
    for to in ("u2", None):
        events = message_router.route(InboundMessage(text="good great", sender_id="conn-a", to=to))
        sentiment = [event for event in events if event.event == "messageSentiment"]

        assert len(sentiment) == 1
        assert sentiment[0].room == "conn-a"
        assert sentiment[0].payload.text == "good great"
        assert sentiment[0].payload.score > 0


def test_smart_replies_follow_sentiment_when_text_matches(message_router):
    events = message_router.route(InboundMessage(text="Thanks", sender_id="conn-a"))

    assert _event_names(events) == ["receiveMessage", "messageSentiment", "smartReplies"]
    assert events[-1].room == "conn-a"
    assert events[-1].payload == ["You're welcome!", "No problem!", "Anytime!"]


def test_smart_replies_skipped_for_punctuated_text(message_router):
    events = message_router.route(InboundMessage(text="Thanks!", sender_id="conn-a"))

    assert "smartReplies" not in _event_names(events)


def test_smart_replies_on_peer_path(message_router):
    events = message_router.route(InboundMessage(text="help", sender_id="conn-a", to="u2"))

    assert events[-1].event == "smartReplies"


def test_unknown_text_gets_a_single_deterministic_reply(message_router):
    first = message_router.route(InboundMessage(text="qwerty", sender_id="conn-a"))
    second = message_router.route(InboundMessage(text="qwerty", sender_id="conn-a"))

    assert first[0].payload.text == second[0].payload.text


def test_typing_relay_excludes_sender(typing_relay):
    events = typing_relay.relay(TypingSignal(sender_id="conn-a", to="u2"))

    assert len(events) == 1
    assert events[0].event == "typing"
    assert events[0].room == "u2"
    assert events[0].exclude == "conn-a"
    assert serialize_payload(events[0].payload) == {"from": "conn-a"}
