import pytest
from pydantic import ValidationError

from conversation.history import HistoryStore
from conversation.models import Message, ReasoningReply, Role, SimpleReply
from conversation.view import ReasoningToggles


class TestHistoryStore:
    def test_append_preserves_order(self) -> None:
        store = HistoryStore()
        messages = [Message.user("a"), Message(role=Role.MODEL, text="b"), Message.user("c")]

        for message in messages:
            store.append(message)

        assert store.snapshot() == tuple(messages)
        assert len(store) == 3

    def test_snapshot_is_detached(self) -> None:
        store = HistoryStore()
        store.append(Message.user("a"))
        before = store.snapshot()

        store.append(Message.user("b"))

        assert len(before) == 1
        assert len(store.snapshot()) == 2

    def test_clear(self) -> None:
        store = HistoryStore()
        store.append(Message.user("a"))

        store.clear()

        assert store.snapshot() == ()


class TestMessage:
    def test_messages_are_immutable(self) -> None:
        message = Message.user("a")

        with pytest.raises(ValidationError):
            message.text = "b"

    def test_from_reasoning_reply(self) -> None:
        message = Message.from_reply(ReasoningReply(thinking="t", output="o"), thinking_time=1.25)

        assert message.is_reasoning
        assert message.content == "o"
        assert message.text is None
        assert message.thinking_time == 1.25

    def test_from_simple_reply(self) -> None:
        message = Message.from_reply(SimpleReply(text="hi"), thinking_time=0.5)

        assert not message.is_reasoning
        assert message.content == "hi"

    def test_ids_are_unique(self) -> None:
        assert Message.user("a").id != Message.user("a").id


class TestReasoningToggles:
    def test_toggle_round_trip(self) -> None:
        toggles = ReasoningToggles()

        assert toggles.toggle("m1") is True
        assert toggles.is_expanded("m1")
        assert toggles.toggle("m1") is False
        assert not toggles.is_expanded("m1")

    def test_clear(self) -> None:
        toggles = ReasoningToggles()
        toggles.toggle("m1")

        toggles.clear()

        assert not toggles.is_expanded("m1")
