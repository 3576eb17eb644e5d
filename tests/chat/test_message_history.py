"""Message history reconciler tests."""
from __future__ import annotations

import pytest

from vta_frontend.chat.constants import APOLOGY_MESSAGE
from vta_frontend.chat.exceptions import ReplyPendingError
from vta_frontend.chat.history import MessageHistory, ReplyState
from vta_frontend.chat.schemas import ChatMessage, SourceNode


def test_submit_then_resolve_appends_user_and_assistant() -> None:
    history = MessageHistory()
    history.switch("thread-a")

    ticket = history.submit("What is ABS?")
    assert history.state is ReplyState.AWAITING_REPLY
    assert [message.role for message in history.messages] == ["user"]

    assert history.resolve(ticket, "Anti-lock braking.", [SourceNode(text="Manual p.3", score="0.91")])

    assert history.state is ReplyState.IDLE
    assert [message.role for message in history.messages] == ["user", "assistant"]
    assert history.messages[1].source_nodes[0].relevance == "0.91"


def test_failure_keeps_user_message_and_adds_apology() -> None:
    history = MessageHistory()
    history.switch("thread-a")

    ticket = history.submit("Hello")
    history.fail(ticket)

    assert [(m.role, m.content) for m in history.messages] == [
        ("user", "Hello"),
        ("assistant", APOLOGY_MESSAGE),
    ]


def test_only_one_optimistic_message_at_a_time() -> None:
    history = MessageHistory()
    history.switch("thread-a")
    history.submit("first")

    with pytest.raises(ReplyPendingError):
        history.submit("second")

    assert len(history) == 1


def test_switch_discards_late_replies() -> None:
    history = MessageHistory()
    history.switch("thread-a")
    stale = history.submit("question for A")

    fresh = history.switch("thread-b")
    assert history.replace(fresh, [ChatMessage.user("old B question"), ChatMessage.assistant("old B answer")])

    assert not history.resolve(stale, "answer for A")
    assert not history.fail(stale)
    assert not history.splice(stale, [ChatMessage.user("x")])
    assert [m.content for m in history.messages] == ["old B question", "old B answer"]
    assert history.thread_id == "thread-b"


def test_late_history_fetch_for_previous_thread_is_ignored() -> None:
    history = MessageHistory()
    ticket_a = history.switch("thread-a")
    ticket_b = history.switch("thread-b")

    assert history.replace(ticket_b, [ChatMessage.user("B")])
    assert not history.replace(ticket_a, [ChatMessage.user("A")])
    assert [m.content for m in history.messages] == ["B"]


def test_clear_resets_thread_and_generation() -> None:
    history = MessageHistory()
    ticket = history.switch("thread-a")
    history.submit("hi")

    history.clear()

    assert history.messages == []
    assert history.thread_id is None
    assert history.state is ReplyState.IDLE
    assert not history.is_current(ticket)


def test_reserved_slot_blocks_submit_until_spliced() -> None:
    history = MessageHistory()
    history.switch("thread-a")

    ticket = history.reserve()
    with pytest.raises(ReplyPendingError):
        history.submit("typed while a voice question is pending")

    assert history.splice(ticket, [ChatMessage.user("voice Q"), ChatMessage.assistant("voice A")])
    assert history.state is ReplyState.IDLE
    assert [m.content for m in history.messages] == ["voice Q", "voice A"]


def test_released_slot_adds_nothing() -> None:
    history = MessageHistory()
    history.switch("thread-a")
    ticket = history.reserve()

    assert history.release(ticket)
    assert history.messages == []
    assert history.state is ReplyState.IDLE

    stale = history.reserve()
    history.switch("thread-b")
    assert not history.release(stale)
