"""Tests for the interactive loop and key dispatch."""
from __future__ import annotations

import pytest

import keys
from cli import CLI
from conftest import FakeRepository, RecordingPresenter, ScriptedKeys
from session import Mode, Session


def _run(tickets, key_seq):
    session = Session(FakeRepository(tickets))
    presenter = RecordingPresenter()
    CLI(session, presenter, ScriptedKeys(key_seq)).run()
    return session, presenter


def test_down_keys_wrap_around(abc_tickets):
    session, presenter = _run(abc_tickets, [keys.DOWN, "j", keys.DOWN, "q"])
    assert session.cursor == 0
    assert [f.cursor for f in presenter.frames] == [0, 1, 2, 0]


def test_up_keys_move_backwards(abc_tickets):
    session, _ = _run(abc_tickets, ["k", keys.UP, "q"])
    assert session.cursor == 1


@pytest.mark.parametrize("quit_key", ["q", keys.ESC])
def test_quit_keys_stop_before_further_input(abc_tickets, quit_key):
    session, presenter = _run(abc_tickets, [quit_key, "j", "j"])
    assert session.cursor == 0
    assert len(presenter.frames) == 1


def test_edit_key_switches_mode(abc_tickets):
    _, presenter = _run(abc_tickets, ["j", "l", "q"])
    last = presenter.frames[-1]
    assert last.mode is Mode.EDIT
    assert last.selected_title == "Ticket B"


def test_back_key_returns_to_normal(abc_tickets):
    _, presenter = _run(abc_tickets, ["l", "s", "q"])
    assert [f.mode for f in presenter.frames] == [Mode.NORMAL, Mode.EDIT, Mode.NORMAL]


def test_unbound_keys_are_ignored(abc_tickets):
    session, presenter = _run(abc_tickets, ["x", keys.LEFT, keys.ENTER, "J", "q"])
    assert session.cursor == 0
    assert session.mode is Mode.NORMAL
    assert len(presenter.frames) == 5


def test_end_of_input_stops_loop(abc_tickets):
    session, presenter = _run(abc_tickets, ["j"])
    assert session.cursor == 1
    assert len(presenter.frames) == 2


def test_empty_session_survives_every_key():
    session, presenter = _run([], ["j", "k", "l", "s", "q"])
    assert session.cursor is None
    assert all(f.rows == () for f in presenter.frames)


def test_handle_key_return_value(abc_tickets):
    app = CLI(Session(FakeRepository(abc_tickets)), RecordingPresenter(), ScriptedKeys([]))
    assert app.handle_key("q") is True
    assert app.handle_key("j") is False
