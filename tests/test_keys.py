"""Tests for raw byte decoding, fed through a pipe."""
from __future__ import annotations

import os

import pytest

import keys
from keys import StdinKeySource


@pytest.fixture()
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


def _feed(pipe, data: bytes) -> StdinKeySource:
    read_fd, write_fd = pipe
    os.write(write_fd, data)
    os.close(write_fd)
    return StdinKeySource(read_fd)


def _drain(source: StdinKeySource):
    out = []
    while True:
        key = source.read_key()
        if not key:
            return out
        out.append(key)


def test_plain_characters(pipe):
    assert _drain(_feed(pipe, b"jkql")) == ["j", "k", "q", "l"]


def test_arrow_sequences(pipe):
    data = b"\x1b[A\x1b[B\x1b[C\x1b[D\x1bOB"
    assert _drain(_feed(pipe, data)) == [keys.UP, keys.DOWN, keys.RIGHT, keys.LEFT, keys.DOWN]


def test_lone_escape(pipe):
    assert _drain(_feed(pipe, b"\x1b")) == [keys.ESC]


def test_escape_followed_by_key(pipe):
    assert _drain(_feed(pipe, b"\x1bq")) == [keys.ESC, "q"]


def test_enter_and_unknown_sequence(pipe):
    assert _drain(_feed(pipe, b"\r\x1b[5~j")) == [keys.ENTER, "CSI_~", "j"]


def test_multibyte_character(pipe):
    assert _drain(_feed(pipe, "é".encode("utf-8"))) == ["é"]
