"""Pytest configuration and fixtures for pykeba tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest

from pykeba.constants import HISTORY_FIRST_SLOT

# Sample wallbox replies
SAMPLES_DIR = Path(__file__).parent / "samples"


def load_sample(filename: str) -> bytes:
    """Load a sample reply as the raw datagram payload."""
    return (SAMPLES_DIR / filename).read_bytes()


class ScriptedTransport:
    """Fake transport answering commands from a fixed table.

    A table value that is an exception instance is raised instead of
    returned. Every command received is recorded in ``commands``.
    """

    def __init__(self, replies: dict[str, bytes | Exception]) -> None:
        self.replies = replies
        self.commands: list[str] = []

    async def exchange(self, command: str) -> bytes:
        self.commands.append(command)
        reply = self.replies[command]
        if isinstance(reply, Exception):
            raise reply
        return reply


def slot_reply(session_id: int, **fields: Any) -> bytes:
    """Build a history slot reply for the given session ID."""
    payload: dict[str, Any] = {
        "Session ID": session_id,
        "Curr HW": 16000,
        "E start": 1000 * max(session_id, 0),
        "E pres": 100,
        "started[s]": 10 * max(session_id, 0),
        "ended[s]": 10 * max(session_id, 0) + 5,
        "reason": 1,
    }
    payload.update(fields)
    return json.dumps(payload).encode()


@pytest.fixture
def system_response() -> bytes:
    """Sample report 1 reply."""
    return load_sample("report_1.json")


@pytest.fixture
def config_response() -> bytes:
    """Sample report 2 reply."""
    return load_sample("report_2.json")


@pytest.fixture
def session_response() -> bytes:
    """Sample report 3 reply."""
    return load_sample("report_3.json")


@pytest.fixture
def scripted_transport() -> type[ScriptedTransport]:
    """The ScriptedTransport class, for tests that build their own table."""
    return ScriptedTransport


@pytest.fixture
def history_transport() -> Callable[[Iterable[int]], ScriptedTransport]:
    """Factory for a transport whose history slots report the given session IDs.

    The first ID is served from slot 100, the next from slot 101, and so on.
    """

    def _make(session_ids: Iterable[int]) -> ScriptedTransport:
        replies: dict[str, bytes | Exception] = {
            f"report {HISTORY_FIRST_SLOT + index}": slot_reply(session_id)
            for index, session_id in enumerate(session_ids)
        }
        return ScriptedTransport(replies)

    return _make


@pytest.fixture
def history_entry_response() -> bytes:
    """Sample history slot reply (report 100) with RFID details."""
    return load_sample("report_100.json")


@pytest.fixture
def string_timestamps_response() -> bytes:
    """Sample history slot reply (report 101) with string timestamps."""
    return load_sample("report_101.json")
