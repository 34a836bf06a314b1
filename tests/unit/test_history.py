"""Unit tests for the session history reader."""

from __future__ import annotations

import pytest

from pykeba.constants import HISTORY_FIRST_SLOT, HISTORY_LAST_SLOT
from pykeba.exceptions import DecodeError
from pykeba.history import read_history
from pykeba.transports.exceptions import TransportTimeoutError


class TestReadHistory:
    """Tests for read_history() termination and de-duplication."""

    @pytest.mark.asyncio
    async def test_terminator_duplicates_and_empty_slots(self, history_transport) -> None:
        """Test slots [5, 5, 6, 0, 7, -1, 8] yield sessions [5, 6, 7]."""
        transport = history_transport([5, 5, 6, 0, 7, -1, 8])

        history = await read_history(transport)

        assert [entry.session_id for entry in history] == [5, 6, 7]
        assert transport.commands == [f"report {slot}" for slot in range(100, 106)]
        assert "report 106" not in transport.commands

    @pytest.mark.asyncio
    async def test_full_range_without_terminator(self, history_transport) -> None:
        """Test all 31 slots are read when no slot ends the history."""
        session_ids = [0, 1, 1, 2, 3, 3, 3, 0, 4] + list(range(5, 27))
        assert len(session_ids) == 31
        transport = history_transport(session_ids)

        history = await read_history(transport)

        assert [entry.session_id for entry in history] == list(range(1, 27))
        assert len(transport.commands) == 31
        assert transport.commands[0] == "report 100"
        assert transport.commands[-1] == "report 130"

    @pytest.mark.asyncio
    async def test_slot_range_constants(self, history_transport) -> None:
        transport = history_transport(range(1, 40))

        history = await read_history(transport)

        assert len(history) == HISTORY_LAST_SLOT - HISTORY_FIRST_SLOT + 1

    @pytest.mark.asyncio
    async def test_only_adjacent_repeats_are_skipped(self, history_transport) -> None:
        """Test a repeated session separated by another one is kept."""
        transport = history_transport([5, 6, 5, -1])

        history = await read_history(transport)

        assert [entry.session_id for entry in history] == [5, 6, 5]

    @pytest.mark.asyncio
    async def test_repeat_across_empty_slot_is_skipped(self, history_transport) -> None:
        """Test the comparison is against the last accepted entry, not the last slot."""
        transport = history_transport([5, 0, 5, -1])

        history = await read_history(transport)

        assert [entry.session_id for entry in history] == [5]

    @pytest.mark.asyncio
    async def test_first_slot_terminates(self, history_transport) -> None:
        """Test an empty history returns an empty list after one exchange."""
        transport = history_transport([-1, 4])

        history = await read_history(transport)

        assert history == []
        assert transport.commands == ["report 100"]

    @pytest.mark.asyncio
    async def test_keeps_first_of_duplicates(self, history_transport) -> None:
        """Test the first slot reporting a session is the one kept."""
        transport = history_transport([5, 5, -1])
        transport.replies["report 101"] = b'{"Session ID": 5, "E pres": 999}'

        history = await read_history(transport)

        assert len(history) == 1
        assert history[0].energy == 100

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failing_slot", [100, 103, 130])
    async def test_failed_exchange_aborts(self, history_transport, failing_slot: int) -> None:
        """Test a failure at any slot fails the whole call."""
        transport = history_transport(range(1, 32))
        error = TransportTimeoutError("no reply")
        transport.replies[f"report {failing_slot}"] = error

        with pytest.raises(TransportTimeoutError) as exc_info:
            await read_history(transport)

        assert exc_info.value is error
        assert transport.commands[-1] == f"report {failing_slot}"

    @pytest.mark.asyncio
    async def test_malformed_slot_aborts(self, history_transport) -> None:
        transport = history_transport([1, 2, 3, -1])
        transport.replies["report 102"] = b'{"Session ID": "3"}'

        with pytest.raises(DecodeError):
            await read_history(transport)

    @pytest.mark.asyncio
    async def test_custom_slot_range(self, history_transport) -> None:
        transport = history_transport([1, 2, 3, 4])

        history = await read_history(transport, first_slot=101, last_slot=102)

        assert [entry.session_id for entry in history] == [2, 3]
        assert transport.commands == ["report 101", "report 102"]

    @pytest.mark.asyncio
    async def test_each_call_builds_fresh_list(self, history_transport) -> None:
        transport = history_transport([1, 2, -1])

        first = await read_history(transport)
        second = await read_history(transport)

        assert first == second
        assert first is not second
