"""Integration tests against a live wallbox.

These tests only read reports. They are skipped unless KEBA_HOST is set in
the environment or in a .env file at the repository root.
"""

from __future__ import annotations

import pytest

from pykeba import KebaClient
from pykeba.constants import HISTORY_FIRST_SLOT, HISTORY_LAST_SLOT, ChargingState

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_system_info(client: KebaClient) -> None:
    """Test the station identifies itself."""
    info = await client.fetch_system_info()

    assert info.product
    assert info.serial
    assert info.udp_enabled


@pytest.mark.asyncio
async def test_config(client: KebaClient) -> None:
    config = await client.fetch_config()

    assert config.charging_state in set(ChargingState)
    assert config.max_current >= 0


@pytest.mark.asyncio
async def test_session(client: KebaClient) -> None:
    session = await client.fetch_session()

    assert session.total_energy >= session.energy >= 0


@pytest.mark.asyncio
async def test_history(client: KebaClient) -> None:
    """Test history entries are non-empty and free of adjacent repeats."""
    history = await client.fetch_history()

    assert len(history) <= HISTORY_LAST_SLOT - HISTORY_FIRST_SLOT + 1
    for previous, entry in zip(history, history[1:]):
        assert entry.session_id != previous.session_id
    assert all(entry.session_id > 0 for entry in history)
