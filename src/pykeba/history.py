"""Charging session history.

The wallbox keeps its recent sessions in report slots 100-130. Slots are
read in order until the wallbox signals the end of the stored history with
a negative session ID. Empty slots report session ID 0, and the most recent
session may be repeated in adjacent slots.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .constants import HISTORY_FIRST_SLOT, HISTORY_LAST_SLOT, report_command
from .decoder import decode
from .models import SessionLogEntry

if TYPE_CHECKING:
    from .transports.protocol import ReportTransport

_LOGGER = logging.getLogger(__name__)


async def read_history(
    transport: ReportTransport,
    first_slot: int = HISTORY_FIRST_SLOT,
    last_slot: int = HISTORY_LAST_SLOT,
) -> list[SessionLogEntry]:
    """Read the session history stored on the wallbox.

    Each slot is requested and decoded in turn:

    - a negative session ID ends the history; later slots are not queried
    - session ID 0 is an empty slot and is skipped
    - a session ID equal to the last accepted entry's is a repeat and is
      skipped (only adjacent repeats are detected)

    Args:
        transport: Transport used for the slot exchanges
        first_slot: First history slot to read (inclusive)
        last_slot: Last history slot to read (inclusive)

    Returns:
        Sessions in the order the wallbox reports them

    Raises:
        TransportError: If any slot exchange fails (no partial result)
        DecodeError: If any slot reply cannot be decoded
    """
    history: list[SessionLogEntry] = []

    for slot in range(first_slot, last_slot + 1):
        raw = await transport.exchange(report_command(slot))
        entry = decode(raw, SessionLogEntry)

        if entry.session_id < 0:
            _LOGGER.debug("History ends at slot %d", slot)
            break
        if entry.session_id == 0:
            continue
        if history and entry.session_id == history[-1].session_id:
            _LOGGER.debug("Slot %d repeats session %d", slot, entry.session_id)
            continue

        history.append(entry)

    _LOGGER.debug("Read %d sessions from history", len(history))
    return history


__all__ = ["read_history"]
