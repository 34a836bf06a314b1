"""Transport-specific exceptions.

This module provides exception classes for UDP exchanges with the wallbox,
allowing clients to tell resolution, send, receive and deadline failures
apart.

All transport exceptions inherit from :class:`~pykeba.exceptions.KebaError`
so callers can use a single ``except KebaError`` to catch both transport and
decode failures.
"""

from __future__ import annotations

from pykeba.exceptions import KebaError


class TransportError(KebaError):
    """Base exception for all transport errors."""

    pass


class TransportConnectionError(TransportError):
    """Failed to resolve the wallbox address or open the UDP socket."""

    pass


class TransportTimeoutError(TransportError):
    """No reply datagram arrived before the read deadline."""

    pass


class TransportReadError(TransportError):
    """The socket reported an error while waiting for the reply."""

    pass


class TransportWriteError(TransportError):
    """Failed to send the command datagram."""

    pass


__all__ = [
    "TransportConnectionError",
    "TransportError",
    "TransportReadError",
    "TransportTimeoutError",
    "TransportWriteError",
]
