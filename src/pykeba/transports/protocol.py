"""Transport protocol definition.

The client and the history reader only need a way to exchange one command
for one reply; anything implementing :class:`ReportTransport` will do
(the UDP transport, or a scripted fake in tests).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ReportTransport(Protocol):
    """Protocol for wallbox request/response transports."""

    async def exchange(self, command: str) -> bytes:  # pragma: no cover
        """Send a command and return the single reply datagram.

        Raises:
            TransportError: If no complete reply could be obtained
        """
        ...


__all__ = ["ReportTransport"]
