"""KEBA wallbox client.

This module provides the KebaClient façade over the UDP transport and the
report decoder. It is read-only: it queries reports and never sends control
commands.

Key Features:
- Async/await support with asyncio
- One exchange in flight per client (shared safely between polling tasks)
- Strongly typed, frozen report models
- No internal retries; a failed poll is simply retried on the next cycle
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from .constants import (
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    REPORT_CONFIG,
    REPORT_SESSION,
    REPORT_SYSTEM,
    report_command,
)
from .decoder import decode
from .history import read_history
from .models import LiveConfig, LiveSession, SessionLogEntry, SystemInfo, WallboxReport
from .transports.config import TransportConfig
from .transports.protocol import ReportTransport
from .transports.udp import UDPTransport

_LOGGER = logging.getLogger(__name__)

ReportT = TypeVar("ReportT", bound=WallboxReport)


class KebaClient:
    """KEBA wallbox UDP client.

    Example:
        ```python
        async with KebaClient("192.168.1.50") as client:
            config = await client.fetch_config()
            session = await client.fetch_session()
            print(f"State: {config.charging_state}, Power: {session.power_w}W")

            for entry in await client.fetch_history():
                print(entry.session_id, entry.energy_wh)
        ```
    """

    def __init__(
        self,
        host: str,
        *,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        local_port: int = 0,
        transport: ReportTransport | None = None,
    ) -> None:
        """Initialize the wallbox client.

        Args:
            host: IP address or hostname of the wallbox
            port: UDP port of the wallbox (default: 7090)
            timeout: Read deadline per exchange in seconds (default: 2.0)
            local_port: Local port to bind, 0 for an ephemeral port
            transport: Optional transport to use instead of a UDPTransport
                built from the arguments above
        """
        self.host = host
        if transport is None:
            transport = UDPTransport(
                host,
                port=port,
                timeout=timeout,
                local_port=local_port,
            )
        self._transport: ReportTransport = transport

    @classmethod
    def from_config(cls, config: TransportConfig) -> KebaClient:
        """Create a client from a validated TransportConfig.

        Raises:
            ValueError: If the configuration is invalid
        """
        config.validate()
        return cls(
            config.host,
            port=config.port,
            timeout=config.timeout,
            local_port=config.local_port,
        )

    async def __aenter__(self) -> KebaClient:
        """Async context manager entry, resolves the wallbox address."""
        await self.resolve()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit; every exchange closes its own socket."""

    @property
    def transport(self) -> ReportTransport:
        return self._transport

    async def resolve(self) -> None:
        """Resolve the wallbox address ahead of the first poll.

        Transports without name resolution are left alone.

        Raises:
            TransportConnectionError: If the host cannot be resolved
        """
        if isinstance(self._transport, UDPTransport):
            await self._transport.resolve()

    async def _query(self, report: int, schema: type[ReportT]) -> ReportT:
        raw = await self._transport.exchange(report_command(report))
        return decode(raw, schema)

    async def fetch_system_info(self) -> SystemInfo:
        """Get station identity (report 1).

        Raises:
            TransportError: If the exchange fails
            DecodeError: If the reply cannot be decoded
        """
        return await self._query(REPORT_SYSTEM, SystemInfo)

    async def fetch_config(self) -> LiveConfig:
        """Get operating state and limits (report 2).

        Raises:
            TransportError: If the exchange fails
            DecodeError: If the reply cannot be decoded
        """
        return await self._query(REPORT_CONFIG, LiveConfig)

    async def fetch_session(self) -> LiveSession:
        """Get telemetry of the current session (report 3).

        Raises:
            TransportError: If the exchange fails
            DecodeError: If the reply cannot be decoded
        """
        return await self._query(REPORT_SESSION, LiveSession)

    async def fetch_history(self) -> list[SessionLogEntry]:
        """Get past charging sessions (reports 100-130).

        Up to 31 exchanges; a failure in any of them fails the whole call.

        Raises:
            TransportError: If any slot exchange fails
            DecodeError: If any slot reply cannot be decoded
        """
        history = await read_history(self._transport)
        _LOGGER.debug("Fetched %d history entries from %s", len(history), self.host)
        return history


__all__ = ["KebaClient"]
