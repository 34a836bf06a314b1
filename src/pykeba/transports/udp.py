"""UDP transport implementation.

This module provides the UDPTransport class for local communication with a
KEBA wallbox over its UDP interface (port 7090).

The protocol is a plain request/response exchange: the client sends an ASCII
command such as ``report 2`` and the wallbox answers with one datagram
holding a JSON object. There is no sequence number in the reply, so a reply
can only be attributed to the request that is currently outstanding.

IMPORTANT: One Exchange At A Time
---------------------------------
Each UDPTransport instance allows only ONE exchange in flight. Concurrent
callers are serialised by an asyncio lock; share one transport (or one
KebaClient) between all polling tasks talking to the same wallbox.

IMPORTANT: UDP Interface
------------------------
The wallbox only answers when its UDP interface is enabled by DIP switch
(DSW1.3). Some firmware revisions answer to port 7090 regardless of the
source port; use ``local_port=7090`` for those.
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from typing import Any

from pykeba.constants import DEFAULT_PORT, DEFAULT_TIMEOUT

from .exceptions import (
    TransportConnectionError,
    TransportReadError,
    TransportTimeoutError,
    TransportWriteError,
)

_LOGGER = logging.getLogger(__name__)

# (host, port) for IPv4; IPv6 socket addresses also carry flowinfo and scope id
Address = tuple[Any, ...]


class _ReplyProtocol(asyncio.DatagramProtocol):
    """Datagram protocol that resolves a future with the first reply.

    asyncio reports a failed send through ``error_received`` from inside
    ``sendto``; ``send`` captures that error so it is not mistaken for a
    failure while waiting for the reply.
    """

    def __init__(self) -> None:
        self.reply: asyncio.Future[bytes] = asyncio.get_running_loop().create_future()
        self._sending = False
        self._send_error: OSError | None = None

    def send(self, transport: asyncio.DatagramTransport, data: bytes) -> None:
        """Send ``data``, raising the OSError the loop reported for it."""
        self._send_error = None
        self._sending = True
        try:
            transport.sendto(data)
        finally:
            self._sending = False
        if self._send_error is not None:
            raise self._send_error

    def datagram_received(self, data: bytes, addr: Any) -> None:
        if not self.reply.done():
            self.reply.set_result(data)

    def error_received(self, exc: Exception) -> None:
        if self._sending and isinstance(exc, OSError):
            self._send_error = exc
            return
        if not self.reply.done():
            self.reply.set_exception(exc)

    def connection_lost(self, exc: Exception | None) -> None:
        if self.reply.done():
            return
        if exc is None:
            # Closed by us after the exchange ended; nobody is waiting.
            self.reply.cancel()
            return
        error = TransportReadError(f"Socket closed unexpectedly: {exc}")
        error.__cause__ = exc
        self.reply.set_exception(error)


def _wildcard_for(host: str) -> str:
    """Return the wildcard bind address matching the family of ``host``."""
    if ipaddress.ip_address(host).version == 6:
        return "::"
    return "0.0.0.0"


async def resolve_host(host: str, port: int = DEFAULT_PORT) -> Address:
    """Resolve a wallbox host name to a socket address.

    Literal IPv4/IPv6 addresses are returned unchanged. Host names are
    resolved through the system resolver and the first record is used.

    Args:
        host: IP address or hostname of the wallbox
        port: UDP port of the wallbox

    Returns:
        Socket address, (ip, port) or the full IPv6 sockaddr

    Raises:
        TransportConnectionError: If the name cannot be resolved
    """
    try:
        ipaddress.ip_address(host)
    except ValueError:
        pass
    else:
        return host, port

    loop = asyncio.get_running_loop()
    try:
        records = await loop.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
    except OSError as err:
        raise TransportConnectionError(f"Failed to resolve '{host}': {err}") from err

    if not records:
        raise TransportConnectionError(f"No DNS records found for '{host}'")

    sockaddr = tuple(records[0][4])
    _LOGGER.debug("Resolved %s to %s (%d records)", host, sockaddr[0], len(records))
    return sockaddr


async def exchange_datagram(
    address: Address,
    command: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    local_port: int = 0,
) -> bytes:
    """Send one command datagram and return the single reply datagram.

    A fresh UDP socket is opened for every exchange and closed on every exit
    path. The read deadline starts when the command has been sent.

    Args:
        address: Resolved socket address of the wallbox
        command: Command text, e.g. ``"report 1"``
        timeout: Seconds to wait for the reply
        local_port: Local port to bind, 0 for an ephemeral port

    Returns:
        Raw reply payload

    Raises:
        TransportConnectionError: If the socket cannot be opened
        TransportWriteError: If the command cannot be sent
        TransportReadError: If the socket reports an error while waiting
        TransportTimeoutError: If no reply arrives within ``timeout``
    """
    host, port = address[0], address[1]
    loop = asyncio.get_running_loop()
    local_addr = (_wildcard_for(host), local_port) if local_port else None

    try:
        transport, protocol = await loop.create_datagram_endpoint(
            _ReplyProtocol,
            local_addr=local_addr,
            remote_addr=address,
        )
    except OSError as err:
        _LOGGER.error("Failed to open UDP socket to %s:%s: %s", host, port, err)
        raise TransportConnectionError(
            f"Failed to open UDP socket to {host}:{port}: {err}"
        ) from err

    try:
        try:
            protocol.send(transport, command.encode("utf-8"))
        except OSError as err:
            _LOGGER.error("Failed to send %r to %s:%s: %s", command, host, port, err)
            raise TransportWriteError(f"Failed to send {command!r}: {err}") from err

        try:
            reply = await asyncio.wait_for(protocol.reply, timeout=timeout)
        except TimeoutError as err:
            _LOGGER.warning(
                "Timeout waiting for reply to %r from %s:%s", command, host, port
            )
            raise TransportTimeoutError(
                f"No reply to {command!r} from {host}:{port} within {timeout:.1f}s. "
                "Verify the UDP interface is enabled (DIP switch DSW1.3)."
            ) from err
        except OSError as err:
            _LOGGER.error("Socket error communicating with %s:%s: %s", host, port, err)
            raise TransportReadError(f"Socket error: {err}") from err
    finally:
        transport.close()

    _LOGGER.debug("Reply to %r from %s:%s: %d bytes", command, host, port, len(reply))
    return reply


class UDPTransport:
    """UDP transport for local wallbox communication.

    Example:
        transport = UDPTransport("192.168.1.50")
        raw = await transport.exchange("report 2")

    Note:
        The destination is resolved on first use and cached for the
        lifetime of the transport.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        local_port: int = 0,
    ) -> None:
        """Initialize UDP transport.

        Args:
            host: IP address or hostname of the wallbox
            port: UDP port (default 7090)
            timeout: Read deadline per exchange in seconds (default 2.0)
            local_port: Local port to bind, 0 for an ephemeral port
        """
        self._host = host
        self._port = port
        self._timeout = timeout
        self._local_port = local_port
        self._address: Address | None = None
        self._lock = asyncio.Lock()

    @property
    def host(self) -> str:
        """Get the configured wallbox host."""
        return self._host

    @property
    def port(self) -> int:
        """Get the wallbox UDP port."""
        return self._port

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def local_port(self) -> int:
        return self._local_port

    @property
    def address(self) -> Address | None:
        """Get the resolved address, or None before the first resolution."""
        return self._address

    async def resolve(self) -> Address:
        """Resolve the wallbox address once and cache it.

        Raises:
            TransportConnectionError: If the host cannot be resolved
        """
        if self._address is None:
            self._address = await resolve_host(self._host, self._port)
            _LOGGER.info(
                "UDP transport ready for %s (%s:%s)",
                self._host,
                self._address[0],
                self._address[1],
            )
        return self._address

    async def exchange(self, command: str) -> bytes:
        """Exchange one command for one reply, serialised per transport.

        Raises:
            TransportError: If resolution, send or receive fails
        """
        async with self._lock:
            address = await self.resolve()
            return await exchange_datagram(
                address,
                command,
                timeout=self._timeout,
                local_port=self._local_port,
            )


__all__ = [
    "UDPTransport",
    "exchange_datagram",
    "resolve_host",
]
