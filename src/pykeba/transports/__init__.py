"""Transport layer for pykeba.

This module provides the UDP request/response transport used to talk to the
wallbox, together with its configuration and exceptions.

Usage:
    from pykeba.transports import UDPTransport

    transport = UDPTransport("192.168.1.50")
    raw = await transport.exchange("report 1")
"""

from __future__ import annotations

from .config import TransportConfig
from .exceptions import (
    TransportConnectionError,
    TransportError,
    TransportReadError,
    TransportTimeoutError,
    TransportWriteError,
)
from .protocol import ReportTransport
from .udp import UDPTransport, exchange_datagram, resolve_host

__all__ = [
    # Transport implementations
    "UDPTransport",
    "exchange_datagram",
    "resolve_host",
    # Protocol
    "ReportTransport",
    # Configuration
    "TransportConfig",
    # Exceptions
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "TransportReadError",
    "TransportWriteError",
]
