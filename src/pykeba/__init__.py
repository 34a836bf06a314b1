"""Python client library for the KEBA wallbox UDP interface.

Usage:
    from pykeba import KebaClient

    async with KebaClient("192.168.1.50") as client:
        info = await client.fetch_system_info()
        config = await client.fetch_config()
        session = await client.fetch_session()
        history = await client.fetch_history()
"""

from __future__ import annotations

from .client import KebaClient
from .constants import (
    ChargingState,
    DipSwitches,
    EndReason,
    PlugStatus,
    dip_switch,
)
from .decoder import decode
from .exceptions import DecodeError, KebaError
from .history import read_history
from .models import (
    LiveConfig,
    LiveSession,
    SessionLogEntry,
    SystemInfo,
    format_dip_switches,
    parse_dip_switches,
)
from .scalar import ConcurrentScalar
from .transports import (
    TransportConfig,
    TransportConnectionError,
    TransportError,
    TransportReadError,
    TransportTimeoutError,
    TransportWriteError,
    UDPTransport,
)

__version__ = "0.1.0"
__all__ = [
    "KebaClient",
    "UDPTransport",
    "TransportConfig",
    "read_history",
    "decode",
    # Reports
    "SystemInfo",
    "LiveConfig",
    "LiveSession",
    "SessionLogEntry",
    # Enums
    "ChargingState",
    "PlugStatus",
    "EndReason",
    "DipSwitches",
    "dip_switch",
    "parse_dip_switches",
    "format_dip_switches",
    # Concurrency
    "ConcurrentScalar",
    # Exceptions
    "KebaError",
    "DecodeError",
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "TransportReadError",
    "TransportWriteError",
]
