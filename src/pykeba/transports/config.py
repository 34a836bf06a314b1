"""Transport configuration.

This module provides the TransportConfig dataclass for configuring a wallbox
connection in a uniform way, supporting serialization to/from dictionaries
for storage (e.g. Home Assistant config entries).

Example:
    config = TransportConfig(host="192.168.1.50")
    config.validate()

    # Serialize to dict for storage
    data = config.to_dict()

    # Restore from dict
    restored = TransportConfig.from_dict(data)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pykeba.constants import DEFAULT_PORT, DEFAULT_TIMEOUT

_PORT_MAX = 65535


@dataclass
class TransportConfig:
    """Configuration for a single wallbox connection.

    Attributes:
        host: IP address or hostname of the wallbox
        port: UDP port of the wallbox (default 7090)
        timeout: Read deadline per exchange in seconds (default 2.0)
        local_port: Local port to bind, 0 for an ephemeral port
    """

    host: str
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    local_port: int = 0

    def validate(self) -> None:
        """Validate configuration completeness.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.host:
            raise ValueError("host is required")
        if not 1 <= self.port <= _PORT_MAX:
            raise ValueError(f"port must be 1-{_PORT_MAX}, got {self.port}")
        if not 0 <= self.local_port <= _PORT_MAX:
            raise ValueError(f"local_port must be 0-{_PORT_MAX}, got {self.local_port}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "host": self.host,
            "port": self.port,
            "timeout": self.timeout,
            "local_port": self.local_port,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TransportConfig:
        """Create configuration from dictionary.

        Args:
            data: Dictionary with configuration values (from to_dict() or
                a stored config entry); missing keys take their defaults

        Returns:
            TransportConfig instance with values from dictionary
        """
        return cls(
            host=data.get("host", ""),
            port=data.get("port", DEFAULT_PORT),
            timeout=data.get("timeout", DEFAULT_TIMEOUT),
            local_port=data.get("local_port", 0),
        )


__all__ = ["TransportConfig"]
