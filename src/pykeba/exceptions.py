"""Exceptions raised by pykeba.

Every error raised by the library derives from :class:`KebaError` so callers
can use a single ``except KebaError`` around a poll cycle. Transport failures
live in :mod:`pykeba.transports.exceptions`; payload failures are reported as
:class:`DecodeError`.
"""

from __future__ import annotations


class KebaError(Exception):
    """Base exception for all pykeba errors."""

    pass


class DecodeError(KebaError):
    """A wallbox reply could not be decoded into the expected report.

    Raised when the reply is not well-formed JSON, is not a JSON object, or a
    field carries a value of an incompatible type.
    """

    def __init__(self, message: str, payload: bytes | str | None = None) -> None:
        """Initialize with a message and the offending payload.

        Args:
            message: Human-readable description of the failure
            payload: Raw reply that failed to decode (kept for diagnostics)
        """
        self.payload = payload
        super().__init__(message)
