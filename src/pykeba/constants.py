"""Constants for the KEBA wallbox UDP protocol.

Report numbers, network defaults and the enumerations used to interpret raw
report values (charging state, plug flags, session end reasons, DIP switches).
"""

from __future__ import annotations

from enum import IntEnum, IntFlag

# Network defaults
DEFAULT_PORT = 7090
DEFAULT_TIMEOUT = 2.0  # seconds, measured from send
RECV_BUFFER_SIZE = 2048

# Report numbers (sent as "report <n>")
REPORT_SYSTEM = 1
REPORT_CONFIG = 2
REPORT_SESSION = 3

# History slots, inclusive range
HISTORY_FIRST_SLOT = 100
HISTORY_LAST_SLOT = 130

# Raw value scaling
MILLI = 1000  # mA -> A, mW -> W
DECI_WH = 10  # 0.1 Wh -> Wh


def report_command(report: int) -> str:
    """Build the command string that requests a report.

    Example:
        >>> report_command(REPORT_SESSION)
        'report 3'
    """
    return f"report {report}"


class ChargingState(IntEnum):
    """Station state codes reported as ``State`` in report 2."""

    STARTING = 0
    NOT_READY = 1
    READY = 2
    CHARGING = 3
    ERROR = 4
    AUTH_REJECTED = 5


class PlugStatus(IntFlag):
    """Plug and cable flags reported as ``Plug`` in report 2."""

    STATION = 0b001  # cable plugged in at the station
    LOCKED = 0b010  # cable locked at the station
    EV = 0b100  # cable plugged in at the vehicle


class EndReason(IntEnum):
    """Reasons a charging session ended (``reason`` in the history slots)."""

    UNPLUGGED = 1
    DEAUTHORIZED = 10  # ended with an RFID card


# DIP switch banks: DSW1 occupies the high byte, DSW2 the low byte.
# Position 1 is the most significant bit of its bank.
_DIP_BANK_1 = 1 << 16
_DIP_BANK_2 = 1 << 8


class DipSwitches(IntFlag):
    """16-bit DIP switch register reported as ``DIP-Sw`` in report 1.

    Bits without a named member are kept as-is.
    """

    MODBUS = _DIP_BANK_1 >> 2  # DSW1.2
    UDP = _DIP_BANK_1 >> 3  # DSW1.3

    def has(self, flag: int) -> bool:
        """Return True if any bit of ``flag`` is set."""
        return bool(int(self) & flag)


def dip_switch(bank: int, position: int) -> DipSwitches:
    """Return the mask of a single DIP switch.

    Args:
        bank: Switch bank, 1 (DSW1) or 2 (DSW2)
        position: Switch position within the bank, 1-8

    Returns:
        DipSwitches with only that switch's bit set

    Raises:
        ValueError: If bank or position is out of range

    Example:
        >>> dip_switch(1, 3) == DipSwitches.UDP
        True
    """
    if not 1 <= position <= 8:
        raise ValueError(f"DIP switch position must be 1-8, got {position}")
    if bank == 1:
        return DipSwitches(_DIP_BANK_1 >> position)
    if bank == 2:
        return DipSwitches(_DIP_BANK_2 >> position)
    raise ValueError(f"DIP switch bank must be 1 or 2, got {bank}")
