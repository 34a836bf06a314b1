"""Pydantic models for wallbox reports.

Each model maps the short keys chosen by the wallbox firmware (``"Curr HW"``,
``"E pres"``, ``"DIP-Sw"``...) onto Python field names through explicit
aliases. Raw values are kept in device units; properties expose the scaled
values:

- Current: mA (``*_a`` properties: A)
- Power: mW (``power_w``: W)
- Energy: 0.1 Wh (``*_wh`` properties: Wh)
- Time: seconds of the wallbox's internal clock

Models are frozen snapshots. Validation is strict: a JSON string never
satisfies an integer field and vice versa.
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    model_validator,
)

from .constants import (
    DECI_WH,
    MILLI,
    ChargingState,
    DipSwitches,
    EndReason,
    PlugStatus,
)

_DIP_PATTERN = re.compile(r"0x([0-9a-fA-F]+)")
_SECONDS_PATTERN = re.compile(r"-?[0-9]+")
_DIP_MAX = 0xFFFF


def parse_dip_switches(text: str) -> DipSwitches:
    """Parse the ``0x<hex>`` wire form of the DIP switch register.

    Hex digits are case-insensitive and may carry leading zeros.

    Args:
        text: Wire value, e.g. ``"0x2022"``

    Returns:
        DipSwitches value

    Raises:
        ValueError: If the text is not ``0x<hex>`` or exceeds 16 bits

    Example:
        >>> int(parse_dip_switches("0x00ff"))
        255
    """
    match = _DIP_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f"DIP switches must be formatted as 0x<hex>, got {text!r}")
    value = int(match.group(1), 16)
    if value > _DIP_MAX:
        raise ValueError(f"DIP switches value {text!r} exceeds 16 bits")
    return DipSwitches(value)


def format_dip_switches(value: int) -> str:
    """Format a DIP switch register in its ``0x<hex>`` wire form.

    Example:
        >>> format_dip_switches(DipSwitches.UDP)
        '0x2000'
    """
    return f"0x{int(value):x}"


def _validate_dip_switches(value: Any) -> DipSwitches:
    if isinstance(value, DipSwitches):
        return value
    if isinstance(value, str):
        return parse_dip_switches(value)
    raise ValueError(f"DIP switches must be a 0x<hex> string, got {type(value).__name__}")


def _coerce_seconds(value: Any) -> int:
    """Coerce a history timestamp, falling back to 0 for unusable values.

    Empty history slots omit or blank these fields, so nothing here fails.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else 0
    if isinstance(value, str) and _SECONDS_PATTERN.fullmatch(value):
        return int(value)
    return 0


DipSwitchField = Annotated[
    DipSwitches,
    PlainValidator(_validate_dip_switches),
    PlainSerializer(format_dip_switches, return_type=str, when_used="json"),
]
Seconds = Annotated[int, BeforeValidator(_coerce_seconds)]


class WallboxReport(BaseModel):
    """Base class for all wallbox reports.

    Wire keys are matched case-insensitively against the field aliases; an
    exact-case key takes precedence over a differently-cased duplicate.
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _match_wire_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        aliases = {
            info.alias.lower(): info.alias
            for info in cls.model_fields.values()
            if info.alias is not None
        }
        matched = dict(data)
        for key, value in data.items():
            if not isinstance(key, str):
                continue
            alias = aliases.get(key.lower())
            if alias is not None and alias not in data:
                matched[alias] = value
        return matched


class SystemInfo(WallboxReport):
    """Station identity (report 1)."""

    product: str = Field(default="", alias="Product")
    serial: str = Field(default="", alias="Serial")
    firmware: str = Field(default="", alias="Firmware")

    com_module: int = Field(default=0, alias="COM-module")
    backend: int = Field(default=0, alias="Backend")

    dip_switches: DipSwitchField = Field(default=DipSwitches(0), alias="DIP-Sw")

    @property
    def modbus_enabled(self) -> bool:
        """Modbus TCP interface enabled by DIP switch."""
        return self.dip_switches.has(DipSwitches.MODBUS)

    @property
    def udp_enabled(self) -> bool:
        """UDP (smart home) interface enabled by DIP switch."""
        return self.dip_switches.has(DipSwitches.UDP)


class LiveConfig(WallboxReport):
    """Operating state and limits (report 2)."""

    state: int = Field(default=0, alias="State")
    plug: int = Field(default=0, alias="Plug")

    # max current the hardware can handle (dip setting, car, cable, temperature reduction)
    max_current: int = Field(default=0, alias="Curr HW")  # mA

    # limits set by user
    current_limit: int = Field(default=0, alias="Curr user")  # mA
    energy_limit: int = Field(default=0, alias="Setenergy")  # 0.1 Wh

    uptime: int = Field(default=0, alias="Sec")  # s

    @property
    def charging_state(self) -> ChargingState | None:
        """Decoded station state, or None for codes unknown to this library."""
        try:
            return ChargingState(self.state)
        except ValueError:
            return None

    @property
    def plug_status(self) -> PlugStatus:
        """Plug flags, unknown bits kept."""
        return PlugStatus(self.plug)

    @property
    def station_plugged(self) -> bool:
        return bool(self.plug & PlugStatus.STATION)

    @property
    def cable_locked(self) -> bool:
        return bool(self.plug & PlugStatus.LOCKED)

    @property
    def ev_plugged(self) -> bool:
        return bool(self.plug & PlugStatus.EV)

    @property
    def max_current_a(self) -> float:
        return self.max_current / MILLI

    @property
    def current_limit_a(self) -> float:
        return self.current_limit / MILLI

    @property
    def energy_limit_wh(self) -> float:
        return self.energy_limit / DECI_WH


class LiveSession(WallboxReport):
    """Electrical telemetry of the current or most recent session (report 3)."""

    energy: int = Field(default=0, alias="E pres")  # 0.1 Wh
    total_energy: int = Field(default=0, alias="E total")  # 0.1 Wh

    voltage1: int = Field(default=0, alias="U1")  # V
    voltage2: int = Field(default=0, alias="U2")
    voltage3: int = Field(default=0, alias="U3")

    current1: int = Field(default=0, alias="I1")  # mA
    current2: int = Field(default=0, alias="I2")
    current3: int = Field(default=0, alias="I3")

    power: int = Field(default=0, alias="P")  # mW

    @property
    def energy_wh(self) -> float:
        """Energy delivered in the present session in Wh."""
        return self.energy / DECI_WH

    @property
    def total_energy_wh(self) -> float:
        """Lifetime energy delivered by the station in Wh."""
        return self.total_energy / DECI_WH

    @property
    def power_w(self) -> float:
        return self.power / MILLI

    @property
    def voltages(self) -> tuple[int, int, int]:
        return (self.voltage1, self.voltage2, self.voltage3)

    @property
    def currents_a(self) -> tuple[float, float, float]:
        return (
            self.current1 / MILLI,
            self.current2 / MILLI,
            self.current3 / MILLI,
        )


class SessionLogEntry(WallboxReport):
    """One past charging session (history slots, reports 100-130).

    ``session_id`` is 0 for an empty slot and negative past the end of the
    available history.
    """

    session_id: int = Field(default=0, alias="Session ID")

    max_current: int = Field(default=0, alias="Curr HW")  # mA

    # Energies before and during the session
    start_total: int = Field(default=0, alias="E start")  # 0.1 Wh
    energy: int = Field(default=0, alias="E pres")  # 0.1 Wh

    # Start and end seconds of the internal clock
    started: Seconds = Field(default=0, alias="started[s]")
    ended: Seconds = Field(default=0, alias="ended[s]")

    end_reason: int = Field(default=0, alias="reason")

    rfid_tag: str | None = Field(default=None, alias="RFID tag")
    rfid_class: str | None = Field(default=None, alias="RFID class")

    @property
    def end_total(self) -> int:
        """Cumulative energy reading at the end of the session (0.1 Wh)."""
        return self.start_total + self.energy

    @property
    def energy_wh(self) -> float:
        return self.energy / DECI_WH

    @property
    def duration(self) -> int:
        """Session length in seconds, 0 when a timestamp is unknown."""
        if not self.started or not self.ended or self.ended < self.started:
            return 0
        return self.ended - self.started

    @property
    def end_reason_code(self) -> EndReason | None:
        try:
            return EndReason(self.end_reason)
        except ValueError:
            return None


__all__ = [
    "LiveConfig",
    "LiveSession",
    "SessionLogEntry",
    "SystemInfo",
    "WallboxReport",
    "format_dip_switches",
    "parse_dip_switches",
]
