"""Transport modes, priorities, and billing units.

Each enum is a closed set. The lookup tables below are keyed by every
member, and ``tests/domain/test_types.py`` fails if a member is added
without a matching entry.
"""

from __future__ import annotations

from enum import StrEnum

from freightctl.domain.errors import UnsupportedModeError, UnsupportedPriorityError


class TransportMode(StrEnum):
    """Main transport mode of a shipment."""

    AIR = "AIR"
    ROAD = "ROAD"
    SEA = "SEA"
    RAIL = "RAIL"


class Priority(StrEnum):
    """Delivery service level."""

    STANDARD = "STANDARD"
    NORMAL = "NORMAL"
    URGENT = "URGENT"


class TaxableUnit(StrEnum):
    """Unit the taxable mass is expressed in."""

    KG = "kg"
    PAYABLE_UNIT = "payable-unit"


# kg-equivalent per m³. SEA yields tonnes-equivalent (1 m³ = 1 t).
VOLUMETRIC_RATIOS: dict[TransportMode, float] = {
    TransportMode.AIR: 167,
    TransportMode.ROAD: 333,
    TransportMode.RAIL: 250,
    TransportMode.SEA: 1,
}

PRIORITY_COEFFICIENTS: dict[Priority, float] = {
    Priority.STANDARD: 1.0,
    Priority.NORMAL: 1.1,
    Priority.URGENT: 1.3,
}


def parse_mode(value: TransportMode | str) -> TransportMode:
    """Coerce *value* to a TransportMode (case-insensitive).

    Raises:
        UnsupportedModeError: If *value* is not a known mode.
    """
    if isinstance(value, TransportMode):
        return value
    try:
        return TransportMode(str(value).strip().upper())
    except ValueError:
        raise UnsupportedModeError(value) from None


def parse_priority(value: Priority | str | None) -> Priority:
    """Coerce *value* to a Priority, defaulting to STANDARD when unset."""
    if value is None or value == "":
        return Priority.STANDARD
    if isinstance(value, Priority):
        return value
    try:
        return Priority(str(value).strip().upper())
    except ValueError:
        raise UnsupportedPriorityError(value) from None
