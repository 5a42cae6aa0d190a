"""Tariff tables and the repository that serves them.

A :class:`TariffTable` is an immutable snapshot: lane key × mode → unit
tariff, plus one default tariff per mode. A :class:`TariffRepository`
holds the current table and swaps it atomically when configuration is
reloaded. Callers take one snapshot per calculation so a quote never mixes
tariffs from two configuration versions.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, NamedTuple

import structlog

from freightctl.domain.quote import Lane
from freightctl.domain.types import TransportMode, parse_mode

if TYPE_CHECKING:
    from freightctl.config.models import TariffsConfig

log = structlog.get_logger(__name__)


class TariffLookup(NamedTuple):
    """Outcome of a tariff lookup."""

    tariff: float
    lane: Lane
    from_lane: bool


class TariffTable:
    """Read-only lane/mode tariff matrix with per-mode defaults."""

    __slots__ = ("_defaults", "_lanes")

    def __init__(
        self,
        lanes: Mapping[str, Mapping[TransportMode | str, float]],
        defaults: Mapping[TransportMode | str, float],
    ) -> None:
        self._lanes = MappingProxyType(
            {
                key.strip().upper(): MappingProxyType(
                    {parse_mode(mode): float(value) for mode, value in tariffs.items()}
                )
                for key, tariffs in lanes.items()
            }
        )
        resolved = {parse_mode(mode): float(value) for mode, value in defaults.items()}
        missing = [m.value for m in TransportMode if m not in resolved]
        if missing:
            msg = f"Default tariff missing for mode(s): {', '.join(missing)}"
            raise ValueError(msg)
        self._defaults = MappingProxyType(resolved)

    @classmethod
    def from_config(cls, config: TariffsConfig) -> TariffTable:
        return cls(config.lane_tariffs(), config.default_tariffs())

    @classmethod
    def reference(cls) -> TariffTable:
        """The built-in reference table with no overrides."""
        from freightctl.config.models import TariffsConfig

        return cls.from_config(TariffsConfig())

    @property
    def lanes(self) -> Mapping[str, Mapping[TransportMode, float]]:
        return self._lanes

    @property
    def defaults(self) -> Mapping[TransportMode, float]:
        return self._defaults

    def lookup(
        self,
        origin: str,
        destination: str,
        mode: TransportMode | str,
    ) -> TariffLookup:
        """Find the unit tariff for a lane and mode.

        Falls back to the mode's default tariff when the lane has no entry
        for *mode*, logging a ``tariff.fallback`` warning. Never fails for
        a missing lane.

        Raises:
            UnsupportedModeError: If *mode* is not a known transport mode.
        """
        mode = parse_mode(mode)
        lane = Lane.of(origin, destination)
        lane_tariffs = self._lanes.get(lane.key)
        if lane_tariffs is not None and mode in lane_tariffs:
            return TariffLookup(lane_tariffs[mode], lane, True)

        default = self._defaults[mode]
        log.warning("tariff.fallback", lane=lane.key, mode=mode.value, tariff=default)
        return TariffLookup(default, lane, False)

    def rows(self, mode: TransportMode | str | None = None) -> list[dict[str, object]]:
        """Flatten the lane matrix into sorted ``lane/mode/tariff`` rows."""
        wanted = parse_mode(mode) if mode is not None else None
        out: list[dict[str, object]] = []
        for key in sorted(self._lanes):
            for m, value in sorted(self._lanes[key].items()):
                if wanted is None or m is wanted:
                    out.append({"lane": key, "mode": m.value, "tariff": value})
        return out


class TariffRepository:
    """Holds the current :class:`TariffTable`.

    ``refresh`` replaces the whole table; readers holding an earlier
    snapshot keep using it undisturbed.
    """

    def __init__(self, table: TariffTable | None = None) -> None:
        self._lock = threading.Lock()
        self._table = table if table is not None else TariffTable.reference()
        self._version = 1

    @classmethod
    def from_config(cls, config: TariffsConfig) -> TariffRepository:
        return cls(TariffTable.from_config(config))

    @property
    def version(self) -> int:
        """Incremented on every refresh."""
        return self._version

    def snapshot(self) -> TariffTable:
        with self._lock:
            return self._table

    def refresh(self, table: TariffTable) -> None:
        with self._lock:
            self._table = table
            self._version += 1
        log.debug("tariff.refresh", version=self._version, lanes=len(table.lanes))

    def lookup_tariff(
        self,
        origin: str,
        destination: str,
        mode: TransportMode | str,
    ) -> float:
        """Unit tariff for a lane and mode, using the current snapshot."""
        return self.snapshot().lookup(origin, destination, mode).tariff
