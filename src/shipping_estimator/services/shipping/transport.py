"""Distance-banded transport mode and rate selection."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from ...errors import NegativeDistanceError


@dataclass(frozen=True, slots=True)
class TransportBand:
    """Half-open distance interval ``[min_km, max_km)`` served by one transport mode."""

    mode: str
    min_km: float
    max_km: Optional[float]
    rate_per_km_per_kg: float

    def covers(self, distance_km: float) -> bool:
        if distance_km < self.min_km:
            return False
        return self.max_km is None or distance_km < self.max_km


@dataclass(frozen=True, slots=True)
class TransportRate:
    mode: str
    rate_per_km_per_kg: float


# Extend by inserting rows; bands must stay contiguous from 0 with only the last one unbounded.
DEFAULT_BANDS: tuple[TransportBand, ...] = (
    TransportBand(mode="Mini Van", min_km=0.0, max_km=100.0, rate_per_km_per_kg=3.0),
    TransportBand(mode="Truck", min_km=100.0, max_km=500.0, rate_per_km_per_kg=2.0),
    TransportBand(mode="Aeroplane", min_km=500.0, max_km=None, rate_per_km_per_kg=1.0),
)


def _validate_bands(bands: Sequence[TransportBand]) -> tuple[TransportBand, ...]:
    if not bands:
        raise ValueError("At least one transport band is required.")
    ordered = tuple(bands)
    if ordered[0].min_km != 0:
        raise ValueError(f"First transport band must start at 0 km, got {ordered[0].min_km}.")
    for current, following in zip(ordered, ordered[1:]):
        if current.max_km is None:
            raise ValueError(f"Only the last band may be unbounded; '{current.mode}' is not last.")
        if current.max_km != following.min_km:
            raise ValueError(
                f"Transport bands must be contiguous: '{current.mode}' ends at {current.max_km} km "
                f"but '{following.mode}' starts at {following.min_km} km."
            )
    for band in ordered:
        if band.max_km is not None and band.max_km <= band.min_km:
            raise ValueError(f"Band '{band.mode}' has an empty range.")
        if band.rate_per_km_per_kg < 0:
            raise ValueError(f"Band '{band.mode}' has a negative rate.")
    if ordered[-1].max_km is not None:
        raise ValueError("The last transport band must be unbounded.")
    return ordered


class TransportRateSelector:
    """Maps a distance to the single band that covers it."""

    def __init__(self, bands: Sequence[TransportBand] = DEFAULT_BANDS) -> None:
        self._bands = _validate_bands(bands)

    @property
    def bands(self) -> tuple[TransportBand, ...]:
        return self._bands

    def select_band(self, distance_km: float) -> TransportBand:
        if math.isnan(distance_km) or distance_km < 0:
            raise NegativeDistanceError(distance_km)
        for band in self._bands:
            if band.covers(distance_km):
                return band
        # unreachable for a validated table
        raise ValueError(f"No transport mode available for distance: {distance_km} km")

    def select(self, distance_km: float) -> TransportRate:
        band = self.select_band(distance_km)
        return TransportRate(mode=band.mode, rate_per_km_per_kg=band.rate_per_km_per_kg)
