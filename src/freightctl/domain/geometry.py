"""Package geometry — dimensions in centimetres, volume in cubic metres."""

from __future__ import annotations

import math
from dataclasses import dataclass

from freightctl.domain.errors import AmountOverflowError, InvalidDimensionError

CM3_PER_M3 = 1_000_000


def compute_volume(length: float, width: float, height: float) -> float:
    """Return the volume in m³ of a box measured in cm.

    Unrounded; rounding happens once, when the quote result is built.

    Raises:
        InvalidDimensionError: If any dimension is zero, negative or not finite.
        AmountOverflowError: If the sides are finite but their product is not.
    """
    for name, value in (("length_cm", length), ("width_cm", width), ("height_cm", height)):
        if not (math.isfinite(value) and value > 0):
            raise InvalidDimensionError(name, value)
    volume = (length * width * height) / CM3_PER_M3
    if not math.isfinite(volume):
        raise AmountOverflowError("volume_m3")
    return volume


@dataclass(frozen=True)
class PackageDimensions:
    """Outer dimensions of a package. All sides strictly positive."""

    length_cm: float
    width_cm: float
    height_cm: float

    def __post_init__(self) -> None:
        # Construction validates; compute_volume raises on the first bad side.
        compute_volume(self.length_cm, self.width_cm, self.height_cm)

    @property
    def volume_m3(self) -> float:
        return compute_volume(self.length_cm, self.width_cm, self.height_cm)
