"""Length units and conversion to twips.

WordprocessingML measures page geometry, spacing and indentation in
*twips* (1/20 of a point, 1/1440 of an inch).  :class:`Measurement` lets
callers express lengths in familiar units and lowers them to twips.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Unit(Enum):
    INCH = "inch"
    POINT = "point"
    CENTIMETER = "centimeter"
    MILLIMETER = "millimeter"
    TWIP = "twip"


TWIPS_PER_UNIT: dict[Unit, float] = {
    Unit.INCH: 1440.0,
    Unit.POINT: 20.0,
    Unit.CENTIMETER: 566.93,
    Unit.MILLIMETER: 56.69,
    Unit.TWIP: 1.0,
}


def to_twips(value: float, unit: Unit) -> int:
    """Convert *value* in *unit* to twips, truncating toward zero.

    Negative and zero values pass through; magnitudes below one twip
    become ``0``.
    """
    return int(value * TWIPS_PER_UNIT[unit])


@dataclass(frozen=True)
class Measurement:
    """A length in a human unit.

    Usage::

        Measurement.inches(1).twips        # 1440
        Measurement.points(12).twips       # 240
    """

    value: float
    unit: Unit = Unit.TWIP

    @classmethod
    def inches(cls, value: float) -> Measurement:
        return cls(value, Unit.INCH)

    @classmethod
    def points(cls, value: float) -> Measurement:
        return cls(value, Unit.POINT)

    @classmethod
    def centimeters(cls, value: float) -> Measurement:
        return cls(value, Unit.CENTIMETER)

    @classmethod
    def millimeters(cls, value: float) -> Measurement:
        return cls(value, Unit.MILLIMETER)

    @property
    def twips(self) -> int:
        return to_twips(self.value, self.unit)

    @property
    def half_points(self) -> int:
        """Font size in half-points (twips / 10)."""
        return int(self.twips / 10)

