# radar/units.py
"""
Unit-tagged quantities.

Every power-like number crossing a component boundary is a ``Power`` that
knows whether it is linear or in dB, and every angle is an ``Angle`` that
knows whether it is in radians or degrees. Algorithms read ``.linear`` and
``.radians`` once at their entry and work on raw floats from there on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np

from radar.exceptions import ValidationError

ArrayLike = Union[float, np.ndarray]


class Scale(str, Enum):
    LINEAR = "linear"
    DB = "dB"

    @classmethod
    def parse(cls, value: Union[str, "Scale"]) -> "Scale":
        if isinstance(value, Scale):
            return value
        text = str(value).strip().lower()
        if text.startswith("l"):
            return cls.LINEAR
        if text.startswith("d"):
            return cls.DB
        raise ValidationError(f"Unknown scale: {value!r}")


class AngleUnit(str, Enum):
    RADIANS = "radians"
    DEGREES = "degrees"

    @classmethod
    def parse(cls, value: Union[str, "AngleUnit"]) -> "AngleUnit":
        if isinstance(value, AngleUnit):
            return value
        text = str(value).strip().lower()
        if text.startswith("r"):
            return cls.RADIANS
        if text.startswith("d"):
            return cls.DEGREES
        raise ValidationError(f"Unknown angle unit: {value!r}")


def db_to_linear(x: ArrayLike) -> ArrayLike:
    return 10 ** (np.asarray(x, dtype=float) / 10)


def linear_to_db(x: ArrayLike) -> ArrayLike:
    return 10 * np.log10(np.asarray(x, dtype=float))


def _as_value(x) -> ArrayLike:
    arr = np.asarray(x, dtype=float)
    return float(arr) if arr.ndim == 0 else arr


@dataclass(frozen=True)
class Power:
    """A power ratio or power level with its scale tag."""

    value: ArrayLike
    scale: Scale = Scale.LINEAR

    def __post_init__(self):
        object.__setattr__(self, "value", _as_value(self.value))
        object.__setattr__(self, "scale", Scale.parse(self.scale))

    @property
    def linear(self) -> ArrayLike:
        if self.scale is Scale.LINEAR:
            return self.value
        return _as_value(db_to_linear(self.value))

    @property
    def db(self) -> ArrayLike:
        if self.scale is Scale.DB:
            return self.value
        return _as_value(linear_to_db(self.value))

    def to_linear(self) -> "Power":
        return Power(self.linear, Scale.LINEAR)

    def to_db(self) -> "Power":
        return Power(self.db, Scale.DB)

    def to_scale(self, scale: Union[str, Scale]) -> "Power":
        scale = Scale.parse(scale)
        return self.to_linear() if scale is Scale.LINEAR else self.to_db()


@dataclass(frozen=True)
class Angle:
    """An angle (or array of angles) with its unit tag."""

    value: ArrayLike
    unit: AngleUnit = AngleUnit.RADIANS

    def __post_init__(self):
        object.__setattr__(self, "value", _as_value(self.value))
        object.__setattr__(self, "unit", AngleUnit.parse(self.unit))

    @property
    def radians(self) -> ArrayLike:
        if self.unit is AngleUnit.RADIANS:
            return self.value
        return _as_value(np.deg2rad(self.value))

    @property
    def degrees(self) -> ArrayLike:
        if self.unit is AngleUnit.DEGREES:
            return self.value
        return _as_value(np.rad2deg(self.value))

    def to_radians(self) -> "Angle":
        return Angle(self.radians, AngleUnit.RADIANS)

    def to_degrees(self) -> "Angle":
        return Angle(self.degrees, AngleUnit.DEGREES)


def as_power(x, default_scale: Union[str, Scale] = Scale.LINEAR) -> Power:
    """Wrap a bare number as a Power, passing existing Power objects through."""
    if isinstance(x, Power):
        return x
    return Power(x, default_scale)


def as_angle(x, default_unit: Union[str, AngleUnit] = AngleUnit.RADIANS) -> Angle:
    if isinstance(x, Angle):
        return x
    return Angle(x, default_unit)
