"""
Tagged radiometric quantities.

Every AEL and MPE branch returns a Quantity so the unit travels with the value
instead of living in comments. Per-area units are always square metres inside
the tables; per-cm² units are produced only at the MPE boundary.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

M2_TO_CM2 = 1e-4
MM_TO_M = 1e-3


class Unit(str, Enum):
    W = "W"
    J = "J"
    W_M2 = "W/m²"
    J_M2 = "J/m²"
    W_CM2 = "W/cm²"
    J_CM2 = "J/cm²"


_PER_AREA = {
    Unit.W: Unit.W_M2,
    Unit.J: Unit.J_M2,
}

_TO_CM2 = {
    Unit.W_M2: Unit.W_CM2,
    Unit.J_M2: Unit.J_CM2,
}

_ENERGY = (Unit.J, Unit.J_M2, Unit.J_CM2)
_AREA = (Unit.W_M2, Unit.J_M2, Unit.W_CM2, Unit.J_CM2)


def aperture_area_m2(aperture_mm: float) -> float:
    radius_m = aperture_mm * MM_TO_M / 2.0
    return math.pi * radius_m * radius_m


@dataclass(frozen=True)
class Quantity:
    value: float
    unit: Unit

    @property
    def is_energy(self) -> bool:
        return self.unit in _ENERGY

    @property
    def is_per_area(self) -> bool:
        return self.unit in _AREA

    def scaled(self, factor: float) -> Quantity:
        return Quantity(self.value * factor, self.unit)

    def to_energy(self, duration_s: float) -> Quantity:
        """W -> J (or W/m² -> J/m²) over duration_s; energies pass through."""
        if self.is_energy:
            return self
        target = {Unit.W: Unit.J, Unit.W_M2: Unit.J_M2, Unit.W_CM2: Unit.J_CM2}[self.unit]
        return Quantity(self.value * duration_s, target)

    def to_power(self, duration_s: float) -> Quantity:
        """J -> W (or J/m² -> W/m²) averaged over duration_s; powers pass through."""
        if not self.is_energy:
            return self
        if duration_s <= 0:
            raise ValueError("duration_s must be > 0")
        target = {Unit.J: Unit.W, Unit.J_M2: Unit.W_M2, Unit.J_CM2: Unit.W_CM2}[self.unit]
        return Quantity(self.value / duration_s, target)

    def per_area(self, aperture_mm: float) -> Quantity:
        """Spread W or J over a circular aperture of the given diameter."""
        if self.unit not in _PER_AREA:
            raise ValueError(f"cannot spread {self.unit.value} over an aperture")
        if aperture_mm <= 0:
            raise ValueError("aperture_mm must be > 0")
        return Quantity(self.value / aperture_area_m2(aperture_mm), _PER_AREA[self.unit])

    def per_cm2(self) -> Quantity:
        if self.unit not in _TO_CM2:
            raise ValueError(f"{self.unit.value} is not a per-m² unit")
        return Quantity(self.value * M2_TO_CM2, _TO_CM2[self.unit])

    def __str__(self) -> str:
        return f"{self.value:.3e} {self.unit.value}"


def joules(value: float) -> Quantity:
    return Quantity(value, Unit.J)


def watts(value: float) -> Quantity:
    return Quantity(value, Unit.W)


def joules_m2(value: float) -> Quantity:
    return Quantity(value, Unit.J_M2)


def watts_m2(value: float) -> Quantity:
    return Quantity(value, Unit.W_M2)
