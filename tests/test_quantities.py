from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from laser_core.quantities import Quantity, Unit, aperture_area_m2, joules, joules_m2, watts, watts_m2


def test_unit_tags() -> None:
    assert joules(1.0).is_energy
    assert not watts(1.0).is_energy
    assert joules_m2(1.0).is_per_area
    assert watts_m2(1.0).is_per_area
    assert not watts(1.0).is_per_area


def test_power_energy_conversion() -> None:
    energy = watts(2e-3).to_energy(0.25)
    assert energy.unit is Unit.J
    assert energy.value == pytest.approx(5e-4)
    power = joules(1e-3).to_power(0.5)
    assert power.unit is Unit.W
    assert power.value == pytest.approx(2e-3)
    assert watts_m2(10.0).to_energy(2.0).unit is Unit.J_M2
    # Already in the target dimension: unchanged.
    assert joules(1.0).to_energy(10.0) == joules(1.0)
    assert watts(1.0).to_power(10.0) == watts(1.0)


def test_to_power_rejects_zero_duration() -> None:
    with pytest.raises(ValueError):
        joules(1.0).to_power(0.0)


def test_per_area_spreads_over_aperture() -> None:
    area = math.pi * (3.5e-3) ** 2
    assert aperture_area_m2(7.0) == pytest.approx(area)
    q = watts(1.0).per_area(7.0)
    assert q.unit is Unit.W_M2
    assert q.value == pytest.approx(1.0 / area)


def test_per_area_rejects_area_units() -> None:
    with pytest.raises(ValueError):
        watts_m2(1.0).per_area(7.0)
    with pytest.raises(ValueError):
        watts(1.0).per_area(0.0)


def test_per_cm2() -> None:
    fluence = joules_m2(200.0).per_cm2()
    assert fluence.unit is Unit.J_CM2
    assert fluence.value == pytest.approx(0.02)
    assert watts_m2(1000.0).per_cm2().unit is Unit.W_CM2
    with pytest.raises(ValueError):
        watts(1.0).per_cm2()


def test_str_format() -> None:
    assert str(watts(1e-3)) == "1.000e-03 W"
    assert str(Quantity(2.5, Unit.J_CM2)) == "2.500e+00 J/cm²"
