from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from laser_core.errors import InvalidInputError
from laser_core.measurement_conditions import (
    ApertureStop,
    get_measurement_conditions,
    requires_class_m,
    supports_class2,
)


def test_deep_uv_condition1_not_applicable() -> None:
    cond = get_measurement_conditions(250, 100)
    assert cond.is_condition1_applicable is False
    assert cond.condition3 == ApertureStop(1.0, 0.0)
    # Placeholder geometry mirrors Condition 3.
    assert cond.condition1 == cond.condition3


def test_near_uv_geometry() -> None:
    cond = get_measurement_conditions(350, 1)
    assert cond.is_condition1_applicable
    assert cond.condition1 == ApertureStop(7.0, 2000.0)
    assert cond.condition3 == ApertureStop(1.0, 100.0)


def test_retinal_hazard_geometry() -> None:
    cond = get_measurement_conditions(532, 0.25)
    assert cond.is_condition1_applicable
    assert cond.condition1 == ApertureStop(50.0, 2000.0)
    assert cond.condition3 == ApertureStop(7.0, 100.0)


@pytest.mark.parametrize(
    ("exposure_time_s", "aperture_mm"),
    [(0.1, 1.0), (0.35, 1.0), (1.0, 1.5), (100.0, 3.5)],
)
def test_mid_ir_aperture_grows_with_time(exposure_time_s: float, aperture_mm: float) -> None:
    cond = get_measurement_conditions(1550, exposure_time_s)
    assert cond.is_condition1_applicable
    assert cond.condition3.aperture_mm == pytest.approx(aperture_mm)
    assert cond.condition1.aperture_mm == pytest.approx(7.0 * aperture_mm)
    assert cond.condition1.distance_mm == 2000.0


def test_far_ir_condition1_not_applicable() -> None:
    cond = get_measurement_conditions(10600, 100)
    assert cond.is_condition1_applicable is False
    assert cond.condition3.aperture_mm == pytest.approx(3.5)
    assert get_measurement_conditions(2e5, 1).condition3.aperture_mm == 11.0


def test_requires_class_m() -> None:
    assert requires_class_m(532, 8) is True
    assert requires_class_m(532, 7) is False
    assert requires_class_m(250, 10) is False
    assert requires_class_m(4000, 10) is True
    assert requires_class_m(4001, 10) is False


def test_supports_class2_boundaries() -> None:
    assert supports_class2(400) is True
    assert supports_class2(700) is True
    assert supports_class2(700.001) is False
    assert supports_class2(399.9) is False


def test_invalid_inputs_rejected() -> None:
    with pytest.raises(InvalidInputError):
        get_measurement_conditions(2e6, 1)
    with pytest.raises(InvalidInputError):
        get_measurement_conditions(532, -1)
