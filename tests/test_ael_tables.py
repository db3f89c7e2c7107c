from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from laser_core.ael_tables import (
    AEL_FUNCTIONS,
    get_ael_set,
    get_class1_ael,
    get_class2_ael,
    get_class3b_ael,
    get_class3r_ael,
)
from laser_core.errors import InvalidInputError
from laser_core.quantities import Unit


def test_green_pointer_aels_at_aversion_time() -> None:
    s = get_ael_set(532, 0.25)

    assert s.class1.unit is Unit.J
    assert s.class1.value == pytest.approx(7e-4 * 0.25**0.75)
    assert s.class2.unit is Unit.W
    assert s.class2.value == pytest.approx(1e-3)
    assert s.class3r.unit is Unit.W
    assert s.class3r.value == pytest.approx(5e-3)
    assert s.class3b.unit is Unit.W
    assert s.class3b.value == pytest.approx(0.5)


def test_visible_long_exposure_class1_is_power() -> None:
    ael = get_class1_ael(532, 100)
    assert ael.unit is Unit.W
    assert ael.value == pytest.approx(3.9e-4)


def test_near_ir_class1_uses_c4_and_c7() -> None:
    ael = get_class1_ael(1064, 100)
    assert ael.unit is Unit.W
    assert ael.value == pytest.approx(3.9e-4 * 5.0)


def test_deep_uv_class1_is_per_area() -> None:
    ael = get_class1_ael(250, 1.0)
    assert ael.unit is Unit.J_M2
    assert ael.value == pytest.approx(30.0)


def test_class2_undefined_outside_visible() -> None:
    assert get_class2_ael(800, 1.0) is None
    assert get_class2_ael(380, 1.0) is None
    assert get_class2_ael(700, 1.0) is not None


def test_undefined_cells_return_none() -> None:
    assert get_class1_ael(532, 4e4) is None
    assert get_class3r_ael(532, 4e4) is None
    assert get_class3b_ael(532, 4e4) is None
    assert get_class1_ael(1550, 1e-14) is None


def test_c5_applies_only_inside_its_band() -> None:
    base = get_class1_ael(532, 0.25)
    reduced = get_class1_ael(532, 0.25, c5=0.5)
    assert reduced.value == pytest.approx(base.value * 0.5)

    uv = get_class1_ael(250, 1.0)
    assert get_class1_ael(250, 1.0, c5=0.5) == uv


def test_extended_source_branches() -> None:
    c1 = get_class1_ael(532, 0.25, 15.0)
    assert c1.unit is Unit.J
    assert c1.value == pytest.approx(7e-4 * 0.25**0.75 * 10.0)

    c3r = get_class3r_ael(532, 0.25, 15.0)
    assert c3r.unit is Unit.W
    assert c3r.value == pytest.approx(5e-3 * 10.0)

    assert get_class2_ael(532, 0.25, 15.0).value == pytest.approx(1e-2)


@pytest.mark.parametrize(
    ("wavelength_nm", "exposure_time_s"),
    [(532, 0.25), (532, 100), (850, 1.0), (1064, 1e-3), (1064, 100), (1550, 1.0)],
)
def test_hazard_tiers_are_ordered(wavelength_nm: float, exposure_time_s: float) -> None:
    s = get_ael_set(wavelength_nm, exposure_time_s)
    c1 = s.class1.to_energy(exposure_time_s).value
    c3r = s.class3r.to_energy(exposure_time_s).value
    c3b = s.class3b.to_energy(exposure_time_s).value
    assert c1 <= c3r <= c3b


def test_ael_function_registry() -> None:
    assert list(AEL_FUNCTIONS) == ["Class 1", "Class 2", "Class 3R", "Class 3B"]
    assert AEL_FUNCTIONS["Class 3R"] is get_class3r_ael


def test_invalid_inputs_rejected() -> None:
    with pytest.raises(InvalidInputError):
        get_class1_ael(532, 0)
    with pytest.raises(InvalidInputError):
        get_class1_ael(170, 1.0)
    with pytest.raises(InvalidInputError):
        get_class3r_ael(532, 1.0, c5=0)
    with pytest.raises(TypeError):
        get_class3b_ael(532, None)
