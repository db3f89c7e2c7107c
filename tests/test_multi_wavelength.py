from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from laser_core.classifier import classify
from laser_core.errors import InvalidInputError
from laser_core.models import ExposureContext, LaserClass, LaserSpec
from laser_core.multi_wavelength import (
    METHOD_ADDITIVE,
    METHOD_INDEPENDENT,
    METHOD_SINGLE,
    classify_multi,
    determine_additive_group,
)


def test_determine_additive_group() -> None:
    assert determine_additive_group([532, 633]).key == "VISIBLE_THERMAL"
    assert determine_additive_group([532, 1064]).key == "RETINAL_BROAD"
    assert determine_additive_group([390, 800]).key == "LENS_DAMAGE"
    assert determine_additive_group([250, 350]).key == "UV_PHOTOCHEMICAL"
    assert determine_additive_group([532, 1550]) is None


def test_group_bounds_are_inclusive() -> None:
    assert determine_additive_group([400, 700]).key == "VISIBLE_THERMAL"
    assert determine_additive_group([200, 400]).key == "UV_PHOTOCHEMICAL"


def test_single_source_delegates_to_classify() -> None:
    spec = LaserSpec.cw(532, 5e-3)
    exposure = ExposureContext(0.25)
    res = classify_multi([spec], exposure)
    assert res.method == METHOD_SINGLE
    assert res.laser_class is LaserClass.CLASS_3R
    assert res.individual == [classify(spec, exposure)]


def test_additive_lines_sum_their_ratios() -> None:
    sources = [LaserSpec.cw(532, 3e-4), LaserSpec.cw(635, 3e-4)]
    res = classify_multi(sources, ExposureContext(100))
    # Each line alone is Class 1 (0.3 mW < 0.39 mW), together they exceed it.
    assert all(classify(s, ExposureContext(100)).laser_class is LaserClass.CLASS_1 for s in sources)
    assert res.method == METHOD_ADDITIVE
    assert res.additive_group.key == "VISIBLE_THERMAL"
    assert res.laser_class is LaserClass.CLASS_2
    assert res.sum_condition1 == pytest.approx(0.6)
    assert res.sum_condition3 == pytest.approx(0.6)
    assert res.ratios == [pytest.approx(0.3), pytest.approx(0.3)]


def test_additive_near_ir_line_uses_its_own_class1_limit() -> None:
    sources = [LaserSpec.cw(532, 1e-4), LaserSpec.cw(800, 1e-4)]
    res = classify_multi(sources, ExposureContext(100))
    assert res.additive_group.key == "RETINAL_BROAD"
    assert res.laser_class is LaserClass.CLASS_1
    expected = 1e-4 / 3.9e-4 + 1e-4 / (3.9e-4 * 10**0.2)
    assert res.sum_condition3 == pytest.approx(expected)


def test_additive_falls_through_to_class_4() -> None:
    sources = [LaserSpec.cw(532, 0.4), LaserSpec.cw(635, 0.4)]
    res = classify_multi(sources, ExposureContext(100))
    assert res.method == METHOD_ADDITIVE
    assert res.laser_class is LaserClass.CLASS_4
    assert res.steps[-1] == "Result: Class 4 (additive classification)"


def test_independent_lines_take_highest_class() -> None:
    sources = [LaserSpec.cw(532, 5e-3), LaserSpec.cw(1550, 1e-3)]
    res = classify_multi(sources, ExposureContext(100))
    assert res.method == METHOD_INDEPENDENT
    assert res.additive_group is None
    assert [r.laser_class for r in res.individual] == [LaserClass.CLASS_3R, LaserClass.CLASS_1]
    assert res.laser_class is LaserClass.CLASS_3R


def test_empty_and_invalid_sources() -> None:
    with pytest.raises(InvalidInputError):
        classify_multi([], ExposureContext(1))
    with pytest.raises(TypeError):
        classify_multi([LaserSpec.cw(532, 1e-3), 633], ExposureContext(1))
