from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from laser_core.config import CorrectionFactorMode, LaserCalcConfig
from laser_core.correction_factors import (
    angular_subtense_max,
    get_correction_factors,
    get_mpe_correction_factors,
)
from laser_core.errors import InvalidInputError

CORRECTED = LaserCalcConfig(correction_factor_mode=CorrectionFactorMode.CORRECTED)


def test_angular_subtense_max() -> None:
    assert angular_subtense_max(1e-4) == 5.0
    assert angular_subtense_max(0.01) == pytest.approx(20.0)
    assert angular_subtense_max(0.25) == pytest.approx(100.0)
    assert angular_subtense_max(10.0) == 100.0


def test_visible_point_source_factors() -> None:
    f = get_correction_factors(532, 0.25)
    assert f.c1 == 1.0
    assert f.c3 == pytest.approx(10 ** (0.02 * 82))
    assert f.c5 == 1.0
    assert f.c6 == 1.0
    assert f.c7 == 1.0
    assert f.t1 == 1.0
    assert f.t2 == 10.0
    assert f.angular_subtense_max_mrad == pytest.approx(100.0)


def test_literal_mode_fallbacks_outside_bands() -> None:
    f = get_correction_factors(532, 0.25)
    assert f.c2 == 30.0
    assert f.c4 == 5.0


def test_corrected_mode_fallbacks_outside_bands() -> None:
    f = get_correction_factors(532, 0.25, config=CORRECTED)
    assert f.c2 == 1.0
    assert f.c4 == 1.0
    # The 1050-1400 nm plateau keeps C4 = 5 in both modes.
    assert get_correction_factors(1064, 1.0, config=CORRECTED).c4 == 5.0
    assert get_correction_factors(2000, 1.0, config=CORRECTED).c4 == 1.0
    assert get_correction_factors(2000, 1.0).c4 == 5.0


def test_in_band_factors_ignore_mode() -> None:
    for config in (LaserCalcConfig(), CORRECTED):
        assert get_correction_factors(310, 1.0, config=config).c2 == pytest.approx(1000.0)
        assert get_correction_factors(800, 1.0, config=config).c4 == pytest.approx(10**0.2)


def test_uv_factors() -> None:
    f = get_correction_factors(310, 1.0)
    assert f.c1 == pytest.approx(5.6e3)
    assert f.t1 == pytest.approx(1e-15 * 10 ** (0.8 * 15))


def test_extended_source_c6_and_t2() -> None:
    f = get_correction_factors(532, 0.25, 15.0)
    assert f.c6 == pytest.approx(10.0)
    assert f.t2 == pytest.approx(10.0 * 10 ** (13.5 / 98.5))
    # Above alpha_max the apparent source is capped.
    capped = get_correction_factors(532, 0.25, 150.0)
    assert capped.c6 == pytest.approx(100.0 / 1.5)
    assert capped.t2 == 100.0


def test_c7_near_ir() -> None:
    assert get_correction_factors(1175, 1.0).c7 == pytest.approx(10 ** (0.0018 * 25))
    assert get_correction_factors(1300, 1.0).c7 == pytest.approx(8.0 + 10**2)


def test_as_dict_keys() -> None:
    d = get_correction_factors(532, 1.0).as_dict()
    assert list(d) == ["C1", "C2", "C3", "C4", "C5", "C6", "C7", "T1", "T2"]


def test_mpe_correction_factors() -> None:
    visible = get_mpe_correction_factors(532)
    assert (visible.ca, visible.cb, visible.cc) == (1.0, 1.0, 1.0)

    near_ir = get_mpe_correction_factors(1064)
    assert near_ir.ca == 5.0
    assert near_ir.cb == pytest.approx(10 ** (0.015 * 364))
    assert near_ir.cc == 1.0

    assert get_mpe_correction_factors(800).ca == pytest.approx(10**0.2)
    assert get_mpe_correction_factors(1550).cc == pytest.approx(10**0.9)
    assert get_mpe_correction_factors(2000).cc == 5.0


def test_invalid_inputs_rejected() -> None:
    with pytest.raises(InvalidInputError):
        get_correction_factors(100, 1.0)
    with pytest.raises(InvalidInputError):
        get_correction_factors(532, 0.0)
    with pytest.raises(InvalidInputError):
        get_correction_factors(532, 1.0, -1.0)
    with pytest.raises(TypeError):
        get_correction_factors("532", 1.0)
    with pytest.raises(InvalidInputError):
        get_mpe_correction_factors(float("nan"))
