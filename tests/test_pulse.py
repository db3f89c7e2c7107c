from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from laser_core.ael_tables import get_class1_ael, get_class2_ael
from laser_core.errors import InvalidInputError
from laser_core.pulse import assess_pulsed_ael, c5_factor, validate_pulse_parameters
from laser_core.quantities import Unit


def test_c5_single_pulse_and_long_pulse() -> None:
    single = c5_factor(532, 1e-8, 0, 1.0)
    assert single.c5 == 1.0
    assert single.pulse_count == 0
    assert single.grouping == "Single pulse"

    long_pulse = c5_factor(532, 0.3, 1.0, 10.0)
    assert long_pulse.c5 == 1.0
    assert "Long pulse" in long_pulse.grouping


def test_c5_short_pulses_below_ti() -> None:
    short_exposure = c5_factor(532, 1e-8, 1000, 0.1)
    assert short_exposure.c5 == 1.0
    assert short_exposure.pulse_count == 100
    assert short_exposure.time_base_s == pytest.approx(5e-6)

    few = c5_factor(532, 1e-8, 1000, 0.5)
    assert few.c5 == 1.0
    assert few.pulse_count == 500

    many = c5_factor(532, 1e-8, 10000, 1.0)
    assert many.pulse_count == 10000
    assert many.c5 == pytest.approx(5.0 * 10000**-0.25)


def test_c5_floor() -> None:
    res = c5_factor(532, 1e-8, 1000, 100.0)
    assert res.pulse_count == 100000
    assert res.c5 == pytest.approx(0.4)


def test_c5_pulses_longer_than_ti_depend_on_subtense() -> None:
    assert c5_factor(532, 1e-4, 100, 1.0, 1.5).c5 == 1.0
    assert c5_factor(532, 1e-4, 30, 1.0, 10.0).c5 == 1.0
    assert c5_factor(532, 1e-4, 100, 1.0, 10.0).c5 == pytest.approx(0.4)
    assert c5_factor(532, 1e-4, 100, 1.0, 150.0).c5 == 1.0


def test_c5_explicit_pulse_count() -> None:
    res = c5_factor(532, 1e-8, 1000, 1.0, pulse_count=10000)
    assert res.pulse_count == 10000
    assert res.c5 == pytest.approx(0.5)


def test_validate_pulse_parameters() -> None:
    ok = validate_pulse_parameters(1e-3, 10)
    assert ok.is_valid
    assert ok.warning is None
    assert ok.duty_cycle_pct == pytest.approx(1.0)

    too_wide = validate_pulse_parameters(0.2, 10)
    assert not too_wide.is_valid
    assert "cannot be larger than the period" in too_wide.error

    high_duty = validate_pulse_parameters(0.06, 10)
    assert high_duty.is_valid
    assert high_duty.warning is not None
    assert high_duty.duty_cycle_pct == pytest.approx(60.0)

    assert not validate_pulse_parameters(1e-3, 0).is_valid
    assert not validate_pulse_parameters(0, 10).is_valid


def test_assess_pulsed_ael_picks_most_restrictive() -> None:
    res = assess_pulsed_ael(get_class1_ael, 532, 1e-8, 1000, 0.25)
    assert res is not None
    assert res.single_pulse.unit is Unit.J
    assert res.single_pulse.value == pytest.approx(7.7e-8)
    assert res.average.value == pytest.approx(7e-4 * 0.25**0.75 / 250)
    assert res.pulse_train.value == pytest.approx(7.7e-8)
    # Single pulse and pulse train tie; the single-pulse limit is reported.
    assert res.mechanism == "Single pulse"
    assert res.most_restrictive == res.single_pulse


def test_assess_pulsed_ael_average_power_limits() -> None:
    res = assess_pulsed_ael(get_class1_ael, 532, 1e-8, 1e5, 100.0)
    assert res is not None
    # 3.9e-4 W shared over pulses at 100 kHz.
    assert res.average.value == pytest.approx(3.9e-9)
    assert res.mechanism == "Average power"


def test_assess_pulsed_ael_undefined() -> None:
    assert assess_pulsed_ael(get_class2_ael, 800, 1e-8, 1000, 1.0) is None


def test_assess_pulsed_ael_requires_repetition_rate() -> None:
    with pytest.raises(InvalidInputError):
        assess_pulsed_ael(get_class1_ael, 532, 1e-8, 0, 1.0)
