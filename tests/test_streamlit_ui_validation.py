from __future__ import annotations

import pandas as pd

from app.validation import validate_laser_inputs, validate_laser_rows


def test_validate_laser_rows_blocks_invalid_values() -> None:
    df = pd.DataFrame(
        [
            {
                "label": "",
                "wavelength_nm": 100,
                "emission_type": "QCW",
                "power_W": None,
                "pulse_energy_J": None,
                "pulse_width_s": None,
                "repetition_rate_Hz": None,
                "beam_diameter_mm": -1,
                "exposure_time_s": "x",
                "angular_subtense_mrad": None,
            }
        ]
    )
    res = validate_laser_rows(df)
    assert res.has_errors
    assert res.row_status[0] == "INVALID"
    joined = "\n".join(res.errors)
    assert joined.startswith("row#0: ")
    assert "wavelength_nm must be in [180, 1e+06] nm" in joined
    assert "emission_type must be CW or Pulsed" in joined
    assert "beam_diameter_mm must be > 0" in joined
    assert "exposure_time_s must be a number" in joined


def test_validate_laser_rows_pulse_rules() -> None:
    df = pd.DataFrame(
        [
            {
                "label": "too-wide",
                "wavelength_nm": 1064,
                "emission_type": "Pulsed",
                "power_W": None,
                "pulse_energy_J": 0.1,
                "pulse_width_s": 0.2,
                "repetition_rate_Hz": 10,
                "beam_diameter_mm": 5,
                "exposure_time_s": 10,
                "angular_subtense_mrad": 1.5,
            },
            {
                "label": "hot",
                "wavelength_nm": 1064,
                "emission_type": "Pulsed",
                "power_W": None,
                "pulse_energy_J": 0.1,
                "pulse_width_s": 0.06,
                "repetition_rate_Hz": 10,
                "beam_diameter_mm": 5,
                "exposure_time_s": 10,
                "angular_subtense_mrad": 1.5,
            },
        ]
    )
    res = validate_laser_rows(df)
    assert res.row_status == {0: "INVALID", 1: "OK"}
    assert "too-wide: pulse_width_s exceeds the pulse period" in "\n".join(res.errors)
    assert res.warnings and res.warnings[0].startswith("hot: duty cycle 60.0% is high")


def test_validate_laser_inputs_cw_ok_and_missing_power() -> None:
    ok = {"wavelength_nm": 532, "emission_type": "CW", "power_W": 0.005, "exposure_time_s": 0.25}
    assert validate_laser_inputs(ok) == ([], [])

    errors, _ = validate_laser_inputs({"wavelength_nm": 532, "exposure_time_s": 0.25})
    assert errors == ["power_W is required"]


def test_validate_laser_inputs_uses_translator() -> None:
    seen: list[str] = []

    def translator(key: str, **kwargs: object) -> str:
        seen.append(key)
        return key

    errors, warnings = validate_laser_inputs(
        {"wavelength_nm": 532, "power_W": 1e-3, "exposure_time_s": 1e5}, translator=translator
    )
    assert errors == []
    assert warnings == ["validation.exposure_long"]
    assert seen == ["validation.exposure_long"]
