"""
Measurement apertures and distances for Condition 1 (telescope) and
Condition 3 (unaided eye), IEC 60825-1:2014 Table 10.
"""
from __future__ import annotations

from dataclasses import dataclass

from .errors import require_number, require_positive
from .models import require_wavelength

CLASS_M_MIN_NM = 302.5
CLASS_M_MAX_NM = 4000.0
CLASS_M_BEAM_DIAMETER_MM = 7.0


@dataclass(frozen=True)
class ApertureStop:
    aperture_mm: float
    distance_mm: float


@dataclass(frozen=True)
class MeasurementConditions:
    condition1: ApertureStop
    condition3: ApertureStop
    is_condition1_applicable: bool


def _ir_condition3_aperture(exposure_time_s: float) -> float:
    if exposure_time_s <= 0.35:
        return 1.0
    if exposure_time_s < 10:
        return 1.5 * exposure_time_s ** (3.0 / 8.0)
    return 3.5


def get_measurement_conditions(wavelength_nm: float, exposure_time_s: float) -> MeasurementConditions:
    wl = require_wavelength(wavelength_nm)
    t = require_positive(exposure_time_s, "exposure_time_s")

    if wl < 302.5:
        c3 = ApertureStop(1.0, 0.0)
        # Condition 1 is not applicable: placeholder equals Condition 3.
        return MeasurementConditions(condition1=c3, condition3=c3, is_condition1_applicable=False)
    if wl < 400:
        return MeasurementConditions(
            condition1=ApertureStop(7.0, 2000.0),
            condition3=ApertureStop(1.0, 100.0),
            is_condition1_applicable=True,
        )
    if wl < 1400:
        return MeasurementConditions(
            condition1=ApertureStop(50.0, 2000.0),
            condition3=ApertureStop(7.0, 100.0),
            is_condition1_applicable=True,
        )
    if wl < 4000:
        c3_aperture = _ir_condition3_aperture(t)
        return MeasurementConditions(
            condition1=ApertureStop(7.0 * c3_aperture, 2000.0),
            condition3=ApertureStop(c3_aperture, 100.0),
            is_condition1_applicable=True,
        )
    if wl < 1e5:
        c3 = ApertureStop(_ir_condition3_aperture(t), 0.0)
    else:
        c3 = ApertureStop(11.0, 0.0)
    return MeasurementConditions(condition1=c3, condition3=c3, is_condition1_applicable=False)


def requires_class_m(wavelength_nm: float, beam_diameter_mm: float) -> bool:
    wl = require_number(wavelength_nm, "wavelength_nm")
    diameter = require_number(beam_diameter_mm, "beam_diameter_mm")
    return CLASS_M_MIN_NM <= wl <= CLASS_M_MAX_NM and diameter > CLASS_M_BEAM_DIAMETER_MM


def supports_class2(wavelength_nm: float) -> bool:
    wl = require_number(wavelength_nm, "wavelength_nm")
    return 400 <= wl <= 700
