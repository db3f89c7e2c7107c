"""
Spectral regions and time bases (IEC 60825-1:2014 Table 2).
"""
from __future__ import annotations

from enum import Enum

DEFAULT_TIME_BASE_S = 1e-3

# (lower inclusive, upper exclusive, Ti seconds); last band closes at 1e6 nm.
TIME_BASE_TI: tuple[tuple[float, float, float], ...] = (
    (400.0, 1050.0, 5e-6),
    (1050.0, 1400.0, 13e-6),
    (1400.0, 1500.0, 1e-3),
    (1500.0, 1800.0, 10.0),
    (1800.0, 2600.0, 1e-3),
    (2600.0, 1e6, 1e-7),
)

LONG_TERM_TIME_BASE_S = 30000.0
AVERSION_TIME_BASE_S = 0.25
GENERAL_TIME_BASE_S = 100.0

AVERSION_CLASSES = ("Class 2", "Class 2M", "Class 3R")


class WavelengthRegion(str, Enum):
    UV = "UV"
    VISIBLE = "Visible"
    NEAR_IR = "Near-IR"
    IR_BC = "IR-B/C"
    FAR_IR = "Far-IR"


def wavelength_region(wavelength_nm: float) -> WavelengthRegion:
    if 180 <= wavelength_nm < 400:
        return WavelengthRegion.UV
    if 400 <= wavelength_nm < 700:
        return WavelengthRegion.VISIBLE
    if 700 <= wavelength_nm < 1400:
        return WavelengthRegion.NEAR_IR
    if 1400 <= wavelength_nm < 10600:
        return WavelengthRegion.IR_BC
    return WavelengthRegion.FAR_IR


def time_base(wavelength_nm: float) -> float:
    """Thermal confinement time Ti used to group pulses."""
    for lower, upper, ti in TIME_BASE_TI:
        if lower <= wavelength_nm < upper:
            return ti
    if wavelength_nm == TIME_BASE_TI[-1][1]:
        return TIME_BASE_TI[-1][2]
    return DEFAULT_TIME_BASE_S


def classification_time_base(
    wavelength_nm: float,
    laser_class: str | None = None,
    *,
    long_term_viewing: bool = False,
) -> float:
    """
    Exposure duration to evaluate a class test with.

    Rules:
    - UV (<= 400 nm) or intentional long-term viewing: 30000 s
    - visible 400-700 nm for Class 2, 2M and 3R: 0.25 s (aversion response)
    - otherwise: 100 s
    """
    if wavelength_nm <= 400 or long_term_viewing:
        return LONG_TERM_TIME_BASE_S
    class_name = getattr(laser_class, "value", laser_class)
    if 400 <= wavelength_nm <= 700 and class_name in AVERSION_CLASSES:
        return AVERSION_TIME_BASE_S
    return GENERAL_TIME_BASE_S
