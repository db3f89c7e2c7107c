"""
Accessible Emission Limits for Class 1, 2, 3R and 3B (IEC 60825-1:2014 Tables 3-6).

Every branch returns a tagged Quantity. A None result means the table has no
entry for the (wavelength, exposure time) cell; callers must treat the class
as not evaluable rather than compare against a zero limit.

The pulse-train factor C5 multiplies the limit only within 302.5-4000 nm.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import DEFAULT_CONFIG, LaserCalcConfig
from .correction_factors import CorrectionFactors, compute_correction_factors
from .errors import require_positive
from .models import DEFAULT_ANGULAR_SUBTENSE_MRAD, require_wavelength
from .quantities import Quantity, joules, joules_m2, watts, watts_m2

logger = logging.getLogger(__name__)

T_MAX_S = 3e4
C5_MIN_NM = 302.5
C5_MAX_NM = 4000.0


@dataclass(frozen=True)
class AELSet:
    class1: Quantity | None
    class2: Quantity | None
    class3r: Quantity | None
    class3b: Quantity | None


def _with_c5(wl: float, ael: Quantity | None, c5: float) -> Quantity | None:
    if ael is None or not C5_MIN_NM <= wl < C5_MAX_NM:
        return ael
    return ael.scaled(c5)


def _dual_limit(photochemical: Quantity, thermal: Quantity, t: float) -> Quantity:
    if photochemical.unit == thermal.unit:
        return photochemical if photochemical.value <= thermal.value else thermal
    if photochemical.value / t <= thermal.value:
        return photochemical
    return thermal


# --- Class 1 -----------------------------------------------------------------


def _class1_point(wl: float, t: float, f: CorrectionFactors) -> Quantity | None:
    if t > T_MAX_S:
        return None
    if 180 <= wl < 302.5:
        return watts_m2(3e10) if t < 1e-8 else joules_m2(30.0)
    if 302.5 <= wl < 315:
        if t < 1e-8:
            return watts(2.4e4)
        if t < 10 and t <= f.t1:
            return joules(7.9e-7 * f.c1)
        return joules(7.9e-7 * f.c2)
    if 315 <= wl < 400:
        if t < 1e-8:
            return watts(2.4e4)
        if t < 10:
            return joules(7.9e-4 * f.c1)
        if t < 1000:
            return joules(7.9e-3)
        return watts(7.9e-6)
    if 400 <= wl < 700:
        if t < 1e-11:
            return joules(3.8e-8)
        if t < 5e-6:
            return joules(7.7e-8)
        if t < 10:
            return joules(7e-4 * t**0.75 * f.c6)
        if wl < 450:
            return joules(3.9e-3) if t < 100 else watts(3.9e-5 * f.c3)
        if wl < 500:
            if t < 100:
                return joules(3.9e-3 * f.c3)
            if t < 1000:
                return joules(min(3.9e-3 * f.c3, 3.9e-4 * t))
            return watts(3.9e-5 * f.c3)
        return watts(3.9e-4)
    if 700 <= wl < 1050:
        if t < 1e-11:
            return joules(3.8e-8)
        if t < 5e-6:
            return joules(7.7e-8 * f.c4)
        if t < 100:
            return joules(7e-4 * t**0.75 * f.c4)
        return watts(3.9e-4 * f.c4 * f.c7)
    if 1050 <= wl < 1400:
        if t < 1e-11:
            return joules(3.8e-8 * f.c7)
        if t < 1.3e-5:
            return joules(7.7e-7 * f.c7)
        if t < 10:
            return joules(3.5e-3 * t**0.75 * f.c7)
        return watts(3.9e-4 * f.c4 * f.c7)
    if 1400 <= wl < 4000:
        return _class1_mid_ir(wl, t)
    if 4000 <= wl <= 1e6:
        if t < 1e-9:
            return watts_m2(1e11)
        if t < 1e-7:
            return joules_m2(100.0)
        if t < 10:
            return joules_m2(5600.0 * t**0.25)
        return watts_m2(1000.0)
    return None


def _class1_mid_ir(wl: float, t: float) -> Quantity | None:
    if t < 1e-13:
        return None
    if 1500 <= wl < 1800:
        if t < 1e-9:
            return watts(8e6)
        if t < 0.35:
            return joules(8e-3)
        if t < 10:
            return joules(1.8e-2 * t**0.75)
        return watts(1e-2)
    if 2600 <= wl:
        if t < 1e-9:
            return watts(8e4)
        if t < 1e-7:
            return joules(8e-5)
    else:
        # 1400-1500 nm and 1800-2600 nm share one column
        if t < 1e-9:
            return watts(8e5)
        if t < 1e-3:
            return joules(8e-4)
    if t < 0.35:
        return joules(4.4e-3 * t**0.25)
    if t < 10:
        return joules(1e-2 * t)
    return watts(1e-2)


def _class1_extended(wl: float, t: float, f: CorrectionFactors) -> Quantity | None:
    if wl < 400 or wl > 1400 or t > T_MAX_S:
        return None
    if wl < 700:
        if t < 1e-11:
            return joules(3.8e-8 * f.c6)
        if t < 5e-6:
            return joules(7.7e-8 * f.c6)
        if t < 10:
            return joules(7e-4 * t**0.75 * f.c6)
        if t <= f.t2:
            thermal = joules(7e-4 * t**0.75 * f.c6)
        else:
            thermal = watts(7e-4 * f.t2**0.75 * f.c6 / t)
        if wl <= 600:
            photochemical = joules((3.9e-3 if t < 100 else 3.9e-5) * f.c3)
            return _dual_limit(photochemical, thermal, t)
        return thermal
    if wl < 1050:
        if t < 1e-11:
            return joules(3.8e-8 * f.c4)
        if t < 5e-6:
            return joules(7.7e-8 * f.c4 * f.c6)
        if t < 10:
            return joules(7e-4 * t**0.75 * f.c4 * f.c6)
        t_eff = t if t <= f.t2 else f.t2
        return watts(7e-4 * t_eff**0.75 * f.c4 * f.c6 / t)
    if t < 1e-11:
        return joules(3.8e-8 * f.c6 * f.c7)
    if t < 1.3e-5:
        return joules(7.7e-7 * f.c6 * f.c7)
    if t < 10:
        return joules(3.5e-3 * t**0.75 * f.c6 * f.c7)
    t_eff = t if t <= f.t2 else f.t2
    return watts(3.5e-3 * t_eff**0.75 * f.c6 * f.c7 / t)


# --- Class 3R ----------------------------------------------------------------


def _class3r_point(wl: float, t: float, f: CorrectionFactors) -> Quantity | None:
    if t > T_MAX_S:
        return None
    if 180 <= wl < 302.5:
        return watts_m2(1.5e11) if t < 1e-9 else joules_m2(150.0)
    if 302.5 <= wl < 315:
        if t < 1e-9:
            return watts(1.2e5)
        if t < 10:
            return joules(4e-6 * f.c1) if t <= f.t1 else joules(4e-5 * f.c2)
        return joules(4e-6 * f.c2)
    if 315 <= wl < 400:
        if t < 1e-9:
            return watts(1.2e5)
        if t < 10:
            return joules(4e-6 * f.c1)
        if t < 1000:
            return joules(4e-2)
        return watts(4e-5)
    if 400 <= wl < 700:
        if t < 1e-11:
            return joules(1.9e-7)
        if t < 5e-6:
            return joules(3.8e-7)
        if t < 0.25:
            return joules(3.5e-3 * t**0.75)
        return watts(5e-3)
    if 700 <= wl < 1050:
        if t < 1e-11:
            return joules(1.9e-7)
        if t < 5e-6:
            return joules(3.8e-7 * f.c4)
        if t < 10:
            return joules(3.5e-3 * t**0.75 * f.c4)
        return watts(2e-3 * f.c4 * f.c7)
    if 1050 <= wl < 1400:
        if t < 1e-11:
            return joules(1.9e-6 * f.c7)
        if t < 1.3e-5:
            return joules(3.8e-6 * f.c7)
        if t < 10:
            return joules(1.8e-2 * t**0.75 * f.c7)
        return watts(2e-3 * f.c4 * f.c7)
    if 1400 <= wl < 4000:
        return _class3r_mid_ir(wl, t)
    if 4000 <= wl <= 1e6:
        if t < 1e-9:
            return watts_m2(5e11)
        if t < 1e-7:
            return joules_m2(500.0)
        if t < 10:
            return joules_m2(2.8e4 * t**0.25)
        return watts_m2(5000.0)
    return None


def _class3r_mid_ir(wl: float, t: float) -> Quantity:
    if 1500 <= wl < 1800:
        if t < 1e-9:
            return watts(4e7)
        if t < 0.35:
            return joules(4e-2)
        if t < 10:
            return joules(9e-2 * t**0.75)
        return watts(5e-2)
    if 2600 <= wl:
        if t < 1e-9:
            return watts(4e5)
        if t < 1e-7:
            return joules(4e-4)
    else:
        if t < 1e-9:
            return watts(4e6)
        if t < 1e-3:
            return joules(4e-3)
    if t < 0.35:
        return joules(2.2e-2 * t**0.25)
    if t < 10:
        return joules(5e-2 * t)
    return watts(5e-2)


def _class3r_extended(wl: float, t: float, f: CorrectionFactors) -> Quantity | None:
    if wl < 400 or wl > 1400 or t > T_MAX_S:
        return None
    if wl < 700:
        if t < 1e-11:
            return joules(1.9e-7 * f.c6)
        if t < 5e-6:
            return joules(3.8e-7 * f.c6)
        if t < 0.25:
            return joules(3.5e-3 * t**0.75 * f.c6)
        return watts(5e-3 * f.c6)
    if wl < 1050:
        if t < 1e-11:
            return joules(1.9e-7 * f.c6)
        if t < 5e-6:
            return joules(3.8e-7 * f.c4 * f.c6)
        if t < 10 or t <= f.t2:
            return joules(3.5e-3 * t**0.75 * f.c4 * f.c6)
        return watts(3.5e-3 * f.c4 * f.c6 * f.t2**-0.25)
    if t < 1e-11:
        return joules(1.9e-6 * f.c6 * f.c7)
    if t < 1.3e-5:
        return joules(3.8e-6 * f.c6 * f.c7)
    if t < 10:
        return joules(1.8e-2 * t**0.75 * f.c6 * f.c7)
    if t <= f.t2:
        return joules(1.75e-2 * t**0.75 * f.c6 * f.c7)
    return watts(1.75e-2 * f.c6 * f.c7 * f.t2**-0.25)


# --- Class 3B ----------------------------------------------------------------


def _class3b(wl: float, t: float, f: CorrectionFactors) -> Quantity | None:
    if t > T_MAX_S:
        return None
    if 180 <= wl < 302.5:
        if t < 1e-9:
            return watts(3.8e5)
        return joules(3.8e-4) if t <= 0.25 else watts(1.5e-3)
    if 302.5 <= wl < 315:
        if t < 1e-9:
            return watts(1.25e4 * f.c2)
        return joules(1.25e-5 * f.c2) if t <= 0.25 else watts(5e-5 * f.c2)
    if 315 <= wl < 400:
        if t < 1e-9:
            return watts(1.25e3)
        return joules(0.125) if t <= 0.25 else watts(0.5)
    if 400 <= wl <= 700:
        if t < 1e-9:
            return watts(3e5)
        return joules(0.03) if t < 0.06 else watts(0.5)
    if 700 < wl <= 1050:
        if t < 1e-9:
            return watts(3e7 * f.c4)
        if t <= 0.25 and t < 0.06 * f.c4:
            return joules(0.03 * f.c4)
        return watts(0.5)
    if 1050 < wl <= 1400:
        if t < 1e-9:
            return watts(1.5e8)
        return joules(0.15) if t <= 0.25 else watts(0.5)
    if 1400 < wl <= 1e6:
        if t < 1e-9:
            return watts(1.25e8)
        return joules(0.125) if t < 0.25 else watts(0.5)
    return None


# --- public API --------------------------------------------------------------


def _prepare(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float,
    c5: float,
    config: LaserCalcConfig,
) -> tuple[float, float, float, CorrectionFactors]:
    wl = require_wavelength(wavelength_nm)
    t = require_positive(exposure_time_s, "exposure_time_s")
    alpha = require_positive(angular_subtense_mrad, "angular_subtense_mrad")
    c5_val = require_positive(c5, "c5")
    factors = compute_correction_factors(wl, t, alpha, config.correction_factor_mode)
    return wl, t, c5_val, factors


def _log(name: str, wl: float, t: float, ael: Quantity | None) -> None:
    if ael is None:
        logger.debug("%s AEL undefined at %s nm, t=%s s", name, wl, t)
    else:
        logger.debug("%s AEL at %s nm, t=%s s: %s", name, wl, t, ael)


def get_class1_ael(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    c5: float = 1.0,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> Quantity | None:
    wl, t, c5_val, f = _prepare(wavelength_nm, exposure_time_s, angular_subtense_mrad, c5, config)
    if f.c6 == 1.0:
        ael = _class1_point(wl, t, f)
    else:
        ael = _class1_extended(wl, t, f)
    ael = _with_c5(wl, ael, c5_val)
    _log("Class 1", wl, t, ael)
    return ael


def get_class2_ael(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    c5: float = 1.0,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> Quantity | None:
    """Blink-reflex limit: 1 mW x C6 for 400-700 nm, undefined elsewhere."""
    wl, t, c5_val, f = _prepare(wavelength_nm, exposure_time_s, angular_subtense_mrad, c5, config)
    ael = watts(1e-3 * f.c6 * c5_val) if 400 <= wl <= 700 else None
    _log("Class 2", wl, t, ael)
    return ael


def get_class3r_ael(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    c5: float = 1.0,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> Quantity | None:
    wl, t, c5_val, f = _prepare(wavelength_nm, exposure_time_s, angular_subtense_mrad, c5, config)
    if f.c6 == 1.0:
        ael = _class3r_point(wl, t, f)
    else:
        ael = _class3r_extended(wl, t, f)
    ael = _with_c5(wl, ael, c5_val)
    _log("Class 3R", wl, t, ael)
    return ael


def get_class3b_ael(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    c5: float = 1.0,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> Quantity | None:
    wl, t, c5_val, f = _prepare(wavelength_nm, exposure_time_s, angular_subtense_mrad, c5, config)
    ael = _with_c5(wl, _class3b(wl, t, f), c5_val)
    _log("Class 3B", wl, t, ael)
    return ael


def get_ael_set(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    c5: float = 1.0,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> AELSet:
    args = (wavelength_nm, exposure_time_s, angular_subtense_mrad, c5)
    return AELSet(
        class1=get_class1_ael(*args, config=config),
        class2=get_class2_ael(*args, config=config),
        class3r=get_class3r_ael(*args, config=config),
        class3b=get_class3b_ael(*args, config=config),
    )


AEL_FUNCTIONS = {
    "Class 1": get_class1_ael,
    "Class 2": get_class2_ael,
    "Class 3R": get_class3r_ael,
    "Class 3B": get_class3b_ael,
}

