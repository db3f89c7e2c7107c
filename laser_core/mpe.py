"""
Maximum Permissible Exposure for the eye, with the three pulsed-train rules,
and the skin MPE of IEC 60825-1 Table A.5.

Eye MPE values are expressed per cm²: radiant exposure in J/cm² for the pulsed
formulas, irradiance in W/cm² for CW.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable

from .config import DEFAULT_CONFIG, LaserCalcConfig
from .correction_factors import (
    CorrectionFactors,
    MPECorrectionFactors,
    compute_correction_factors,
    get_mpe_correction_factors,
)
from .errors import InvalidInputError, require_non_negative, require_positive
from .models import DEFAULT_ANGULAR_SUBTENSE_MRAD, EmissionType, parse_emission_type, require_wavelength
from .quantities import Quantity, Unit, joules_m2, watts_m2
from .wavelength import WavelengthRegion, time_base, wavelength_region

logger = logging.getLogger(__name__)

THERMAL_TIME_LIMIT_S = 10.0
RETINAL_MIN_NM = 400.0
RETINAL_MAX_NM = 1400.0
VISIBLE_SHORT_PULSE_J_CM2 = 5e-7
VISIBLE_THERMAL_COEFF_J_CM2 = 1.8e-3
NEAR_IR_SHORT_PULSE_J_CM2 = 5e-6
NEAR_IR_THERMAL_COEFF_J_CM2 = 9e-3
VISIBLE_CW_LIMIT_W_CM2 = 100e-6
IR_CW_LIMIT_W_CM2 = 0.1
UVA_CW_LIMIT_W_CM2 = 1e-3
IR_THERMAL_COEFF_J_CM2 = 0.56

RULE_SINGLE_PULSE = "Rule 1: single pulse"
RULE_AVERAGE_POWER = "Rule 2: average power"
RULE_REPETITIVE_PULSE = "Rule 3: repetitive pulse (thermal accumulation)"
CW_LIMIT = "CW irradiance limit"


@dataclass(frozen=True)
class MPEResult:
    critical_mpe: Quantity
    limiting_mechanism: str
    correction_factors: MPECorrectionFactors
    region: WavelengthRegion
    mpe_single_pulse: Quantity | None = None
    mpe_average: Quantity | None = None
    mpe_average_per_pulse: Quantity | None = None
    mpe_thermal: Quantity | None = None
    pulse_count: int | None = None
    cp: float | None = None
    steps: list[str] = field(default_factory=list)


def _j(value: float) -> Quantity:
    return Quantity(value, Unit.J_CM2)


def _w(value: float) -> Quantity:
    return Quantity(value, Unit.W_CM2)


def is_extended_source(wl: float, f: CorrectionFactors) -> bool:
    return RETINAL_MIN_NM <= wl <= RETINAL_MAX_NM and f.c6 > 1


def thermal_breakpoint(wl: float, f: CorrectionFactors) -> float:
    """End of the t^0.75 retinal thermal regime: T2 for extended sources, else 10 s."""
    return f.t2 if is_extended_source(wl, f) else THERMAL_TIME_LIMIT_S


def radiant_exposure_limit(
    wl: float, t: float, mf: MPECorrectionFactors, f: CorrectionFactors
) -> Quantity:
    """Pulsed-mode MPE H(t) in J/cm² for an exposure of duration t."""
    if wl < 302.5:
        return _j(3e-3)
    if wl < 315:
        return _j(1e-4 * (f.c1 if t <= f.t1 else f.c2))
    if wl < 400:
        return _j(1e-4 * f.c1) if t < THERMAL_TIME_LIMIT_S else _j(1.0)
    if t >= thermal_breakpoint(wl, f):
        return irradiance_limit(wl, t, mf, f).to_energy(t)
    c6 = f.c6 if is_extended_source(wl, f) else 1.0
    if wl < 1050:
        if t < 1.8e-5:
            return _j(VISIBLE_SHORT_PULSE_J_CM2 * mf.ca)
        thermal = _j(VISIBLE_THERMAL_COEFF_J_CM2 * mf.ca * c6 * t**0.75)
        if wl < 700 and t >= THERMAL_TIME_LIMIT_S:
            # photochemical CW limit still bounds long visible exposures
            photochemical = _w(VISIBLE_CW_LIMIT_W_CM2 * mf.cb * mf.cc).to_energy(t)
            return photochemical if photochemical.value < thermal.value else thermal
        return thermal
    if wl <= 1400:
        if t < 5e-5:
            return _j(NEAR_IR_SHORT_PULSE_J_CM2)
        return _j(NEAR_IR_THERMAL_COEFF_J_CM2 * c6 * t**0.75)
    if wl <= 1500 or 1800 < wl <= 2600:
        if t < 1e-3:
            return _j(0.1 * mf.cc)
        return _j(IR_THERMAL_COEFF_J_CM2 * t**0.25)
    if wl <= 1800:
        return _j(1.0 * mf.cc)
    if t < 1e-7:
        return _j(0.01)
    return _j(IR_THERMAL_COEFF_J_CM2 * t**0.25)


def irradiance_limit(
    wl: float, t: float, mf: MPECorrectionFactors, f: CorrectionFactors
) -> Quantity:
    """CW-mode MPE E(t) in W/cm² for an exposure of duration t."""
    if wl < 400:
        if wl >= 315 and t >= 1000:
            return _w(UVA_CW_LIMIT_W_CM2)
        return radiant_exposure_limit(wl, t, mf, f).to_power(t)
    if t < thermal_breakpoint(wl, f):
        return radiant_exposure_limit(wl, t, mf, f).to_power(t)
    if wl <= 1400:
        return _w(VISIBLE_CW_LIMIT_W_CM2 * mf.cb * mf.cc)
    return _w(IR_CW_LIMIT_W_CM2 * mf.cc)


def _eye_limit(
    limit: Callable[..., Quantity],
    wl: float,
    t: float,
    alpha: float,
    mf: MPECorrectionFactors,
    config: LaserCalcConfig,
    steps: list[str],
) -> Quantity:
    """Evaluate one eye limit; an extended source never ends up below the point-source value."""
    f = compute_correction_factors(wl, t, alpha, config.correction_factor_mode)
    value = limit(wl, t, mf, f)
    if not is_extended_source(wl, f):
        return value
    point_f = compute_correction_factors(wl, t, DEFAULT_ANGULAR_SUBTENSE_MRAD, config.correction_factor_mode)
    point = limit(wl, t, mf, point_f)
    if point.value >= value.value:
        return point
    steps.append(f"Extended source at t={t:.3e} s (C6 = {f.c6:.2f}, T2 = {f.t2:.1f} s): {value} instead of {point}")
    return value


def compute_mpe(
    wavelength_nm: float,
    exposure_time_s: float,
    emission_type: EmissionType | str = EmissionType.CW,
    *,
    pulse_width_s: float | None = None,
    repetition_rate_hz: float | None = None,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> MPEResult:
    """
    Eye MPE for a single exposure or, for pulsed emission, the most
    restrictive of the three pulse-train rules.

    Rules (pulsed):
    - Rule 1: MPE_sp = H(pulse width)
    - Rule 2: E(T) / PRF, the average-power limit shared over the pulses
    - Rule 3: MPE_sp x N^-0.25 with N = floor(Ti x PRF), applied only for N > 1
    Ties resolve in the order Rule 3, Rule 1, Rule 2.
    """
    wl = require_wavelength(wavelength_nm)
    t = require_positive(exposure_time_s, "exposure_time_s")
    alpha = require_positive(angular_subtense_mrad, "angular_subtense_mrad")
    kind = parse_emission_type(emission_type)

    mf = get_mpe_correction_factors(wl)
    region = wavelength_region(wl)
    steps = [
        f"Wavelength: {wl:g} nm ({region.value})",
        f"Exposure time: {t:.3e} s, angular subtense {alpha:g} mrad",
        f"Correction factors: CA={mf.ca:.3f}, CB={mf.cb:.3f}, CC={mf.cc:.3f}",
    ]

    if kind is EmissionType.CW:
        mpe = _eye_limit(irradiance_limit, wl, t, alpha, mf, config, steps)
        steps.append(f"CW MPE: {mpe}")
        logger.debug("CW MPE at %s nm, t=%s s: %s", wl, t, mpe)
        return MPEResult(
            critical_mpe=mpe,
            limiting_mechanism=CW_LIMIT,
            correction_factors=mf,
            region=region,
            steps=steps,
        )

    if pulse_width_s is None:
        raise InvalidInputError("pulse_width_s is required for pulsed emission")
    tau = require_positive(pulse_width_s, "pulse_width_s")
    prf = require_non_negative(repetition_rate_hz or 0.0, "repetition_rate_hz")

    mpe_sp = _eye_limit(radiant_exposure_limit, wl, tau, alpha, mf, config, steps)
    steps.append(f"Rule 1 (single pulse, t={tau:.3e} s): {mpe_sp}")

    mpe_avg = _eye_limit(irradiance_limit, wl, t, alpha, mf, config, steps)
    if prf > 0:
        mpe_avg_pp = _j(mpe_avg.value / prf)
        steps.append(f"Rule 2 (average power): {mpe_avg} / {prf:g} Hz = {mpe_avg_pp}")
    else:
        mpe_avg_pp = mpe_avg.to_energy(t)
        steps.append(f"Rule 2 (single pulse train over T): {mpe_avg} x {t:g} s = {mpe_avg_pp}")

    ti = time_base(wl)
    n = math.floor(ti * prf)
    if n > 1:
        cp = n**-0.25
        mpe_rp = mpe_sp.scaled(cp)
        steps.append(f"Rule 3: N = floor({ti:.1e} s x {prf:g} Hz) = {n}, C_P = N^-0.25 = {cp:.4f}, MPE = {mpe_rp}")
    else:
        cp = 1.0
        mpe_rp = mpe_sp
        steps.append(f"Rule 3: N = floor({ti:.1e} s x {prf:g} Hz) = {n} <= 1, C_P not applied")

    candidates = (
        (RULE_REPETITIVE_PULSE, mpe_rp),
        (RULE_SINGLE_PULSE, mpe_sp),
        (RULE_AVERAGE_POWER, mpe_avg_pp),
    )
    mechanism, critical = min(candidates, key=lambda item: item[1].value)
    steps.append(f"Most restrictive: {critical} ({mechanism})")
    logger.debug("Pulsed MPE at %s nm limited by %s: %s", wl, mechanism, critical)

    return MPEResult(
        critical_mpe=critical,
        limiting_mechanism=mechanism,
        correction_factors=mf,
        region=region,
        mpe_single_pulse=mpe_sp,
        mpe_average=mpe_avg,
        mpe_average_per_pulse=mpe_avg_pp,
        mpe_thermal=mpe_rp,
        pulse_count=n,
        cp=cp,
        steps=steps,
    )


def _skin_mpe_m2(wl: float, t: float, f: CorrectionFactors) -> Quantity:
    if wl < 302.5:
        return joules_m2(30.0)
    if wl < 315:
        if t < 10 and t <= f.t1:
            return joules_m2(f.c1)
        return joules_m2(f.c2)
    if wl < 400:
        if t < 10:
            return joules_m2(f.c1)
        return joules_m2(1e4) if t < 1000 else watts_m2(10.0)
    if wl <= 1400:
        scale = 1.0 if wl <= 700 else f.c4
        if t < 10:
            return joules_m2(200.0 * scale)
        if t < 1000:
            return joules_m2(1.1e4 * scale * t**0.25)
        return watts_m2(2000.0 * scale)
    if 1500 < wl <= 1800:
        return joules_m2(1e4)
    if wl <= 2600:
        if t < 1e-3:
            return joules_m2(1e3)
        return joules_m2(5600.0 * t**0.25) if t < 10 else watts_m2(1000.0)
    if t < 1e-7:
        return joules_m2(100.0)
    return joules_m2(5600.0 * t**0.25) if t < 10 else watts_m2(1000.0)


def compute_skin_mpe(
    wavelength_nm: float,
    exposure_time_s: float,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> Quantity:
    """Skin MPE (Table A.5) in J/cm² or W/cm²."""
    wl = require_wavelength(wavelength_nm)
    t = require_positive(exposure_time_s, "exposure_time_s")
    f = compute_correction_factors(wl, t, DEFAULT_ANGULAR_SUBTENSE_MRAD, config.correction_factor_mode)
    mpe = _skin_mpe_m2(wl, t, f).per_cm2()
    logger.debug("Skin MPE at %s nm, t=%s s: %s", wl, t, mpe)
    return mpe
