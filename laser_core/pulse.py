"""
Pulse-train handling: C5 factor, pulse parameter sanity checks and the
three-limit pulsed AEL assessment.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from .config import DEFAULT_CONFIG, LaserCalcConfig
from .errors import require_non_negative, require_positive
from .models import DEFAULT_ANGULAR_SUBTENSE_MRAD, require_wavelength
from .quantities import Quantity
from .wavelength import time_base

logger = logging.getLogger(__name__)

LONG_PULSE_S = 0.25
SHORT_EXPOSURE_S = 0.25
MANY_PULSES = 600
MEDIUM_SOURCE_PULSES = 40
C5_FLOOR = 0.4
HIGH_DUTY_CYCLE_PCT = 50.0

AELFunction = Callable[..., "Quantity | None"]


@dataclass(frozen=True)
class C5Result:
    c5: float
    pulse_count: int
    time_base_s: float
    grouping: str


@dataclass(frozen=True)
class PulseValidation:
    is_valid: bool
    error: str | None = None
    warning: str | None = None
    duty_cycle_pct: float | None = None


@dataclass(frozen=True)
class PulsedAELAssessment:
    single_pulse: Quantity
    average: Quantity
    pulse_train: Quantity
    most_restrictive: Quantity
    mechanism: str
    c5: C5Result


def c5_factor(
    wavelength_nm: float,
    pulse_width_s: float,
    repetition_rate_hz: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    pulse_count: int | None = None,
) -> C5Result:
    """
    Pulse-train correction C5.

    Rules:
    - N = floor(T x PRF) unless pulse_count is given
    - pulses >= 0.25 s or N <= 1: C5 = 1
    - pulse width <= Ti: C5 = 1 for T <= 0.25 s or N <= 600, else max(0.4, 5 N^-0.25)
    - pulse width > Ti: C5 = 1 for alpha <= 1.5 mrad or alpha > 100 mrad;
      otherwise 1 for N <= 40, else max(0.4, N^-0.25)
    """
    wl = require_wavelength(wavelength_nm)
    tau = require_positive(pulse_width_s, "pulse_width_s")
    prf = require_non_negative(repetition_rate_hz, "repetition_rate_hz")
    t = require_positive(exposure_time_s, "exposure_time_s")
    alpha = require_positive(angular_subtense_mrad, "angular_subtense_mrad")

    ti = time_base(wl)
    n = int(pulse_count) if pulse_count is not None and pulse_count > 0 else math.floor(t * prf)

    if tau >= LONG_PULSE_S:
        return C5Result(1.0, n, ti, "Long pulse (>= 0.25 s), C5 not applicable")
    if n <= 1:
        return C5Result(1.0, n, ti, "Single pulse")

    if tau <= ti:
        if t <= SHORT_EXPOSURE_S:
            result = C5Result(1.0, n, ti, "Short exposure time (<= 0.25 s)")
        elif n <= MANY_PULSES:
            result = C5Result(1.0, n, ti, "Few pulses (N <= 600)")
        else:
            result = C5Result(max(C5_FLOOR, 5.0 * n**-0.25), n, ti, "Many pulses (N > 600), C5 = 5 N^-0.25")
    elif alpha <= 1.5:
        result = C5Result(1.0, n, ti, "Small angular subtense (<= 1.5 mrad)")
    elif alpha <= 100:
        if n <= MEDIUM_SOURCE_PULSES:
            result = C5Result(1.0, n, ti, "Medium angular subtense, few pulses")
        else:
            result = C5Result(max(C5_FLOOR, n**-0.25), n, ti, "Medium angular subtense, many pulses")
    else:
        result = C5Result(1.0, n, ti, "Large angular subtense (> 100 mrad)")

    logger.debug("C5 at %s nm: N=%s, Ti=%s s, C5=%.4f (%s)", wl, n, ti, result.c5, result.grouping)
    return result


def validate_pulse_parameters(pulse_width_s: float, repetition_rate_hz: float) -> PulseValidation:
    if not repetition_rate_hz > 0:
        return PulseValidation(False, error=f"Repetition rate ({repetition_rate_hz} Hz) must be positive.")
    if not pulse_width_s > 0:
        return PulseValidation(False, error=f"Pulse width ({pulse_width_s} s) must be positive.")
    period_s = 1.0 / repetition_rate_hz
    duty_cycle = pulse_width_s / period_s * 100.0
    if pulse_width_s > period_s:
        return PulseValidation(
            False,
            error=(
                f"Pulse width ({pulse_width_s:.3e} s) cannot be larger than the period between "
                f"pulses ({period_s:.3e} s at {repetition_rate_hz} Hz)."
            ),
            duty_cycle_pct=duty_cycle,
        )
    if duty_cycle > HIGH_DUTY_CYCLE_PCT:
        return PulseValidation(
            True,
            warning=f"High duty cycle ({duty_cycle:.1f}%). Thermal effects may dominate; consider CW analysis.",
            duty_cycle_pct=duty_cycle,
        )
    return PulseValidation(True, duty_cycle_pct=duty_cycle)


def assess_pulsed_ael(
    ael_function: AELFunction,
    wavelength_nm: float,
    pulse_width_s: float,
    repetition_rate_hz: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> PulsedAELAssessment | None:
    """
    Most restrictive per-pulse AEL of a repetitively pulsed source.

    Compares the single-pulse AEL, the average-power AEL shared over the pulses
    in T, and the single-pulse AEL reduced by C5. All three are expressed as
    energy per pulse. Returns None when any of the limits is undefined.
    """
    prf = require_positive(repetition_rate_hz, "repetition_rate_hz")
    t = require_positive(exposure_time_s, "exposure_time_s")
    tau = require_positive(pulse_width_s, "pulse_width_s")

    c5 = c5_factor(wavelength_nm, tau, prf, t, angular_subtense_mrad)
    single = ael_function(wavelength_nm, tau, angular_subtense_mrad, config=config)
    over_t = ael_function(wavelength_nm, t, angular_subtense_mrad, config=config)
    if single is None or over_t is None:
        return None

    single = single.to_energy(tau)
    if over_t.is_energy:
        average = over_t.scaled(1.0 / max(1, math.floor(t * prf)))
    else:
        average = over_t.to_energy(1.0 / prf)
    train = single.scaled(c5.c5)

    # Rule order on ties: single pulse, average power, pulse train.
    candidates = (
        ("Single pulse", single),
        ("Average power", average),
        ("Pulse train (C5)", train),
    )
    mechanism, limit = min(candidates, key=lambda item: item[1].value)
    logger.debug("Pulsed AEL at %s nm limited by %s: %s", wavelength_nm, mechanism, limit)
    return PulsedAELAssessment(
        single_pulse=single,
        average=average,
        pulse_train=train,
        most_restrictive=limit,
        mechanism=mechanism,
        c5=c5,
    )
