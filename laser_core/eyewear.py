"""Required optical density and EN 207 marking for protective eyewear."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .config import DEFAULT_CONFIG, LaserCalcConfig
from .models import ExposureContext, LaserSpec
from .mpe import compute_mpe
from .quantities import M2_TO_CM2, Quantity, Unit, aperture_area_m2

logger = logging.getLogger(__name__)

MAX_LB_RATING = 10
LOW_VISIBILITY_OD = 7


@dataclass(frozen=True)
class EyewearResult:
    required_od: float
    od_rating: int
    exposure_level: Quantity
    mpe: Quantity
    scale_letter: str
    lb_rating: str
    dir_rating: str
    en207_marking: str
    recommendations: list[str] = field(default_factory=list)
    steps: list[str] = field(default_factory=list)


def scale_letter(spec: LaserSpec) -> str:
    """EN 207 test condition: D (CW), I (1 ns - 0.25 s), R (>= 0.25 s), M (< 1 ns)."""
    if not spec.is_pulsed:
        return "D"
    tau = spec.pulse_width_s
    if tau >= 0.25:
        return "R"
    if tau >= 1e-9:
        return "I"
    return "M"


def lb_rating(od_rating: int) -> str:
    return f"LB{MAX_LB_RATING}+" if od_rating > MAX_LB_RATING else f"LB{od_rating}"


def _recommendations(wavelength_nm: float, od_rating: int, marking: str, below_mpe: bool) -> list[str]:
    items = [
        f"Select eyewear with Optical Density (OD) >= {od_rating} at {wavelength_nm:g} nm.",
        "Ensure eyewear is certified to EN 207 (Europe) or ANSI Z136.1 (USA) standards.",
        f'The EN 207 marking should include: "{marking}".',
        "Check for proper fit, full coverage (including side protection), and comfort.",
        "Inspect eyewear for damage (scratches, cracks, discoloration) before each use.",
        "Verify adequate Visible Light Transmission (VLT) for safe task performance.",
        "Consider alignment procedures for non-visible wavelengths (<400 nm or >700 nm).",
        "Account for multiple wavelengths if applicable (select highest required OD).",
    ]
    if below_mpe:
        items.insert(
            0,
            "Calculated exposure is below MPE. Eyewear may not be required by calculation, "
            "but consider other safety factors.",
        )
    if od_rating > LOW_VISIBILITY_OD:
        items.append(
            "High OD requirement may significantly reduce visibility. "
            "Ensure adequate illumination and consider beam path modification."
        )
    return items


def compute_eyewear_od(
    spec: LaserSpec,
    exposure: ExposureContext,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> EyewearResult:
    """
    OD = log10(exposure level / MPE), clamped at 0.

    CW sources compare irradiance (W/cm²) at the beam against the CW MPE;
    pulsed sources compare the per-pulse radiant exposure (J/cm²) against the
    most restrictive pulsed MPE.
    """
    if not isinstance(spec, LaserSpec):
        raise TypeError("spec must be a LaserSpec")
    wl = spec.wavelength_nm
    beam_area_cm2 = aperture_area_m2(spec.beam_diameter_mm) / M2_TO_CM2

    if spec.is_pulsed:
        mpe = compute_mpe(
            wl,
            exposure.exposure_time_s,
            spec.emission_type,
            pulse_width_s=spec.pulse_width_s,
            repetition_rate_hz=spec.prf_hz,
            angular_subtense_mrad=exposure.angular_subtense_mrad,
            config=config,
        ).critical_mpe
        level = Quantity(spec.pulse_energy_j / beam_area_cm2, Unit.J_CM2)
    else:
        mpe = compute_mpe(
            wl,
            exposure.exposure_time_s,
            spec.emission_type,
            angular_subtense_mrad=exposure.angular_subtense_mrad,
            config=config,
        ).critical_mpe
        level = Quantity(spec.power_w / beam_area_cm2, Unit.W_CM2)

    raw_od = math.log10(level.value / mpe.value)
    required = max(0.0, raw_od)
    od_rating = math.ceil(required)
    letter = scale_letter(spec)
    lb = lb_rating(od_rating)
    marking = f"{wl:g} {letter} {lb}"

    steps = [
        f"Beam area: {beam_area_cm2:.4f} cm²",
        f"Exposure level: {level}",
        f"MPE: {mpe}",
        f"Required OD = log10({level.value:.3e} / {mpe.value:.3e}) = {raw_od:.3f}",
        f"Minimum integer OD: {od_rating}",
        f"EN 207 marking: {marking}",
    ]
    logger.debug("Eyewear at %s nm: OD %.3f (%s)", wl, required, marking)
    return EyewearResult(
        required_od=required,
        od_rating=od_rating,
        exposure_level=level,
        mpe=mpe,
        scale_letter=letter,
        lb_rating=lb,
        dir_rating=f"{letter} L{od_rating}",
        en207_marking=marking,
        recommendations=_recommendations(wl, od_rating, marking, raw_od < 0),
        steps=steps,
    )
