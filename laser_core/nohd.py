"""Nominal Ocular Hazard Distance for a diverging (or collimated) CW beam."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .config import DEFAULT_CONFIG, LaserCalcConfig
from .errors import require_non_negative, require_positive
from .models import EmissionType
from .mpe import compute_mpe
from .quantities import M2_TO_CM2, MM_TO_M, Quantity, Unit

logger = logging.getLogger(__name__)

HAZARD_BANDS = (
    (0.1, "Low hazard potential", "NOHD < 10 cm"),
    (3.0, "Moderate hazard potential", "NOHD < 3 m"),
    (100.0, "High hazard potential", "NOHD < 100 m"),
)
HAZARD_EXTREME = ("Extremely high hazard", "Collimated beam exceeding MPE")
HAZARD_VERY_HIGH = ("Very high hazard potential", "NOHD >= 100 m")


@dataclass(frozen=True)
class NOHDResult:
    nohd_m: float
    mpe: Quantity
    beam_diameter_at_nohd_mm: float
    irradiance_at_nohd: Quantity
    hazard_class: str
    hazard_detail: str
    initial_power_density: Quantity
    steps: list[str] = field(default_factory=list)


def hazard_perception(nohd_m: float) -> tuple[str, str]:
    """Label and detail text for a hazard distance."""
    if math.isinf(nohd_m):
        return HAZARD_EXTREME
    for limit, label, detail in HAZARD_BANDS:
        if nohd_m < limit:
            return label, detail
    return HAZARD_VERY_HIGH


def _beam_area_m2(diameter_m: float) -> float:
    return math.pi * (diameter_m / 2.0) ** 2


def compute_nohd(
    power_w: float,
    beam_diameter_mm: float,
    divergence_rad: float,
    wavelength_nm: float,
    exposure_time_s: float,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> NOHDResult:
    """
    NOHD = (sqrt(4P / (pi x MPE)) - D0) / phi, clamped at 0.

    A zero divergence is a collimated beam: the distance is infinite when the
    irradiance at the aperture exceeds the MPE, 0 otherwise.
    """
    p = require_positive(power_w, "power_w")
    d0_mm = require_positive(beam_diameter_mm, "beam_diameter_mm")
    phi = require_non_negative(divergence_rad, "divergence_rad")

    mpe = compute_mpe(wavelength_nm, exposure_time_s, EmissionType.CW, config=config).critical_mpe
    mpe_w_m2 = mpe.value / M2_TO_CM2
    d0_m = d0_mm * MM_TO_M

    steps = [
        f"Laser power (P): {p:.3e} W",
        f"Beam diameter at aperture (D0): {d0_m:.3e} m",
        f"Beam divergence (phi): {phi:.3e} rad",
        f"Wavelength: {wavelength_nm:g} nm, exposure time {exposure_time_s:g} s",
        f"MPE used: {mpe} = {mpe_w_m2:.3e} W/m²",
    ]

    if phi > 0:
        term = 4.0 * p / (math.pi * mpe_w_m2)
        nohd = (math.sqrt(term) - d0_m) / phi
        steps.append(f"4P / (pi x MPE) = {term:.3e} m²")
        steps.append(f"NOHD = (sqrt({term:.3e}) - {d0_m:.3e}) / {phi:.3e} = {nohd:.3f} m")
    else:
        initial_w_m2 = p / _beam_area_m2(d0_m)
        nohd = math.inf if initial_w_m2 > mpe_w_m2 else 0.0
        steps.append(
            f"Collimated beam: initial irradiance {initial_w_m2:.3e} W/m², NOHD = {'inf' if math.isinf(nohd) else '0'} m"
        )
    nohd = max(nohd, 0.0)

    if math.isinf(nohd):
        diameter_at_nohd_mm = math.inf
        irradiance = Quantity(0.0, Unit.W_CM2)
    else:
        diameter_at_nohd_m = d0_m + nohd * phi
        diameter_at_nohd_mm = diameter_at_nohd_m / MM_TO_M
        irradiance = Quantity(p / _beam_area_m2(diameter_at_nohd_m) * M2_TO_CM2, Unit.W_CM2)

    initial_density = Quantity(p / _beam_area_m2(d0_m) * M2_TO_CM2, Unit.W_CM2)
    label, detail = hazard_perception(nohd)

    steps.append(f"Calculated NOHD: {'inf' if math.isinf(nohd) else f'{nohd:.2f}'} m")
    if not math.isinf(nohd):
        steps.append(f"Beam diameter at NOHD: {diameter_at_nohd_mm:.1f} mm")
        steps.append(f"Irradiance at NOHD: {irradiance}")
    steps.append(f"Hazard perception: {label} - {detail}")
    logger.debug("NOHD %s m at %s nm (%s)", nohd, wavelength_nm, label)

    return NOHDResult(
        nohd_m=nohd,
        mpe=mpe,
        beam_diameter_at_nohd_mm=diameter_at_nohd_mm,
        irradiance_at_nohd=irradiance,
        hazard_class=label,
        hazard_detail=detail,
        initial_power_density=initial_density,
        steps=steps,
    )
