"""
Classification of sources emitting several wavelengths at once.

Lines that act on the same biological endpoint (IEC 60825-1 Table 1) are
classified together with the sum-of-ratios rule; otherwise each line is
classified on its own and the highest class is assigned.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .ael_tables import get_class1_ael, get_class2_ael, get_class3b_ael, get_class3r_ael
from .classifier import ClassificationResult, classify, compare_emission
from .config import DEFAULT_CONFIG, LaserCalcConfig
from .errors import InvalidInputError
from .measurement_conditions import get_measurement_conditions, supports_class2
from .models import ExposureContext, LaserClass, LaserSpec

logger = logging.getLogger(__name__)

METHOD_SINGLE = "single"
METHOD_ADDITIVE = "additive"
METHOD_INDEPENDENT = "independent"


@dataclass(frozen=True)
class AdditiveGroup:
    key: str
    name: str
    min_nm: float
    max_nm: float

    def contains(self, wavelength_nm: float) -> bool:
        return self.min_nm <= wavelength_nm <= self.max_nm


ADDITIVE_GROUPS = (
    AdditiveGroup("VISIBLE_THERMAL", "Visible Thermal (400-700 nm)", 400, 700),
    AdditiveGroup("RETINAL_BROAD", "Retinal Broad (400-1400 nm)", 400, 1400),
    AdditiveGroup("LENS_DAMAGE", "Lens Damage (380-1400 nm)", 380, 1400),
    AdditiveGroup("UV_PHOTOCHEMICAL", "UV Photochemical (200-400 nm)", 200, 400),
)


@dataclass(frozen=True)
class MultiWavelengthResult:
    laser_class: LaserClass
    method: str
    additive_group: AdditiveGroup | None = None
    ratios: list[float] = field(default_factory=list)
    sum_condition1: float | None = None
    sum_condition3: float | None = None
    individual: list[ClassificationResult] = field(default_factory=list)
    steps: list[str] = field(default_factory=list)


def determine_additive_group(wavelengths_nm: Sequence[float]) -> AdditiveGroup | None:
    """First group (in table order) that contains every wavelength, if any."""
    for group in ADDITIVE_GROUPS:
        if all(group.contains(wl) for wl in wavelengths_nm):
            return group
    return None


def _additive_ael(laser_class: LaserClass, spec: LaserSpec, exposure: ExposureContext, config: LaserCalcConfig):
    args = (spec.wavelength_nm, exposure.exposure_time_s, exposure.angular_subtense_mrad)
    if laser_class is LaserClass.CLASS_1:
        return get_class1_ael(*args, config=config)
    if laser_class is LaserClass.CLASS_2:
        # Lines outside the visible band are held to Class 1.
        if supports_class2(spec.wavelength_nm):
            return get_class2_ael(*args, config=config)
        return get_class1_ael(*args, config=config)
    if laser_class is LaserClass.CLASS_3R:
        return get_class3r_ael(*args, config=config)
    return get_class3b_ael(*args, config=config)


def _classify_additive(
    sources: Sequence[LaserSpec],
    exposure: ExposureContext,
    group: AdditiveGroup,
    config: LaserCalcConfig,
    steps: list[str],
) -> MultiWavelengthResult:
    t = exposure.exposure_time_s
    conditions = get_measurement_conditions(sources[0].wavelength_nm, t)
    steps.append(f"Additive region: {group.name}")
    steps.append("Rule: sum(Emission_i / AEL_i) <= 1.0 for each class")

    for laser_class in (LaserClass.CLASS_1, LaserClass.CLASS_2, LaserClass.CLASS_3R, LaserClass.CLASS_3B):
        steps.append(f"--- Testing {laser_class.value} with additive rule ---")
        sum_c1 = 0.0
        sum_c3 = 0.0
        ratios: list[float] = []
        evaluable = True
        for idx, spec in enumerate(sources, start=1):
            ael = _additive_ael(laser_class, spec, exposure, config)
            if ael is None:
                steps.append(
                    f"  line {idx} ({spec.wavelength_nm:g} nm): {laser_class.value} AEL is not defined "
                    "for this wavelength and exposure time; class not evaluable."
                )
                evaluable = False
                break
            c1 = compare_emission(spec.emission, ael, t, spec.prf_hz, conditions.condition1.aperture_mm)
            c3 = compare_emission(spec.emission, ael, t, spec.prf_hz, conditions.condition3.aperture_mm)
            sum_c1 += c1.ratio
            sum_c3 += c3.ratio
            ratios.append(max(c1.ratio, c3.ratio))
            steps.append(
                f"  line {idx} ({spec.wavelength_nm:g} nm): AEL {ael}, ratios C1={c1.ratio:.4f}, C3={c3.ratio:.4f}"
            )
        if not evaluable:
            continue
        steps.append(f"  Sum of ratios: Condition 1 = {sum_c1:.4f}, Condition 3 = {sum_c3:.4f}")
        if sum_c1 <= 1.0 and sum_c3 <= 1.0:
            steps.append(f"Result: {laser_class.value} (additive classification)")
            return MultiWavelengthResult(
                laser_class=laser_class,
                method=METHOD_ADDITIVE,
                additive_group=group,
                ratios=ratios,
                sum_condition1=sum_c1,
                sum_condition3=sum_c3,
                steps=steps,
            )
        steps.append(f"  {laser_class.value} additive test: FAIL (sum > 1.0)")

    steps.append("Result: Class 4 (additive classification)")
    return MultiWavelengthResult(
        laser_class=LaserClass.CLASS_4,
        method=METHOD_ADDITIVE,
        additive_group=group,
        steps=steps,
    )


def classify_multi(
    sources: Sequence[LaserSpec],
    exposure: ExposureContext,
    beam_diameter_mm: float | None = None,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> MultiWavelengthResult:
    if not sources:
        raise InvalidInputError("at least one source is required")
    for spec in sources:
        if not isinstance(spec, LaserSpec):
            raise TypeError("sources must contain LaserSpec items")

    if len(sources) == 1:
        single = classify(sources[0], exposure, beam_diameter_mm, config=config)
        return MultiWavelengthResult(
            laser_class=single.laser_class,
            method=METHOD_SINGLE,
            ratios=[single.ratio] if single.ratio is not None else [],
            individual=[single],
            steps=list(single.steps),
        )

    steps = [
        f"Number of lines: {len(sources)}",
        f"Exposure time: {exposure.exposure_time_s:g} s",
    ]
    for idx, spec in enumerate(sources, start=1):
        steps.append(f"Line {idx}: {spec.wavelength_nm:g} nm, {spec.emission_type.value}, emission {spec.emission}")

    group = determine_additive_group([s.wavelength_nm for s in sources])
    if group is not None:
        result = _classify_additive(sources, exposure, group, config, steps)
        logger.debug("Additive classification (%s): %s", group.key, result.laser_class.value)
        return result

    steps.append("Lines are not additive: classifying each line independently")
    individual = [classify(spec, exposure, beam_diameter_mm, config=config) for spec in sources]
    highest = max(individual, key=lambda r: r.laser_class.rank).laser_class
    for idx, (spec, res) in enumerate(zip(sources, individual), start=1):
        steps.append(f"  line {idx} ({spec.wavelength_nm:g} nm): {res.laser_class.value}")
    steps.append(f"Result: {highest.value} (highest individual class)")
    logger.debug("Independent classification: %s", highest.value)
    return MultiWavelengthResult(
        laser_class=highest,
        method=METHOD_INDEPENDENT,
        ratios=[r.ratio for r in individual if r.ratio is not None],
        individual=individual,
        steps=steps,
    )
