"""
Hierarchical laser classification (IEC 60825-1:2014).

Classes are tested in strict order 1, 1M, 2, 2M, 3R, 3B and the first class
whose test passes wins; Class 4 is the catch-all. Every evaluated step is
appended to the result trail, and the trail order is part of the result.

Condition 1 and Condition 3 emissions are both the raw input emission. The
geometry only matters where the AEL is per area, in which case the emission
is spread over the condition's aperture.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from .ael_tables import get_class1_ael, get_class2_ael, get_class3b_ael, get_class3r_ael
from .config import DEFAULT_CONFIG, LaserCalcConfig
from .errors import require_positive
from .measurement_conditions import (
    ApertureStop,
    MeasurementConditions,
    get_measurement_conditions,
    requires_class_m,
    supports_class2,
)
from .models import EmissionType, ExposureContext, LaserClass, LaserSpec
from .pulse import assess_pulsed_ael
from .quantities import Quantity, Unit
from .wavelength import classification_time_base, wavelength_region

logger = logging.getLogger(__name__)

CONDITION1_NOT_APPLIED = "Condition 1 test is not applied."

CLASS_DESCRIPTIONS = {
    LaserClass.CLASS_1: "Safe under all conditions of normal use (IEC 60825-1:2014)",
    LaserClass.CLASS_1M: "Safe for unaided eye, hazardous with optical instruments (IEC 60825-1:2014)",
    LaserClass.CLASS_2: "Safe due to blink reflex protection (IEC 60825-1:2014)",
    LaserClass.CLASS_2M: (
        "Safe for unaided eye due to blink reflex, hazardous with optical instruments (IEC 60825-1:2014)"
    ),
    LaserClass.CLASS_3R: "Low risk but potentially hazardous for direct viewing (IEC 60825-1:2014)",
    LaserClass.CLASS_3B: "Direct viewing hazardous, diffuse reflections normally safe (IEC 60825-1:2014)",
    LaserClass.CLASS_4: "Eye and skin hazard, fire hazard, hazardous diffuse reflections (IEC 60825-1:2014)",
}

SAFETY_REQUIREMENTS = {
    LaserClass.CLASS_1: ["No special safety measures required", "Eye-safe under all conditions"],
    LaserClass.CLASS_1M: [
        "Warning label required",
        "Do not view with optical instruments",
        "Safe for unaided eye viewing",
    ],
    LaserClass.CLASS_2: ["Warning label required", "Do not stare into beam", "Blink reflex provides protection"],
    LaserClass.CLASS_2M: [
        "Warning label required",
        "Do not view with optical instruments",
        "Blink reflex protects unaided eye",
    ],
    LaserClass.CLASS_3R: [
        "Warning label required",
        "Avoid direct eye exposure",
        "Use with caution",
        "Safety training recommended",
    ],
    LaserClass.CLASS_3B: [
        "Warning and aperture labels required",
        "Eye protection in hazard zone",
        "Controlled area required",
        "Safety interlocks required",
        "Laser safety officer required",
    ],
    LaserClass.CLASS_4: [
        "All Class 3B requirements plus:",
        "Skin protection may be required",
        "Fire prevention measures",
        "Emergency procedures required",
        "Extensive safety training mandatory",
    ],
}


def class_description(laser_class: LaserClass | str) -> str:
    return CLASS_DESCRIPTIONS[LaserClass(laser_class)]


def safety_requirements(laser_class: LaserClass | str) -> list[str]:
    return list(SAFETY_REQUIREMENTS[LaserClass(laser_class)])


@dataclass(frozen=True)
class Comparison:
    emission: Quantity
    ael: Quantity
    passes: bool
    ratio: float


@dataclass(frozen=True)
class ClassTest:
    laser_class: LaserClass
    ael: Quantity | None
    condition1: Comparison | None = None
    condition3: Comparison | None = None
    condition1_pass: bool = False
    condition3_pass: bool = False

    @property
    def evaluable(self) -> bool:
        return self.ael is not None

    @property
    def passes(self) -> bool:
        return self.evaluable and self.condition1_pass and self.condition3_pass

    @property
    def ratio(self) -> float | None:
        ratios = [c.ratio for c in (self.condition1, self.condition3) if c is not None]
        return max(ratios) if ratios else None


@dataclass(frozen=True)
class ClassificationResult:
    laser_class: LaserClass
    ael: Quantity | None
    measured_emission: Quantity
    ratio: float | None
    condition1_test: bool
    condition3_test: bool
    requires_class_m: bool
    conditions: MeasurementConditions
    steps: list[str] = field(default_factory=list)

    @property
    def class_description(self) -> str:
        return class_description(self.laser_class)

    @property
    def safety_requirements(self) -> list[str]:
        return safety_requirements(self.laser_class)


def convert_emission(
    emission: Quantity,
    ael: Quantity,
    exposure_time_s: float,
    repetition_rate_hz: float,
    aperture_mm: float,
) -> Quantity:
    """
    Express a raw emission (W or J per pulse) in the unit of an AEL.

    W -> J multiplies by the exposure time; J -> W uses the average power
    E x PRF, or E / t for a single pulse. Per-area AELs spread the emission over
    the aperture of the measurement condition.
    """
    value = emission
    if ael.is_energy and not value.is_energy:
        value = value.to_energy(exposure_time_s)
    elif not ael.is_energy and value.is_energy:
        if repetition_rate_hz > 0:
            value = Quantity(value.value * repetition_rate_hz, Unit.W)
        else:
            value = value.to_power(exposure_time_s)
    if ael.is_per_area:
        value = value.per_area(aperture_mm)
    return value


def compare_emission(
    emission: Quantity,
    ael: Quantity,
    exposure_time_s: float,
    repetition_rate_hz: float,
    aperture_mm: float,
) -> Comparison:
    converted = convert_emission(emission, ael, exposure_time_s, repetition_rate_hz, aperture_mm)
    ratio = converted.value / ael.value if ael.value > 0 else float("inf")
    return Comparison(emission=converted, ael=ael, passes=converted.value <= ael.value, ratio=ratio)


class _Classification:
    """One classification pass: holds the inputs and the growing trail."""

    def __init__(
        self,
        spec: LaserSpec,
        exposure: ExposureContext,
        beam_diameter_mm: float,
        config: LaserCalcConfig,
        auto_time_base: bool = False,
    ) -> None:
        self.spec = spec
        self.auto_time_base = auto_time_base
        if auto_time_base:
            self.t = classification_time_base(spec.wavelength_nm)
        else:
            self.t = exposure.exposure_time_s
        self.alpha = exposure.angular_subtense_mrad
        self.beam_diameter_mm = beam_diameter_mm
        self.config = config
        self.emission = spec.emission
        self.conditions = get_measurement_conditions(spec.wavelength_nm, self.t)
        self.steps: list[str] = []

    def time_for(self, name: LaserClass) -> float:
        if self.auto_time_base:
            return classification_time_base(self.spec.wavelength_nm, name)
        return self.t

    def lookup_ael(self, name: LaserClass, ael_function: Callable[..., Quantity | None]) -> Quantity | None:
        wl = self.spec.wavelength_nm
        t = self.time_for(name)
        if self.config.pulse_train_assessment and self.spec.is_pulsed and self.spec.prf_hz > 0:
            assessment = assess_pulsed_ael(
                ael_function,
                wl,
                self.spec.pulse_width_s,
                self.spec.prf_hz,
                t,
                self.alpha,
                config=self.config,
            )
            if assessment is None:
                return None
            self.steps.append(
                f"{name.value} pulsed AEL: single pulse {assessment.single_pulse}, "
                f"average {assessment.average}, pulse train {assessment.pulse_train} "
                f"(C5 = {assessment.c5.c5:.4f})"
            )
            self.steps.append(f"Most restrictive: {assessment.most_restrictive} ({assessment.mechanism})")
            return assessment.most_restrictive
        return ael_function(wl, t, self.alpha, config=self.config)

    def _compare(self, ael: Quantity, stop: ApertureStop, label: str, t: float) -> Comparison:
        result = compare_emission(self.emission, ael, t, self.spec.prf_hz, stop.aperture_mm)
        verdict = "PASS" if result.passes else "FAIL"
        self.steps.append(
            f"{label}: {result.emission} vs AEL {ael} (ratio {result.ratio:.3g}) - {verdict}"
        )
        return result

    def test(self, name: LaserClass, ael_function: Callable[..., Quantity | None]) -> ClassTest:
        self.steps.append(f"--- Testing {name.value} ---")
        t = self.time_for(name)
        if self.auto_time_base:
            self.steps.append(f"{name.value} time base: {t:g} s")
        ael = self.lookup_ael(name, ael_function)
        if ael is None:
            self.steps.append(
                f"{name.value} AEL is not defined for this wavelength and exposure time; class not evaluable."
            )
            return ClassTest(laser_class=name, ael=None)
        self.steps.append(f"{name.value} AEL = {ael}")

        c1: Comparison | None = None
        if self.conditions.is_condition1_applicable:
            c1 = self._compare(ael, self.conditions.condition1, "Condition 1", t)
            c1_pass = c1.passes
        else:
            self.steps.append(CONDITION1_NOT_APPLIED)
            c1_pass = True
        c3 = self._compare(ael, self.conditions.condition3, "Condition 3", t)
        return ClassTest(
            laser_class=name,
            ael=ael,
            condition1=c1,
            condition3=c3,
            condition1_pass=c1_pass,
            condition3_pass=c3.passes,
        )

    def test_m_variant(self, name: LaserClass, base: ClassTest) -> bool:
        """Class 1M/2M: fails the base class through Condition 1 only, and stays within Class 3B there."""
        self.steps.append(f"--- Checking {name.value} ---")
        if not base.evaluable or base.condition1 is None:
            self.steps.append(f"{name.value} not evaluable: base class AEL or Condition 1 unavailable.")
            return False
        ael_3b = self.lookup_ael(LaserClass.CLASS_3B, get_class3b_ael)
        if ael_3b is None:
            self.steps.append(
                "Class 3B AEL is not defined for this wavelength and exposure time; class not evaluable."
            )
            return False
        within_3b = self._compare(
            ael_3b, self.conditions.condition1, "Condition 1 against Class 3B", self.time_for(LaserClass.CLASS_3B)
        )
        exceeds_c1 = not base.condition1.passes
        passes = exceeds_c1 and within_3b.passes and base.condition3_pass
        self.steps.append(
            f"Condition 1 > {base.laser_class.value} AEL: {'YES' if exceeds_c1 else 'NO'}; "
            f"Condition 3 <= {base.laser_class.value} AEL: {'YES' if base.condition3_pass else 'NO'}; "
            f"Condition 1 <= Class 3B AEL: {'YES' if within_3b.passes else 'NO'}"
        )
        return passes

    def result(self, laser_class: LaserClass, test: ClassTest, c1: bool, c3: bool, class_m: bool) -> ClassificationResult:
        self.steps.append(f"Result: {laser_class.value}")
        logger.debug("Classified %s nm source as %s", self.spec.wavelength_nm, laser_class.value)
        return ClassificationResult(
            laser_class=laser_class,
            ael=test.ael,
            measured_emission=self.emission,
            ratio=test.ratio,
            condition1_test=c1,
            condition3_test=c3,
            requires_class_m=class_m,
            conditions=self.conditions,
            steps=list(self.steps),
        )


def classify(
    spec: LaserSpec,
    exposure: ExposureContext,
    beam_diameter_mm: float | None = None,
    *,
    auto_time_base: bool = False,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> ClassificationResult:
    """
    Run the class tests 1 -> 1M -> 2 -> 2M -> 3R -> 3B -> 4 on one source.

    beam_diameter_mm defaults to the LaserSpec beam diameter and only affects
    whether the M subclasses are considered.

    With auto_time_base each class is tested at its own classification time
    base (0.25 s for Class 2, 2M and 3R in 400-700 nm, otherwise 100 s or
    30000 s) and exposure.exposure_time_s is ignored.
    """
    if not isinstance(spec, LaserSpec):
        raise TypeError("spec must be a LaserSpec")
    if not isinstance(exposure, ExposureContext):
        raise TypeError("exposure must be an ExposureContext")
    diameter = require_positive(
        spec.beam_diameter_mm if beam_diameter_mm is None else beam_diameter_mm, "beam_diameter_mm"
    )

    run = _Classification(spec, exposure, diameter, config, auto_time_base)
    wl = spec.wavelength_nm
    class_m = requires_class_m(wl, diameter)
    cond = run.conditions

    run.steps.append(f"Wavelength: {wl:g} nm ({wavelength_region(wl).value})")
    if spec.emission_type is EmissionType.CW:
        run.steps.append(f"Emission: {run.emission} (CW)")
    else:
        run.steps.append(
            f"Emission: {run.emission} per pulse, pulse width {spec.pulse_width_s:.3e} s, "
            f"repetition rate {spec.prf_hz:g} Hz"
        )
    if auto_time_base:
        run.steps.append(f"Exposure time: per-class time base, angular subtense {run.alpha:g} mrad")
    else:
        run.steps.append(f"Exposure time: {run.t:g} s, angular subtense {run.alpha:g} mrad")
    if cond.is_condition1_applicable:
        run.steps.append(
            f"Condition 1: aperture {cond.condition1.aperture_mm:.1f} mm at {cond.condition1.distance_mm:g} mm"
        )
    else:
        run.steps.append("Condition 1: not applicable for this wavelength")
    run.steps.append(
        f"Condition 3: aperture {cond.condition3.aperture_mm:.1f} mm at {cond.condition3.distance_mm:g} mm"
    )

    class1 = run.test(LaserClass.CLASS_1, get_class1_ael)
    if class1.passes:
        return run.result(LaserClass.CLASS_1, class1, class1.condition1_pass, class1.condition3_pass, class_m)

    if class_m and run.test_m_variant(LaserClass.CLASS_1M, class1):
        return run.result(LaserClass.CLASS_1M, class1, False, True, class_m)

    class2: ClassTest | None = None
    if supports_class2(wl):
        class2 = run.test(LaserClass.CLASS_2, get_class2_ael)
        if class2.passes:
            return run.result(LaserClass.CLASS_2, class2, class2.condition1_pass, class2.condition3_pass, class_m)
        if class_m and run.test_m_variant(LaserClass.CLASS_2M, class2):
            return run.result(LaserClass.CLASS_2M, class2, False, True, class_m)

    class3r = run.test(LaserClass.CLASS_3R, get_class3r_ael)
    if class3r.passes:
        return run.result(LaserClass.CLASS_3R, class3r, class3r.condition1_pass, class3r.condition3_pass, class_m)

    class3b = run.test(LaserClass.CLASS_3B, get_class3b_ael)
    if class3b.passes:
        return run.result(LaserClass.CLASS_3B, class3b, class3b.condition1_pass, class3b.condition3_pass, class_m)

    run.steps.append("Emission exceeds every evaluable class limit")
    evaluated = [test for test in (class1, class2, class3r, class3b) if test is not None and test.evaluable]
    if not evaluated:
        run.steps.append("No class AEL applies at this wavelength and exposure time")
        return run.result(LaserClass.CLASS_4, class3b, False, False, class_m)
    reported = evaluated[-1]
    if reported is not class3b:
        run.steps.append(f"Reporting the {reported.laser_class.value} AEL, the highest evaluable limit")
    return run.result(LaserClass.CLASS_4, reported, False, False, class_m)
