from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from .classifier import ClassificationResult
from .eyewear import EyewearResult
from .mpe import MPEResult
from .multi_wavelength import MultiWavelengthResult
from .nohd import NOHDResult
from .quantities import Quantity

PAYLOAD_VERSION = "1.0"


def _iso_utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _number(value: float | None) -> float | str | None:
    if value is None:
        return None
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return float(value)


def quantity_payload(q: Quantity | None) -> dict[str, Any] | None:
    if q is None:
        return None
    return {"value": _number(q.value), "unit": q.unit.value}


def classification_payload(result: ClassificationResult) -> dict[str, Any]:
    cond = result.conditions
    return {
        "laser_class": result.laser_class.value,
        "class_description": result.class_description,
        "safety_requirements": result.safety_requirements,
        "ael": quantity_payload(result.ael),
        "measured_emission": quantity_payload(result.measured_emission),
        "ratio": _number(result.ratio),
        "condition1_test": result.condition1_test,
        "condition3_test": result.condition3_test,
        "requires_class_m": result.requires_class_m,
        "measurement_conditions": {
            "condition1": {
                "aperture_mm": cond.condition1.aperture_mm,
                "distance_mm": cond.condition1.distance_mm,
            },
            "condition3": {
                "aperture_mm": cond.condition3.aperture_mm,
                "distance_mm": cond.condition3.distance_mm,
            },
            "is_condition1_applicable": cond.is_condition1_applicable,
        },
        "steps": list(result.steps),
    }


def multi_wavelength_payload(result: MultiWavelengthResult) -> dict[str, Any]:
    group = result.additive_group
    return {
        "laser_class": result.laser_class.value,
        "method": result.method,
        "additive_group": group.name if group is not None else None,
        "ratios": [_number(r) for r in result.ratios],
        "sum_condition1": _number(result.sum_condition1),
        "sum_condition3": _number(result.sum_condition3),
        "individual": [classification_payload(r) for r in result.individual],
        "steps": list(result.steps),
    }


def mpe_payload(result: MPEResult) -> dict[str, Any]:
    mf = result.correction_factors
    return {
        "critical_mpe": quantity_payload(result.critical_mpe),
        "limiting_mechanism": result.limiting_mechanism,
        "region": result.region.value,
        "mpe_single_pulse": quantity_payload(result.mpe_single_pulse),
        "mpe_average": quantity_payload(result.mpe_average),
        "mpe_average_per_pulse": quantity_payload(result.mpe_average_per_pulse),
        "mpe_thermal": quantity_payload(result.mpe_thermal),
        "pulse_count": result.pulse_count,
        "cp": _number(result.cp),
        "correction_factors": {"CA": mf.ca, "CB": mf.cb, "CC": mf.cc},
        "steps": list(result.steps),
    }


def nohd_payload(result: NOHDResult) -> dict[str, Any]:
    return {
        "nohd_m": _number(result.nohd_m),
        "mpe": quantity_payload(result.mpe),
        "beam_diameter_at_nohd_mm": _number(result.beam_diameter_at_nohd_mm),
        "irradiance_at_nohd": quantity_payload(result.irradiance_at_nohd),
        "hazard_class": result.hazard_class,
        "hazard_detail": result.hazard_detail,
        "initial_power_density": quantity_payload(result.initial_power_density),
        "steps": list(result.steps),
    }


def eyewear_payload(result: EyewearResult) -> dict[str, Any]:
    return {
        "required_od": _number(result.required_od),
        "od_rating": result.od_rating,
        "exposure_level": quantity_payload(result.exposure_level),
        "mpe": quantity_payload(result.mpe),
        "scale_letter": result.scale_letter,
        "lb_rating": result.lb_rating,
        "dir_rating": result.dir_rating,
        "en207_marking": result.en207_marking,
        "recommendations": list(result.recommendations),
        "steps": list(result.steps),
    }


def build_payload(items: list[dict[str, Any]]) -> dict[str, Any]:
    """Wrap per-record payloads into the versioned export document."""
    return {
        "version": PAYLOAD_VERSION,
        "generated_at": _iso_utc_now(),
        "results": items,
    }
