"""
LaserSpec-shaped JSON records (as written by import files and the batch table).

A record is a flat mapping:

    {"wavelength_nm": 532, "emission_type": "CW", "power_W": 0.005,
     "beam_diameter_mm": 7, "exposure_time_s": 0.25}

Pulsed records carry pulse_energy_J, pulse_width_s and repetition_rate_Hz
instead of power_W. A truthy auto_time_base asks the classifier to use the
per-class time bases; exposure_time_s may then be omitted.
"""
from __future__ import annotations

import math
from typing import Any, Mapping

from .config import DEFAULT_CONFIG, LaserCalcConfig
from .errors import InvalidInputError
from .models import EmissionType, ExposureContext, LaserSpec, parse_emission_type
from .wavelength import classification_time_base

RECORD_KEYS = (
    "wavelength_nm",
    "emission_type",
    "power_W",
    "pulse_energy_J",
    "pulse_width_s",
    "repetition_rate_Hz",
    "beam_diameter_mm",
    "exposure_time_s",
    "angular_subtense_mrad",
    "auto_time_base",
)
DEFAULT_BEAM_DIAMETER_MM = 7.0


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _required_float(value: object, field: str, ctx: str) -> float:
    if _is_blank(value):
        raise InvalidInputError(f"{field} is missing for {ctx}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{field} is not a number for {ctx}") from exc


def _optional_float(value: object, field: str, ctx: str) -> float | None:
    if _is_blank(value):
        return None
    return _required_float(value, field, ctx)


def wants_auto_time_base(record: Mapping[str, Any]) -> bool:
    raw = record.get("auto_time_base")
    if _is_blank(raw):
        return False
    if isinstance(raw, str):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    return bool(raw)


def spec_from_record(
    record: Mapping[str, Any],
    *,
    ctx: str = "record",
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> tuple[LaserSpec, ExposureContext, float]:
    """Map one record to (LaserSpec, ExposureContext, beam_diameter_mm)."""
    if not isinstance(record, Mapping):
        raise InvalidInputError(f"{ctx} must be an object")
    unknown = sorted(set(record) - set(RECORD_KEYS))
    if unknown:
        raise InvalidInputError(f"unknown keys in {ctx}: {', '.join(unknown)}")

    raw_type = record.get("emission_type")
    emission_type = EmissionType.CW if _is_blank(raw_type) else parse_emission_type(raw_type)
    wavelength = _required_float(record.get("wavelength_nm"), "wavelength_nm", ctx)
    beam = _optional_float(record.get("beam_diameter_mm"), "beam_diameter_mm", ctx)
    beam = DEFAULT_BEAM_DIAMETER_MM if beam is None else beam
    if wants_auto_time_base(record) and _is_blank(record.get("exposure_time_s")):
        exposure_time = classification_time_base(wavelength)
    else:
        exposure_time = _required_float(record.get("exposure_time_s"), "exposure_time_s", ctx)
    subtense = _optional_float(record.get("angular_subtense_mrad"), "angular_subtense_mrad", ctx)
    if subtense is None:
        subtense = config.default_angular_subtense_mrad

    if emission_type is EmissionType.CW:
        spec = LaserSpec.cw(
            wavelength,
            _required_float(record.get("power_W"), "power_W", ctx),
            beam_diameter_mm=beam,
        )
    else:
        prf = _optional_float(record.get("repetition_rate_Hz"), "repetition_rate_Hz", ctx)
        spec = LaserSpec.pulsed(
            wavelength,
            _required_float(record.get("pulse_energy_J"), "pulse_energy_J", ctx),
            _required_float(record.get("pulse_width_s"), "pulse_width_s", ctx),
            repetition_rate_hz=prf or 0.0,
            beam_diameter_mm=beam,
        )
    exposure = ExposureContext(exposure_time_s=exposure_time, angular_subtense_mrad=subtense)
    return spec, exposure, beam


def record_from_spec(
    spec: LaserSpec, exposure: ExposureContext, *, auto_time_base: bool = False
) -> dict[str, Any]:
    """Inverse of spec_from_record; used to echo the normalised input next to a result."""
    record: dict[str, Any] = {
        "wavelength_nm": spec.wavelength_nm,
        "emission_type": spec.emission_type.value,
        "beam_diameter_mm": spec.beam_diameter_mm,
        "exposure_time_s": exposure.exposure_time_s,
        "angular_subtense_mrad": exposure.angular_subtense_mrad,
    }
    if spec.is_pulsed:
        record["pulse_energy_J"] = spec.pulse_energy_j
        record["pulse_width_s"] = spec.pulse_width_s
        record["repetition_rate_Hz"] = spec.prf_hz
    else:
        record["power_W"] = spec.power_w
    if auto_time_base:
        record["auto_time_base"] = True
    return record
