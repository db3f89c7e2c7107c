from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

import pandas as pd

from app.i18n import DEFAULT_LANG, translator
from laser_core.models import WAVELENGTH_MAX_NM, WAVELENGTH_MIN_NM
from laser_core.pulse import validate_pulse_parameters

Translator = Callable[..., str]

_DEFAULT_TRANSLATOR = translator(DEFAULT_LANG)

MAX_TABLE_TIME_S = 3e4


def _tr(translator: Translator | None, key: str, **kwargs: Any) -> str:
    return (translator or _DEFAULT_TRANSLATOR)(key, **kwargs)


@dataclass(frozen=True)
class ValidationResult:
    errors: list[str]
    warnings: list[str]
    row_status: dict[int, str]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def is_finite(value: Any) -> bool:
    try:
        num = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(num)


def _is_blank(value: Any) -> bool:
    if value is None or value == "":
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _check_number(
    data: dict[str, Any],
    field: str,
    errors: list[str],
    translator: Translator | None,
    *,
    required: bool = True,
    allow_zero: bool = False,
) -> float | None:
    val = data.get(field)
    if _is_blank(val):
        if required:
            errors.append(_tr(translator, "validation.field_required", field=field))
        return None
    if not is_finite(val):
        errors.append(_tr(translator, "validation.field_number", field=field))
        return None
    num = float(val)
    if allow_zero and num < 0:
        errors.append(_tr(translator, "validation.field_gte_zero", field=field))
        return None
    if not allow_zero and num <= 0:
        errors.append(_tr(translator, "validation.field_positive", field=field))
        return None
    return num


def validate_laser_inputs(
    data: dict[str, Any], *, translator: Translator | None = None
) -> tuple[list[str], list[str]]:
    """
    Form-level checks before a laser calculation (no formulas).

    Returns (errors, warnings). The engine repeats the hard checks; this layer
    only turns them into readable, translated messages.
    """
    errors: list[str] = []
    warnings: list[str] = []

    wl = _check_number(data, "wavelength_nm", errors, translator)
    if wl is not None and not WAVELENGTH_MIN_NM <= wl <= WAVELENGTH_MAX_NM:
        errors.append(
            _tr(translator, "validation.wavelength_range", min=f"{WAVELENGTH_MIN_NM:g}", max=f"{WAVELENGTH_MAX_NM:g}")
        )

    raw_type = data.get("emission_type")
    emission_type = "CW" if _is_blank(raw_type) else str(raw_type).strip().upper()
    if emission_type not in ("CW", "PULSED"):
        errors.append(_tr(translator, "validation.emission_type"))

    _check_number(data, "beam_diameter_mm", errors, translator, required=False)
    _check_number(data, "angular_subtense_mrad", errors, translator, required=False)
    exposure = _check_number(data, "exposure_time_s", errors, translator)
    if exposure is not None and exposure > MAX_TABLE_TIME_S:
        warnings.append(_tr(translator, "validation.exposure_long"))

    if emission_type == "CW":
        _check_number(data, "power_W", errors, translator)
    elif emission_type == "PULSED":
        _check_number(data, "pulse_energy_J", errors, translator)
        width = _check_number(data, "pulse_width_s", errors, translator)
        prf = _check_number(data, "repetition_rate_Hz", errors, translator, required=False, allow_zero=True)
        if width is not None and prf:
            check = validate_pulse_parameters(width, prf)
            if not check.is_valid:
                errors.append(_tr(translator, "validation.pulse_width_period"))
            elif check.warning:
                warnings.append(_tr(translator, "validation.high_duty_cycle", duty=check.duty_cycle_pct))

    return errors, warnings


def validate_laser_rows(df: pd.DataFrame, *, translator: Translator | None = None) -> ValidationResult:
    """
    Validates batch classification rows as shown in the batch table.

    Expects DataFrame with columns:
    label, wavelength_nm, emission_type, power_W, pulse_energy_J, pulse_width_s,
    repetition_rate_Hz, beam_diameter_mm, exposure_time_s, angular_subtense_mrad
    """
    errors: list[str] = []
    warnings: list[str] = []
    statuses: dict[int, str] = {}

    for idx, row in df.iterrows():
        raw_label = row.get("label")
        label = ("" if _is_blank(raw_label) else str(raw_label).strip()) or f"row#{idx}"
        row_errors, row_warnings = validate_laser_inputs(row.to_dict(), translator=translator)

        if row_errors:
            errors.append(f"{label}: " + "; ".join(row_errors))
            statuses[idx] = "INVALID"
        else:
            statuses[idx] = "OK"

        if row_warnings:
            warnings.append(f"{label}: " + "; ".join(row_warnings))

    return ValidationResult(errors=errors, warnings=warnings, row_status=statuses)
