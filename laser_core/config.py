"""
Engine configuration.

Values are immutable and passed explicitly to engine functions; nothing here
is read lazily at calculation time.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .errors import InvalidInputError

ENV_CORRECTION_MODE = "LASER_CALC_CORRECTION_MODE"
ENV_PULSE_TRAIN = "LASER_CALC_PULSE_TRAIN"
ENV_ANGULAR_SUBTENSE = "LASER_CALC_ANGULAR_SUBTENSE"
ENV_LOG_LEVEL = "LASER_CALC_LOG_LEVEL"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CorrectionFactorMode(str, Enum):
    # C2 = 30 and C4 = 5 outside their active bands, as tabulated by the calculator.
    LITERAL = "LITERAL"
    # Neutral values outside the active bands; C4 = 5 only for 1050-1400 nm.
    CORRECTED = "CORRECTED"


@dataclass(frozen=True)
class LaserCalcConfig:
    correction_factor_mode: CorrectionFactorMode = CorrectionFactorMode.LITERAL
    pulse_train_assessment: bool = False
    default_angular_subtense_mrad: float = 1.5
    log_level: str = "INFO"


DEFAULT_CONFIG = LaserCalcConfig()


def _parse_bool(raw: str, name: str) -> bool:
    val = raw.strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    raise InvalidInputError(f"{name} must be one of {_TRUE + _FALSE}")


def parse_mode(raw: str | CorrectionFactorMode) -> CorrectionFactorMode:
    if isinstance(raw, CorrectionFactorMode):
        return raw
    try:
        return CorrectionFactorMode(str(raw).strip().upper())
    except ValueError as exc:
        raise InvalidInputError(
            f"correction mode must be one of {[m.value for m in CorrectionFactorMode]}"
        ) from exc


def load_config(environ: Mapping[str, str] | None = None) -> LaserCalcConfig:
    """Build a config from LASER_CALC_* environment variables (defaults otherwise)."""
    env = os.environ if environ is None else environ

    mode = DEFAULT_CONFIG.correction_factor_mode
    if env.get(ENV_CORRECTION_MODE):
        mode = parse_mode(env[ENV_CORRECTION_MODE])

    pulse_train = DEFAULT_CONFIG.pulse_train_assessment
    if env.get(ENV_PULSE_TRAIN):
        pulse_train = _parse_bool(env[ENV_PULSE_TRAIN], ENV_PULSE_TRAIN)

    subtense = DEFAULT_CONFIG.default_angular_subtense_mrad
    if env.get(ENV_ANGULAR_SUBTENSE):
        try:
            subtense = float(env[ENV_ANGULAR_SUBTENSE])
        except ValueError as exc:
            raise InvalidInputError(f"{ENV_ANGULAR_SUBTENSE} must be a number") from exc
        if not subtense > 0:
            raise InvalidInputError(f"{ENV_ANGULAR_SUBTENSE} must be > 0")

    log_level = DEFAULT_CONFIG.log_level
    if env.get(ENV_LOG_LEVEL):
        log_level = env[ENV_LOG_LEVEL].strip().upper()
        if log_level not in _LOG_LEVELS:
            raise InvalidInputError(f"{ENV_LOG_LEVEL} must be one of {_LOG_LEVELS}")

    return LaserCalcConfig(
        correction_factor_mode=mode,
        pulse_train_assessment=pulse_train,
        default_angular_subtense_mrad=subtense,
        log_level=log_level,
    )
