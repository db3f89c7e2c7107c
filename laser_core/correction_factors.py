"""
Correction factors C1-C7, T1, T2 (IEC 60825-1:2014 Table 9) and the simplified
MPE-only factors CA, CB, CC.

Each factor is active only within its own wavelength band. Outside the band the
factor takes a fallback constant; in LITERAL mode C2 falls back to 30 and C4 to 5,
in CORRECTED mode both fall back to neutral values (see CorrectionFactorMode).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .config import DEFAULT_CONFIG, CorrectionFactorMode, LaserCalcConfig
from .errors import require_positive
from .models import DEFAULT_ANGULAR_SUBTENSE_MRAD, require_wavelength

logger = logging.getLogger(__name__)

LITERAL_C2_FALLBACK = 30.0
LITERAL_C4_FALLBACK = 5.0
C4_NEAR_IR_PLATEAU = 5.0


@dataclass(frozen=True)
class CorrectionFactors:
    c1: float
    c2: float
    c3: float
    c4: float
    c5: float
    c6: float
    c7: float
    t1: float
    t2: float
    angular_subtense_max_mrad: float

    def as_dict(self) -> dict[str, float]:
        return {
            "C1": self.c1,
            "C2": self.c2,
            "C3": self.c3,
            "C4": self.c4,
            "C5": self.c5,
            "C6": self.c6,
            "C7": self.c7,
            "T1": self.t1,
            "T2": self.t2,
        }


@dataclass(frozen=True)
class MPECorrectionFactors:
    ca: float
    cb: float
    cc: float


def angular_subtense_max(exposure_time_s: float) -> float:
    if exposure_time_s < 625e-6:
        return 5.0
    if exposure_time_s > 0.25:
        return 100.0
    return 200.0 * math.sqrt(exposure_time_s)


def _c2(wavelength_nm: float, mode: CorrectionFactorMode) -> float:
    if 302.5 <= wavelength_nm <= 315:
        return 10 ** (0.2 * (wavelength_nm - 295))
    return LITERAL_C2_FALLBACK if mode is CorrectionFactorMode.LITERAL else 1.0


def _c4(wavelength_nm: float, mode: CorrectionFactorMode) -> float:
    if 700 <= wavelength_nm <= 1050:
        return 10 ** (0.002 * (wavelength_nm - 700))
    if mode is CorrectionFactorMode.LITERAL:
        return LITERAL_C4_FALLBACK
    if 1050 < wavelength_nm <= 1400:
        return C4_NEAR_IR_PLATEAU
    return 1.0


def _t2(wavelength_nm: float, alpha_mrad: float) -> float:
    if not 400 <= wavelength_nm <= 1400:
        return 1.0
    if alpha_mrad <= 1.5:
        return 10.0
    if alpha_mrad <= 100:
        return 10.0 * 10 ** ((alpha_mrad - 1.5) / 98.5)
    return 100.0


def _c6(wavelength_nm: float, alpha_mrad: float, alpha_max: float) -> float:
    if not 400 <= wavelength_nm <= 1400:
        return 1.0
    if 1.5 <= alpha_mrad <= alpha_max:
        return alpha_mrad / 1.5
    if alpha_mrad > alpha_max:
        return alpha_max / 1.5
    return 1.0


def _c7(wavelength_nm: float) -> float:
    if 1150 <= wavelength_nm <= 1200:
        return 10 ** (0.0018 * (wavelength_nm - 1150))
    if 1200 < wavelength_nm <= 1400:
        return 8.0 + 10 ** (0.04 * (wavelength_nm - 1250))
    return 1.0


def compute_correction_factors(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    mode: CorrectionFactorMode = CorrectionFactorMode.LITERAL,
) -> CorrectionFactors:
    """Unchecked factor computation for callers that already validated inputs."""
    wl = wavelength_nm
    t = exposure_time_s
    uv = 180 <= wl <= 400
    alpha_max = angular_subtense_max(t)
    return CorrectionFactors(
        c1=5.6e3 * t**0.25 if uv else 1.0,
        c2=_c2(wl, mode),
        c3=10 ** (0.02 * (wl - 450)) if 450 <= wl <= 600 else 1.0,
        c4=_c4(wl, mode),
        c5=1.0,
        c6=_c6(wl, angular_subtense_mrad, alpha_max),
        c7=_c7(wl),
        t1=1e-15 * 10 ** (0.8 * (wl - 295)) if uv else 1.0,
        t2=_t2(wl, angular_subtense_mrad),
        angular_subtense_max_mrad=alpha_max,
    )


def get_correction_factors(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    *,
    config: LaserCalcConfig = DEFAULT_CONFIG,
) -> CorrectionFactors:
    wl = require_wavelength(wavelength_nm)
    t = require_positive(exposure_time_s, "exposure_time_s")
    alpha = require_positive(angular_subtense_mrad, "angular_subtense_mrad")
    factors = compute_correction_factors(wl, t, alpha, config.correction_factor_mode)
    logger.debug("Correction factors at %s nm, t=%s s: %s", wl, t, factors.as_dict())
    return factors


def get_mpe_correction_factors(wavelength_nm: float) -> MPECorrectionFactors:
    """CA (retinal thermal, 700-1400 nm), CB (700-1150 nm), CC (1500-2600 nm)."""
    wl = require_wavelength(wavelength_nm)
    ca = 1.0
    cb = 1.0
    cc = 1.0
    if 700 <= wl <= 1050:
        ca = 10 ** (0.002 * (wl - 700))
    elif 1050 < wl <= 1400:
        ca = 5.0
    if 700 <= wl <= 1150:
        cb = 10 ** (0.015 * (wl - 700))
    if 1500 <= wl <= 1800:
        cc = 10 ** (0.018 * (wl - 1500))
    elif 1800 < wl <= 2600:
        cc = 5.0
    return MPECorrectionFactors(ca=ca, cb=cb, cc=cc)
