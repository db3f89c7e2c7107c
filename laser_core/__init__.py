"""
laser_core: IEC 60825-1:2014 laser safety engine.

- AEL tables for Class 1, 2, 3R, 3B and the hierarchical classifier (1 -> 4)
- eye MPE with the three pulsed-train rules, skin MPE
- NOHD and protective-eyewear optical density

All functions are pure; configuration is passed explicitly via `config=`.
Presentation lives in `app/` (Streamlit).
"""

from .ael_tables import get_ael_set, get_class1_ael, get_class2_ael, get_class3b_ael, get_class3r_ael
from .classifier import classify
from .config import CorrectionFactorMode, LaserCalcConfig, load_config
from .correction_factors import get_correction_factors, get_mpe_correction_factors
from .errors import InvalidInputError, LaserCalcError
from .eyewear import compute_eyewear_od
from .measurement_conditions import get_measurement_conditions, requires_class_m, supports_class2
from .models import EmissionType, ExposureContext, LaserClass, LaserSpec
from .mpe import compute_mpe, compute_skin_mpe
from .multi_wavelength import classify_multi
from .nohd import compute_nohd
from .quantities import Quantity, Unit
from .wavelength import time_base, wavelength_region

__all__ = [
    "classify",
    "classify_multi",
    "compute_mpe",
    "compute_skin_mpe",
    "compute_nohd",
    "compute_eyewear_od",
    "get_class1_ael",
    "get_class2_ael",
    "get_class3r_ael",
    "get_class3b_ael",
    "get_ael_set",
    "get_correction_factors",
    "get_mpe_correction_factors",
    "get_measurement_conditions",
    "requires_class_m",
    "supports_class2",
    "wavelength_region",
    "time_base",
    "CorrectionFactorMode",
    "LaserCalcConfig",
    "load_config",
    "EmissionType",
    "ExposureContext",
    "LaserClass",
    "LaserSpec",
    "Quantity",
    "Unit",
    "InvalidInputError",
    "LaserCalcError",
]
