from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidInputError, require_non_negative, require_number, require_positive
from .quantities import Quantity, Unit

WAVELENGTH_MIN_NM = 180.0
WAVELENGTH_MAX_NM = 1e6
DEFAULT_ANGULAR_SUBTENSE_MRAD = 1.5


class EmissionType(str, Enum):
    CW = "CW"
    PULSED = "Pulsed"


class LaserClass(str, Enum):
    CLASS_1 = "Class 1"
    CLASS_1M = "Class 1M"
    CLASS_2 = "Class 2"
    CLASS_2M = "Class 2M"
    CLASS_3R = "Class 3R"
    CLASS_3B = "Class 3B"
    CLASS_4 = "Class 4"

    @property
    def rank(self) -> int:
        return _CLASS_ORDER.index(self)


_CLASS_ORDER = list(LaserClass)


def require_wavelength(wavelength_nm: float) -> float:
    wl = require_number(wavelength_nm, "wavelength_nm")
    if wl < WAVELENGTH_MIN_NM or wl > WAVELENGTH_MAX_NM:
        raise InvalidInputError(
            f"wavelength_nm must be in [{WAVELENGTH_MIN_NM:g}, {WAVELENGTH_MAX_NM:g}] nm"
        )
    return wl


def parse_emission_type(raw: str | EmissionType) -> EmissionType:
    if isinstance(raw, EmissionType):
        return raw
    val = str(raw or "").strip().upper()
    if val in ("CW", "CONTINUOUS"):
        return EmissionType.CW
    if val == "PULSED":
        return EmissionType.PULSED
    raise InvalidInputError("emission_type must be CW or Pulsed")


@dataclass(frozen=True)
class LaserSpec:
    """
    Laser source parameters for one calculation pass.

    CW sources set power_w; pulsed sources set pulse_energy_j, pulse_width_s and
    repetition_rate_hz (0 Hz = single pulse).
    """

    wavelength_nm: float
    emission_type: EmissionType
    beam_diameter_mm: float = 7.0
    power_w: float | None = None
    pulse_energy_j: float | None = None
    pulse_width_s: float | None = None
    repetition_rate_hz: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "emission_type", parse_emission_type(self.emission_type))
        require_wavelength(self.wavelength_nm)
        require_positive(self.beam_diameter_mm, "beam_diameter_mm")
        if self.emission_type is EmissionType.CW:
            if self.power_w is None:
                raise InvalidInputError("power_w is required for CW emission")
            require_positive(self.power_w, "power_w")
            return
        if self.pulse_energy_j is None or self.pulse_width_s is None:
            raise InvalidInputError("pulse_energy_j and pulse_width_s are required for pulsed emission")
        require_positive(self.pulse_energy_j, "pulse_energy_j")
        require_positive(self.pulse_width_s, "pulse_width_s")
        if self.repetition_rate_hz is not None:
            require_non_negative(self.repetition_rate_hz, "repetition_rate_hz")

    @classmethod
    def cw(cls, wavelength_nm: float, power_w: float, beam_diameter_mm: float = 7.0) -> LaserSpec:
        return cls(
            wavelength_nm=wavelength_nm,
            emission_type=EmissionType.CW,
            beam_diameter_mm=beam_diameter_mm,
            power_w=power_w,
        )

    @classmethod
    def pulsed(
        cls,
        wavelength_nm: float,
        pulse_energy_j: float,
        pulse_width_s: float,
        repetition_rate_hz: float = 0.0,
        beam_diameter_mm: float = 7.0,
    ) -> LaserSpec:
        return cls(
            wavelength_nm=wavelength_nm,
            emission_type=EmissionType.PULSED,
            beam_diameter_mm=beam_diameter_mm,
            pulse_energy_j=pulse_energy_j,
            pulse_width_s=pulse_width_s,
            repetition_rate_hz=repetition_rate_hz,
        )

    @property
    def is_pulsed(self) -> bool:
        return self.emission_type is EmissionType.PULSED

    @property
    def prf_hz(self) -> float:
        return float(self.repetition_rate_hz or 0.0)

    @property
    def emission(self) -> Quantity:
        """Raw accessible emission: power for CW, per-pulse energy for pulsed."""
        if self.is_pulsed:
            return Quantity(float(self.pulse_energy_j), Unit.J)
        return Quantity(float(self.power_w), Unit.W)

    @property
    def average_power_w(self) -> float:
        if not self.is_pulsed:
            return float(self.power_w)
        return float(self.pulse_energy_j) * self.prf_hz


@dataclass(frozen=True)
class ExposureContext:
    exposure_time_s: float
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD

    def __post_init__(self) -> None:
        require_positive(self.exposure_time_s, "exposure_time_s")
        require_positive(self.angular_subtense_mrad, "angular_subtense_mrad")
