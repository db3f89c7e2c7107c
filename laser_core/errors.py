"""Error taxonomy of the laser safety engine."""
from __future__ import annotations

import math
from typing import Any


class LaserCalcError(Exception):
    """Base class for engine errors."""


class InvalidInputError(LaserCalcError, ValueError):
    """Physically invalid or out-of-domain input, rejected before any table lookup."""


def require_number(value: Any, name: str) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"{name} must be a number")
    num = float(value)
    if math.isnan(num) or math.isinf(num):
        raise InvalidInputError(f"{name} must be finite")
    return num


def require_positive(value: Any, name: str) -> float:
    num = require_number(value, name)
    if num <= 0.0:
        raise InvalidInputError(f"{name} must be > 0")
    return num


def require_non_negative(value: Any, name: str) -> float:
    num = require_number(value, name)
    if num < 0.0:
        raise InvalidInputError(f"{name} must be >= 0")
    return num
