"""Argument normalization for feature calls."""
import math
from typing import Union

from src.config import NUMERIC_PRECISION

Scalar = Union[int, float, str, bool]

_EXPONENT_THRESHOLD = 1e21


def round_number(value: float, precision: int = NUMERIC_PRECISION) -> float:
    """Round half up (towards +inf) to ``precision`` decimal places.

    Matches ``Math.round(x * 10) / 10`` in the pattern host language, which
    differs from Python's round-half-to-even.
    """
    try:
        value = float(value)
    except OverflowError:
        # Integer literals past the double range read as Infinity
        value = math.inf if value > 0 else -math.inf
    factor = 10 ** precision
    scaled = value * factor
    if not math.isfinite(scaled):
        return float(value)
    return math.floor(scaled + 0.5) / factor


def normalize_arg(value: Scalar) -> Scalar:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return round_number(value)
    if isinstance(value, str):
        return value.lower().strip()
    return value


def render_arg(value: Scalar) -> str:
    """Render a normalized argument the way it appears in the DNA string.

    Numbers follow the host language number-to-string rules: integral values
    print without a fraction below 1e21 and in exponent form (``1e+21``) from
    there on.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if abs(value) >= _EXPONENT_THRESHOLD:
            return repr(value)
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)
