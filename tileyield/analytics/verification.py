"""
Chip Acceptance Logic.

A chip candidate passes when its faulty-tile count does not exceed
floor(fault_fraction * tile_count). The floor is taken on the exact rational
product so thresholds such as 3/30 and 0.1 land on the same integer.
"""
import math
from decimal import Decimal
from fractions import Fraction
from numbers import Rational
from typing import Sequence, Union

import numpy as np

Threshold = Union[int, float, str, Fraction, Decimal]

def as_fraction(value: Threshold, name: str = "fault fraction") -> Fraction:
    """
    Coerces a threshold to an exact Fraction in [0, 1].

    Floats go through their shortest decimal representation, so 0.1 becomes
    exactly 1/10 rather than the nearest binary double.
    """
    try:
        if isinstance(value, bool):
            raise TypeError("booleans are not thresholds")
        if isinstance(value, (float, np.floating)):
            if not math.isfinite(value):
                raise ValueError(f"{value!r} is not finite")
            result = Fraction(repr(float(value)))
        elif isinstance(value, (Rational, Decimal, str)):
            result = Fraction(value.strip() if isinstance(value, str) else value)
        elif isinstance(value, np.integer):
            result = Fraction(int(value))
        else:
            raise TypeError(f"unsupported type {type(value).__name__}")
    except (TypeError, ValueError, ZeroDivisionError) as e:
        raise ValueError(f"Invalid {name} {value!r}: {e}") from e

    if not 0 <= result <= 1:
        raise ValueError(f"Invalid {name} {value!r}: must be between 0 and 1.")
    return result

def count_faulty(tiles: Sequence) -> int:
    """Number of faulty (False / 0) entries in a flat tile sequence."""
    return int(np.count_nonzero(~np.asarray(tiles, dtype=bool)))

def max_allowed_faults(tile_count: int, fault_fraction: Threshold) -> int:
    """floor(fault_fraction * tile_count), computed exactly."""
    return math.floor(as_fraction(fault_fraction) * tile_count)

def is_acceptable(tiles: Sequence, fault_fraction: Threshold) -> bool:
    """
    Decides whether a flat tile sequence is a usable chip.

    Returns True iff the number of faulty tiles is at most
    floor(fault_fraction * len(tiles)).
    """
    arr = np.asarray(tiles, dtype=bool).ravel()
    return count_faulty(arr) <= max_allowed_faults(arr.size, fault_fraction)
