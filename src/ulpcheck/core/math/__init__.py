"""
Core math modules для ulpcheck

Примитивы IEEE-754 binary64 и классификация ошибки в ulp.
"""

# Float Bits
from ulpcheck.core.math.float_bits import (
    # Boundary constants
    BITS_MASK,
    MAX_FINITE,
    MIN_NORMAL,
    MIN_SUBNORMAL,
    # Neighbours
    next_down,
    next_up,
    # Bit patterns
    bits_to_float,
    float_to_bits,
    # Checks
    is_integral,
    is_valid_float,
)

# ULP Distance
from ulpcheck.core.math.ulp_distance import (
    approx_ulp_distance,
    ulp_distance,
)

__all__ = [
    # Float Bits: Boundary constants
    "BITS_MASK",
    "MAX_FINITE",
    "MIN_NORMAL",
    "MIN_SUBNORMAL",
    # Float Bits: Neighbours
    "next_down",
    "next_up",
    # Float Bits: Bit patterns
    "bits_to_float",
    "float_to_bits",
    # Float Bits: Checks
    "is_integral",
    "is_valid_float",
    # ULP Distance
    "approx_ulp_distance",
    "ulp_distance",
]
