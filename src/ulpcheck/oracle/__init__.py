"""
Exact-value oracle.

Thin adapter over mpmath and fractions.Fraction providing exact arithmetic,
elementary functions, strict and bounded comparison and self-consistency
checks for arbitrary-precision reals.
"""

from .exact_value import (
    EXACT_POWER_MAX_BITS,
    INITIAL_PRECISION_BITS,
    MAX_PRECISION_BITS,
    ExactValue,
)

__all__ = [
    "EXACT_POWER_MAX_BITS",
    "INITIAL_PRECISION_BITS",
    "MAX_PRECISION_BITS",
    "ExactValue",
]
