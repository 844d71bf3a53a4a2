"""
Float Bits: примитивы IEEE-754 binary64

Модуль даёт единое место для работы с представлением double:
- Граничные константы (наименьший subnormal, наименьший normal, наибольший finite)
- Соседние представимые значения (next_down / next_up)
- Декодирование сырых 64-bit паттернов
- Проверки конечности и целочисленности

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все преобразования bit pattern <-> float побитово точные
2. next_down(x) всегда движется к -inf (для -MAX_FINITE возвращает -inf)
"""

import math
import struct
import sys
from typing import Final

# =============================================================================
# ГРАНИЧНЫЕ КОНСТАНТЫ
# =============================================================================

# Наименьшее положительное subnormal значение (2^-1074)
MIN_SUBNORMAL: Final[float] = math.ulp(0.0)

# Наименьшее положительное normal значение (2^-1022)
MIN_NORMAL: Final[float] = sys.float_info.min

# Наибольшее конечное значение ((2 - 2^-52) * 2^1023)
MAX_FINITE: Final[float] = sys.float_info.max

# Маска 64-bit паттерна
BITS_MASK: Final[int] = (1 << 64) - 1


# =============================================================================
# СОСЕДНИЕ ЗНАЧЕНИЯ
# =============================================================================


def next_down(value: float) -> float:
    """
    Ближайшее представимое значение строго ниже value (к -inf).

    Examples:
        >>> next_down(1.0)
        0.9999999999999999
        >>> next_down(0.0)
        -5e-324
        >>> next_down(-MAX_FINITE)
        -inf
    """
    return math.nextafter(value, -math.inf)


def next_up(value: float) -> float:
    """Ближайшее представимое значение строго выше value (к +inf)."""
    return math.nextafter(value, math.inf)


# =============================================================================
# BIT PATTERNS
# =============================================================================


def bits_to_float(bits: int) -> float:
    """
    Декодирование 64-bit паттерна в double.

    Args:
        bits: целое в диапазоне [0, 2^64)

    Returns:
        Double с тем же битовым представлением (может быть NaN или Inf)

    Raises:
        ValueError: если bits вне 64-bit диапазона
    """
    if bits < 0 or bits > BITS_MASK:
        raise ValueError(f"bit pattern out of 64-bit range: {bits}")
    return struct.unpack("<d", struct.pack("<Q", bits))[0]


def float_to_bits(value: float) -> int:
    """Сырое 64-bit представление double."""
    return struct.unpack("<Q", struct.pack("<d", value))[0]


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


def is_integral(value: float) -> bool:
    """
    Является ли value целым числом (включая ±0.0 и все |x| >= 2^52).

    NaN и бесконечности целыми не считаются.
    """
    return math.isfinite(value) and value == math.floor(value)
