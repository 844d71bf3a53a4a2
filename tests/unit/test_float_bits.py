"""
Тесты для примитивов IEEE-754 binary64 (float_bits)

Проверяет:
1. Граничные константы
2. next_down / next_up, включая переходы через ноль и к бесконечности
3. Декодирование и кодирование 64-bit паттернов
4. Проверки конечности и целочисленности
"""

import math

import pytest

from ulpcheck.core.math.float_bits import (
    BITS_MASK,
    MAX_FINITE,
    MIN_NORMAL,
    MIN_SUBNORMAL,
    bits_to_float,
    float_to_bits,
    is_integral,
    is_valid_float,
    next_down,
    next_up,
)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================


class TestBoundaryConstants:
    """Тесты граничных констант."""

    def test_values(self):
        assert MIN_SUBNORMAL == 5e-324
        assert MIN_NORMAL == 2.0**-1022
        assert MAX_FINITE == 1.7976931348623157e308
        assert BITS_MASK == 0xFFFFFFFFFFFFFFFF

    def test_subnormal_below_normal(self):
        assert 0.0 < MIN_SUBNORMAL < MIN_NORMAL


# =============================================================================
# СОСЕДНИЕ ЗНАЧЕНИЯ
# =============================================================================


class TestNeighbours:
    """Тесты next_down / next_up."""

    def test_next_down_one(self):
        assert next_down(1.0) == 1.0 - 2.0**-53

    def test_next_up_one(self):
        assert next_up(1.0) == 1.0 + 2.0**-52

    def test_through_zero(self):
        """Соседи нуля: наименьшие subnormal обоих знаков."""
        assert next_down(0.0) == -MIN_SUBNORMAL
        assert next_down(-0.0) == -MIN_SUBNORMAL
        assert next_up(-MIN_SUBNORMAL) == 0.0

    def test_to_infinity(self):
        assert next_down(-MAX_FINITE) == -math.inf
        assert next_up(MAX_FINITE) == math.inf

    @pytest.mark.parametrize("value", [1.0, -3.5, 1e-310, MIN_NORMAL, -MAX_FINITE / 3])
    def test_round_trip(self, value):
        assert next_up(next_down(value)) == value


# =============================================================================
# BIT PATTERNS
# =============================================================================


class TestBitPatterns:
    """Тесты преобразований bit pattern <-> float."""

    @pytest.mark.parametrize(
        "bits,expected",
        [
            (0x3FF0000000000000, 1.0),
            (0xC000000000000000, -2.0),
            (0x0000000000000001, MIN_SUBNORMAL),
            (0x0010000000000000, MIN_NORMAL),
            (0x7FEFFFFFFFFFFFFF, MAX_FINITE),
            (0x7FF0000000000000, math.inf),
        ],
    )
    def test_decode(self, bits, expected):
        assert bits_to_float(bits) == expected
        assert float_to_bits(expected) == bits

    def test_decode_nan(self):
        assert math.isnan(bits_to_float(0x7FF8000000000000))

    def test_negative_zero(self):
        assert float_to_bits(-0.0) == 1 << 63
        assert math.copysign(1.0, bits_to_float(1 << 63)) == -1.0

    @pytest.mark.parametrize("bits", [-1, 1 << 64])
    def test_out_of_range(self, bits):
        with pytest.raises(ValueError):
            bits_to_float(bits)


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


class TestChecks:
    """Тесты is_valid_float / is_integral."""

    @pytest.mark.parametrize("value,expected", [(1.0, True), (-0.0, True), (math.inf, False), (math.nan, False)])
    def test_is_valid_float(self, value, expected):
        assert is_valid_float(value) is expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.0, True),
            (-0.0, True),
            (3.0, True),
            (-17.0, True),
            (2.0**52 + 1, True),
            (MAX_FINITE, True),
            (0.5, False),
            (-2.5, False),
            (MIN_SUBNORMAL, False),
            (math.inf, False),
            (math.nan, False),
        ],
    )
    def test_is_integral(self, value, expected):
        assert is_integral(value) is expected
