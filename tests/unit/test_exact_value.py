"""
Тесты для exact-value oracle (ExactValue)

Проверяет:
1. Точное представление float, int и Fraction
2. Распознавание рациональных результатов элементарных функций
3. Области определения и деление на ноль
4. Strict и bounded сравнения, предикат сравнимости
5. Self-consistency, преобразование в float и рендеринг
"""

import math
from fractions import Fraction

import pytest

from ulpcheck.core.domain.ulp_class import Ordering
from ulpcheck.core.errors import ComparabilityError
from ulpcheck.core.math.float_bits import MAX_FINITE, MIN_SUBNORMAL
from ulpcheck.oracle import ExactValue


@pytest.fixture
def sqrt2():
    return ExactValue.from_int(2).sqrt()


# =============================================================================
# КОНСТРУКТОРЫ
# =============================================================================


class TestConstruction:
    """Тесты построения точных значений."""

    @pytest.mark.parametrize("value", [0.1, -0.0, MIN_SUBNORMAL, MAX_FINITE, -1e-300])
    def test_from_float_is_exact(self, value):
        """Float представляется без округления."""
        exact = ExactValue.from_float(value)
        assert exact.is_rational
        assert exact.rational_value == Fraction(value)

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_from_float_rejects_non_finite(self, value):
        """NaN и бесконечности не представимы."""
        with pytest.raises(ValueError):
            ExactValue.from_float(value)

    def test_from_int_and_fraction(self):
        assert ExactValue.from_int(-17).rational_value == -17
        assert ExactValue.from_fraction(Fraction(1, 3)).rational_value == Fraction(1, 3)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты точной арифметики."""

    def test_rational_arithmetic_is_exact(self):
        """1/3 + 2/3 == 1 точно."""
        third = ExactValue.from_int(1) / 3
        assert (third + Fraction(2, 3)).rational_value == 1

    def test_reflected_operators(self):
        assert (3 - ExactValue.from_float(0.5)).rational_value == Fraction(5, 2)
        assert (2 * ExactValue.from_float(0.25)).rational_value == Fraction(1, 2)
        assert (1 / ExactValue.from_int(4)).rational_value == Fraction(1, 4)

    def test_same_term_cancels(self, sqrt2):
        """sqrt(2) - sqrt(2) сводится к точному нулю."""
        diff = sqrt2 - sqrt2
        assert diff.is_rational
        assert diff.rational_value == 0

    def test_same_term_accumulates(self, sqrt2):
        """sqrt(2) + sqrt(2) остаётся сравнимым кратным sqrt(2)."""
        doubled = sqrt2 + sqrt2
        assert doubled.compare_to(ExactValue.from_float(2.8284271247461903)) == Ordering.LESS

    def test_division_by_exact_zero(self):
        with pytest.raises(ZeroDivisionError):
            ExactValue.from_int(1) / ExactValue.from_float(-0.0)

    def test_negation(self, sqrt2):
        assert (-sqrt2).compare_to(0) == Ordering.LESS


# =============================================================================
# ЭЛЕМЕНТАРНЫЕ ФУНКЦИИ
# =============================================================================


class TestSpecialValues:
    """Тесты распознавания рациональных результатов."""

    @pytest.mark.parametrize(
        "build,expected",
        [
            (lambda: ExactValue.from_int(4).sqrt(), 2),
            (lambda: ExactValue.from_fraction(Fraction(9, 16)).sqrt(), Fraction(3, 4)),
            (lambda: ExactValue.from_int(1000).log10(), 3),
            (lambda: ExactValue.from_fraction(Fraction(1, 100)).log10(), -2),
            (lambda: ExactValue.from_int(0).exp(), 1),
            (lambda: ExactValue.from_int(1).ln(), 0),
            (lambda: ExactValue.from_int(0).sin(), 0),
            (lambda: ExactValue.from_int(0).cos(), 1),
            (lambda: ExactValue.from_int(0).tan(), 0),
            (lambda: ExactValue.from_int(0).atan(), 0),
            (lambda: ExactValue.from_int(0).asin(), 0),
            (lambda: ExactValue.from_int(1).acos(), 0),
        ],
    )
    def test_rational_results(self, build, expected):
        value = build()
        assert value.is_rational
        assert value.rational_value == expected

    @pytest.mark.parametrize(
        "build",
        [
            lambda: ExactValue.from_int(2).sqrt(),
            lambda: ExactValue.from_int(2).log10(),
            lambda: ExactValue.from_int(1).exp(),
            lambda: ExactValue.from_int(0).acos(),
            lambda: ExactValue.from_float(0.5).sin(),
        ],
    )
    def test_irrational_results_stay_terms(self, build):
        assert not build().is_rational

    @pytest.mark.parametrize(
        "build",
        [
            lambda: ExactValue.from_int(-1).sqrt(),
            lambda: ExactValue.from_int(0).ln(),
            lambda: ExactValue.from_int(-5).log10(),
            lambda: ExactValue.from_int(2).asin(),
            lambda: ExactValue.from_float(-1.5).acos(),
        ],
    )
    def test_domain_errors(self, build):
        """Вне области определения ValueError."""
        with pytest.raises(ValueError):
            build()


class TestPow:
    """Тесты степени."""

    def test_integer_exponent_exact(self):
        assert ExactValue.from_int(2).pow(10).rational_value == 1024
        assert ExactValue.from_int(-2).pow(3).rational_value == -8
        assert ExactValue.from_float(0.5).pow(-2.0).rational_value == 4

    def test_dyadic_root_exact(self):
        """4 ** 0.5 == 2 и 16 ** 0.25 == 2 точно."""
        assert ExactValue.from_int(4).pow(0.5).rational_value == 2
        assert ExactValue.from_int(16).pow(0.25).rational_value == 2

    def test_zero_exponent(self):
        assert ExactValue.from_float(0.0).pow(-0.0).rational_value == 1

    def test_irrational_root(self):
        root = ExactValue.from_int(2).pow(0.5)
        assert not root.is_rational
        assert root.compare_to(ExactValue.from_float(math.sqrt(2.0))) == Ordering.LESS

    def test_zero_to_negative_power(self):
        with pytest.raises(ZeroDivisionError):
            ExactValue.from_float(0.0).pow(-1.0)

    def test_negative_base_fractional_exponent(self):
        with pytest.raises(ValueError):
            ExactValue.from_int(-8).pow(0.5)

    def test_large_exponent_product_consistent(self):
        """|y * ln x| ~ 2^45: приближения на разной точности согласованы."""
        value = ExactValue.from_float(9.936163146928305e-191).pow(48401608381258.58)
        assert value.is_consistent(2000)
        assert value.compare_to_bounded(0, 2000) == Ordering.GREATER

    def test_composite_large_exponent_consistent(self, sqrt2):
        assert sqrt2.pow(1000000.5).is_consistent(2000)

    def test_huge_exponent_stays_lazy(self):
        """MAX ** -1e307 не вычисляется точно, но знак и float приближение доступны."""
        tiny = ExactValue.from_float(MAX_FINITE).pow(-1.0128673137222576e307)
        assert not tiny.is_rational
        assert tiny.compare_to_bounded(0, 2000) == Ordering.GREATER
        assert tiny.to_float() == 0.0


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


class TestComparison:
    """Тесты strict и bounded сравнений."""

    def test_rational_comparison(self):
        assert ExactValue.from_int(3).compare_to(2.5) == Ordering.GREATER
        assert ExactValue.from_float(0.1).compare_to(Fraction(1, 10)) == Ordering.GREATER
        assert ExactValue.from_int(1).compare_to(1.0) == Ordering.EQUAL

    def test_irrational_vs_float(self, sqrt2):
        """Double ближайший к sqrt(2) лежит выше sqrt(2)."""
        assert ExactValue.from_float(1.4142135623730951).compare_to(sqrt2) == Ordering.GREATER

    def test_incomparable_raises(self, sqrt2):
        """sqrt(2) * sqrt(2) против 2: порядок не доказуем."""
        product = sqrt2 * sqrt2
        assert not product.is_comparable(2)
        with pytest.raises(ComparabilityError):
            product.compare_to(2)

    def test_incomparable_bounded_equal(self, sqrt2):
        assert (sqrt2 * sqrt2).compare_to_bounded(2, 200) == Ordering.EQUAL

    def test_comparable_predicate(self, sqrt2):
        assert sqrt2.is_comparable(1)
        assert ExactValue.from_int(1).is_comparable(0.5)

    @pytest.mark.parametrize(
        "build,approx",
        [
            (lambda: ExactValue.from_int(2).sqrt(), 1.4142135623730951),
            (lambda: ExactValue.from_int(1).exp(), 2.718281828459045),
            (lambda: ExactValue.from_int(2).ln(), 0.6931471805599453),
            (lambda: ExactValue.from_int(1).atan() * 4, 3.141592653589793),
            (lambda: ExactValue.from_float(1e-300).sin(), 1e-300),
        ],
    )
    def test_strict_agrees_with_bounded(self, build, approx):
        """Знак strict сравнения совпадает с bounded при высокой точности."""
        value = build()
        other = ExactValue.from_float(approx)
        strict = value.compare_to(other)
        assert strict != Ordering.EQUAL
        assert value.compare_to_bounded(other, 4000) == strict


# =============================================================================
# SELF-CONSISTENCY И ПРЕОБРАЗОВАНИЯ
# =============================================================================


class TestConsistencyAndConversion:
    """Тесты self-consistency и преобразований."""

    def test_consistency(self, sqrt2):
        assert ExactValue.from_float(0.3).is_consistent(2000)
        assert sqrt2.is_consistent(2000)
        assert (sqrt2 * sqrt2 + ExactValue.from_int(3).ln()).is_consistent(1000)

    def test_to_float_rounds_to_nearest(self, sqrt2):
        assert sqrt2.to_float() == math.sqrt(2.0)
        assert float(ExactValue.from_fraction(Fraction(1, 3))) == 1 / 3

    def test_to_float_overflow(self):
        assert ExactValue.from_int(10**400).to_float() == math.inf
        assert ExactValue.from_int(-(10**400)).to_float() == -math.inf

    def test_rendering(self, sqrt2):
        assert str(ExactValue.from_int(4).sqrt()) == "2"
        assert str(ExactValue.from_float(0.5)) == "0.5"
        assert str(ExactValue.from_fraction(Fraction(1, 3))) == "1/3"
        assert "sqrt" in str(sqrt2)
        assert repr(sqrt2).startswith("ExactValue(")

    def test_nice_string(self, sqrt2):
        assert sqrt2.to_nice_string(10) == "1.414213562"
        assert ExactValue.from_int(-17).to_nice_string() == "-17"
