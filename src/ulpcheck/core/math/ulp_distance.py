"""
ULP Distance: классификация ошибки float относительно точного значения

Модуль определяет, насколько далеко конечный double находится от точного
математического результата, не полагаясь на float арифметику:
- ulp_distance: strict вариант, все сравнения доказуемые (oracle обязан
  подтвердить сравнимость операндов)
- approx_ulp_distance: bounded вариант, сравнения с фиксированным cutoff по
  точности; всегда завершается, ценой исчезающе малой вероятности ошибки

АЛГОРИТМ:
    1. fp == exact                    -> EXACT
    2. fp < exact                     -> повтор для (-fp, -exact)
    3. prev = next_down(fp); prev = -inf -> EXACT
    4. prev >= exact:
           prevprev >= exact          -> WRONG
           иначе                      -> WITHIN_2
       prev < exact (брекет [prev, fp]):
           fp - exact <= exact - prev -> EXACT
           иначе                      -> WITHIN_1
"""

import logging
import math
from typing import Callable, Final

from ulpcheck.core.config import (
    APPROX_CONSISTENCY_BITS_DEFAULT,
    COMPARE_PRECISION_BITS_DEFAULT,
    STRICT_CONSISTENCY_BITS_DEFAULT,
)
from ulpcheck.core.domain.ulp_class import Ordering, UlpClass
from ulpcheck.core.errors import InternalConsistencyError
from ulpcheck.core.math.float_bits import next_down
from ulpcheck.oracle.exact_value import ExactValue

logger = logging.getLogger(__name__)

# Максимум итераций нормализации знака: одна смена знака всегда достаточна
_MAX_SIGN_NORMALIZATIONS: Final[int] = 2

Comparator = Callable[[ExactValue, ExactValue], Ordering]


# =============================================================================
# COMPARATORS
# =============================================================================


def _strict_comparator(left: ExactValue, right: ExactValue) -> Ordering:
    return left.compare_to(right)


def _bounded_comparator(precision_bits: int) -> Comparator:
    def compare(left: ExactValue, right: ExactValue) -> Ordering:
        return left.compare_to_bounded(right, precision_bits)

    return compare


# =============================================================================
# КЛАССИФИКАЦИЯ
# =============================================================================


def _check_consistency(exact: ExactValue, precision_bits: int) -> None:
    if not exact.is_consistent(precision_bits):
        raise InternalConsistencyError(f"Property wrong for {exact}")


def _classify(fp: float, exact: ExactValue, compare: Comparator) -> UlpClass:
    if not math.isfinite(fp):
        raise ValueError(f"ulp distance requires a finite float, got {fp!r}")

    for _ in range(_MAX_SIGN_NORMALIZATIONS):
        fp_exact = ExactValue.from_float(fp)
        error_sign = compare(fp_exact, exact)
        if error_sign == Ordering.EQUAL:
            return UlpClass.EXACT
        if error_sign == Ordering.GREATER:
            break
        # классификация симметрична относительно смены знака
        fp, exact = -fp, -exact
    else:
        raise InternalConsistencyError(f"sign normalization did not converge for {fp!r}, {exact}")

    # fp > exact
    prev_fp = next_down(fp)
    if math.isinf(prev_fp):
        # fp = -MAX_FINITE: точный результат ещё меньше, лучше представить нельзя
        return UlpClass.EXACT
    prev = ExactValue.from_float(prev_fp)

    if compare(prev, exact) >= Ordering.EQUAL:
        # prev ближе к exact, чем fp
        prevprev_fp = next_down(prev_fp)
        if math.isinf(prevprev_fp):
            return UlpClass.WITHIN_2
        prevprev = ExactValue.from_float(prevprev_fp)
        if compare(prevprev, exact) >= Ordering.EQUAL:
            # exact <= prevprev < prev < fp: fp не является ни границей брекета, ни соседом
            return UlpClass.WRONG
        return UlpClass.WITHIN_2

    # prev < exact < fp
    prev_gap = exact - prev
    fp_gap = fp_exact - exact
    if compare(fp_gap, prev_gap) <= Ordering.EQUAL:
        return UlpClass.EXACT
    return UlpClass.WITHIN_1


def ulp_distance(
    fp: float,
    exact: ExactValue,
    consistency_bits: int = STRICT_CONSISTENCY_BITS_DEFAULT,
) -> UlpClass:
    """
    Strict расстояние между fp и exact в ulp.

    Предполагается, что exact либо известен как рациональный, либо
    доказуемо иррационален, так что все сравнения сходятся. Вызывающий
    отвечает за выбор таких входов.

    Args:
        fp: конечный double
        exact: точное значение
        consistency_bits: точность self-consistency проверки oracle

    Returns:
        UlpClass классификация

    Raises:
        InternalConsistencyError: oracle не прошёл self-consistency проверку
        ComparabilityError: операнды нельзя доказуемо упорядочить
        ValueError: fp не конечен

    Examples:
        >>> ulp_distance(1.0, ExactValue.from_int(1))
        <UlpClass.EXACT: 0>
        >>> ulp_distance(0.1, ExactValue.from_int(1) / 10)
        <UlpClass.EXACT: 0>
    """
    _check_consistency(exact, consistency_bits)
    return _classify(fp, exact, _strict_comparator)


def approx_ulp_distance(
    fp: float,
    exact: ExactValue,
    precision_bits: int = COMPARE_PRECISION_BITS_DEFAULT,
    consistency_bits: int = APPROX_CONSISTENCY_BITS_DEFAULT,
) -> UlpClass:
    """
    Bounded расстояние между fp и exact в ulp.

    Ведёт себя как ulp_distance, но не требует доказуемой сравнимости:
    каждое сравнение выполняется с абсолютной толерантностью
    2^-precision_bits. Используется там, где oracle не гарантирует
    разрешимость сравнения (pow).
    """
    _check_consistency(exact, consistency_bits)
    result = _classify(fp, exact, _bounded_comparator(precision_bits))
    logger.debug("approx ulp distance of %r from %s: %s", fp, exact, result.name)
    return result
