"""
ExactValue: exact-real oracle поверх mpmath

Значение хранится в форме `rational + coeff * term`:
- rational, coeff: точные рациональные (fractions.Fraction)
- term: отсутствует (значение рационально), функция рационального аргумента
  с известной иррациональностью, либо композит других ExactValue
  (иррациональность неизвестна)

Приближения term вычисляются mpmath с адаптивной точностью; знак
определяется удвоением точности до тех пор, пока оценка ошибки не отделит
значение от нуля.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Рациональные результаты (sqrt(4), log10(100), exp(0), ...) распознаются
   и хранятся точно
2. Strict сравнение выполняется только для доказуемо сравнимых операндов,
   иначе ComparabilityError
3. Bounded сравнение всегда завершается (cutoff по точности)
4. Float входы преобразуются в mpf без округления
"""

import functools
import math
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Callable, Final, Optional, Union

import mpmath

from ulpcheck.core.domain.ulp_class import Ordering
from ulpcheck.core.errors import ComparabilityError

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Стартовая рабочая точность адаптивных вычислений (bits)
INITIAL_PRECISION_BITS: Final[int] = 64

# Потолок адаптивной точности; strict сравнение сверх него даёт ComparabilityError
MAX_PRECISION_BITS: Final[int] = 1 << 15

# Запас на ошибку элементарных функций mpmath: |approx - exact| <= |exact| * 2^(GUARD - prec)
ERROR_GUARD_BITS: Final[int] = 10

# Дополнительные bits для входов и промежуточной арифметики
EXTRA_INPUT_BITS: Final[int] = 64

# Толерантность bounded проверок домена для композитных значений
DOMAIN_TOLERANCE_BITS: Final[int] = 2000

# Максимальный размер (bits) точно вычисляемой рациональной степени
EXACT_POWER_MAX_BITS: Final[int] = 1 << 16

_mp = mpmath.mp

Operand = Union["ExactValue", int, Fraction, float]


# =============================================================================
# РАЦИОНАЛЬНЫЕ ПРИМИТИВЫ
# =============================================================================


def _is_dyadic(q: Fraction) -> bool:
    d = q.denominator
    return d & (d - 1) == 0


def _magnitude_bits(q: Fraction) -> int:
    return max(0, q.numerator.bit_length() - q.denominator.bit_length())


def _binary_order(q: Fraction) -> int:
    """Двоичный порядок ненулевого рационального: |log2 |q| - order| < 1."""
    return q.numerator.bit_length() - q.denominator.bit_length()


def _power_extra_bits(base_order: int, exponent_order: int) -> int:
    """
    Дополнительные bits для x ** y = exp(y * ln x).

    mpmath вычисляет ln x с относительной ошибкой, которая после умножения
    на y и exp превращается в относительную ошибку порядка |y * ln x|
    ulp. Возвращает оценку сверху log2 |y * ln x| плюс ERROR_GUARD_BITS.

    Args:
        base_order: двоичный порядок x (|log2 x| <= |base_order| + 1)
        exponent_order: двоичный порядок y (|y| <= 2^(exponent_order + 1))
    """
    log2_product = max(0, exponent_order + 1) + (abs(base_order) + 2).bit_length()
    return log2_product + ERROR_GUARD_BITS


def _to_mpf(q: Fraction, prec: int) -> mpmath.mpf:
    """
    Преобразование рационального в mpf.

    Двоично-рациональные (все float) преобразуются точно независимо от prec,
    остальные с относительной ошибкой порядка 2^-prec.
    """
    n, d = q.numerator, q.denominator
    if _is_dyadic(q):
        with _mp.workprec(max(prec, n.bit_length() + 1)):
            return mpmath.ldexp(mpmath.mpf(n), 1 - d.bit_length())
    with _mp.workprec(prec):
        return mpmath.mpf(n) / d


def _render_rational(q: Fraction) -> str:
    if q.denominator == 1:
        return str(q.numerator)
    if _is_dyadic(q):
        try:
            as_float = float(q)
        except OverflowError:
            as_float = None
        if as_float is not None and Fraction(as_float) == q:
            return repr(as_float)
    return f"{q.numerator}/{q.denominator}"


def _exact_root(q: Fraction, levels: int) -> Optional[Fraction]:
    """
    Точный корень степени 2^levels из неотрицательного рационального.

    Returns:
        r такое что r ** (2 ** levels) == q, либо None если r иррационален
    """
    n, d = q.numerator, q.denominator
    for _ in range(levels):
        if n <= 1 and d == 1:
            break
        rn, rd = math.isqrt(n), math.isqrt(d)
        if rn * rn != n or rd * rd != d:
            return None
        n, d = rn, rd
    return Fraction(n, d)


def _power_of_ten_exponent(q: Fraction) -> Optional[int]:
    """k если q == 10**k для целого k, иначе None."""
    n, d = q.numerator, q.denominator
    if d == 1:
        base, sign = n, 1
    elif n == 1:
        base, sign = d, -1
    else:
        return None
    k = 0
    while base > 1 and base % 10 == 0:
        base //= 10
        k += 1
    return sign * k if base == 1 else None


# =============================================================================
# ТОЧНЫЕ СПЕЦИАЛЬНЫЕ ЗНАЧЕНИЯ
# =============================================================================
# Каждая функция: точный результат если он рационален, None если результат
# доказуемо иррационален, ValueError вне области определения.


def _special_exp(q: Fraction) -> Optional[Fraction]:
    return Fraction(1) if q == 0 else None


def _special_ln(q: Fraction) -> Optional[Fraction]:
    if q <= 0:
        raise ValueError(f"ln undefined for {_render_rational(q)}")
    return Fraction(0) if q == 1 else None


def _special_log10(q: Fraction) -> Optional[Fraction]:
    if q <= 0:
        raise ValueError(f"log10 undefined for {_render_rational(q)}")
    k = _power_of_ten_exponent(q)
    return Fraction(k) if k is not None else None


def _special_sqrt(q: Fraction) -> Optional[Fraction]:
    if q < 0:
        raise ValueError(f"sqrt undefined for {_render_rational(q)}")
    return _exact_root(q, 1)


def _special_zero_at_zero(q: Fraction) -> Optional[Fraction]:
    return Fraction(0) if q == 0 else None


def _special_cos(q: Fraction) -> Optional[Fraction]:
    return Fraction(1) if q == 0 else None


def _special_asin(q: Fraction) -> Optional[Fraction]:
    if abs(q) > 1:
        raise ValueError(f"asin undefined for {_render_rational(q)}")
    return Fraction(0) if q == 0 else None


def _special_acos(q: Fraction) -> Optional[Fraction]:
    if abs(q) > 1:
        raise ValueError(f"acos undefined for {_render_rational(q)}")
    return Fraction(0) if q == 1 else None


_SPECIAL_VALUES: Final[dict[str, Callable[[Fraction], Optional[Fraction]]]] = {
    "exp": _special_exp,
    "ln": _special_ln,
    "log10": _special_log10,
    "sqrt": _special_sqrt,
    "sin": _special_zero_at_zero,
    "cos": _special_cos,
    "tan": _special_zero_at_zero,
    "asin": _special_asin,
    "acos": _special_acos,
    "atan": _special_zero_at_zero,
}

_MPMATH_FUNCTIONS: Final[dict[str, Callable]] = {
    "exp": mpmath.exp,
    "ln": mpmath.ln,
    "log10": mpmath.log10,
    "sqrt": mpmath.sqrt,
    "sin": mpmath.sin,
    "cos": mpmath.cos,
    "tan": mpmath.tan,
    "asin": mpmath.asin,
    "acos": mpmath.acos,
    "atan": mpmath.atan,
}


# =============================================================================
# TERMS
# =============================================================================


@functools.lru_cache(maxsize=4096)
def _evaluate_function(
    name: str, argument: Fraction, exponent: Optional[Fraction], prec: int
) -> mpmath.mpf:
    input_prec = prec + EXTRA_INPUT_BITS + _magnitude_bits(argument)
    if exponent is not None:
        extra = _power_extra_bits(_binary_order(argument), _binary_order(exponent))
        base = _to_mpf(abs(argument), input_prec + extra)
        power = _to_mpf(exponent, input_prec + extra + _magnitude_bits(exponent))
        with _mp.workprec(prec + extra):
            result = mpmath.power(base, power)
            # отрицательное основание допускается только с целым показателем
            if argument < 0 and exponent.numerator % 2 == 1:
                result = -result
            return result
    x = _to_mpf(argument, input_prec)
    with _mp.workprec(prec):
        return _MPMATH_FUNCTIONS[name](x)


@dataclass(frozen=True)
class _FunctionTerm:
    """Элементарная функция рационального аргумента."""

    name: str
    argument: Fraction
    exponent: Optional[Fraction] = None
    irrational: bool = field(default=True, compare=False)

    def evaluate(self, prec: int) -> mpmath.mpf:
        return _evaluate_function(self.name, self.argument, self.exponent, prec)

    def __str__(self) -> str:
        if self.exponent is not None:
            return f"pow({_render_rational(self.argument)}, {_render_rational(self.exponent)})"
        return f"{self.name}({_render_rational(self.argument)})"


@dataclass(frozen=True, eq=False)
class _CompositeTerm:
    """
    Операция над ExactValue, не сводимая к рациональной форме.

    Иррациональность не известна, поэтому strict сравнения с таким
    значением невозможны; доступны только bounded.
    """

    op: str
    operands: tuple
    irrational: bool = field(default=False, init=False)

    def evaluate(self, prec: int) -> mpmath.mpf:
        args = [operand._approximate(prec + EXTRA_INPUT_BITS) for operand in self.operands]
        wp = prec
        if self.op == "pow" and args[0] and args[1]:
            extra = _power_extra_bits(int(mpmath.mag(args[0])), int(mpmath.mag(args[1])))
            wp = prec + extra
            args = [operand._approximate(wp + EXTRA_INPUT_BITS) for operand in self.operands]
        with _mp.workprec(wp):
            if self.op == "add":
                result = args[0] + args[1]
            elif self.op == "mul":
                result = args[0] * args[1]
            elif self.op == "div":
                result = args[0] / args[1]
            elif self.op == "pow":
                result = mpmath.power(args[0], args[1])
            else:
                result = _MPMATH_FUNCTIONS[self.op](args[0])
        if isinstance(result, mpmath.mpc):
            raise ValueError(f"{self} has no real value")
        return result

    def __str__(self) -> str:
        if self.op == "add":
            return f"({self.operands[0]} + {self.operands[1]})"
        if self.op == "mul":
            return f"({self.operands[0]} * {self.operands[1]})"
        if self.op == "div":
            return f"({self.operands[0]} / {self.operands[1]})"
        if self.op == "pow":
            return f"pow({self.operands[0]}, {self.operands[1]})"
        return f"{self.op}({self.operands[0]})"


# =============================================================================
# EXACT VALUE
# =============================================================================


class ExactValue:
    """
    Immutable вещественное число произвольной точности.

    Создаётся из конечного float, int или Fraction; комбинируется
    арифметикой (+, -, *, /, унарный -) и элементарными функциями.

    Examples:
        >>> str(ExactValue.from_int(4).sqrt())
        '2'
        >>> ExactValue.from_float(2.0).sqrt().is_rational
        False
        >>> ExactValue.from_int(3).compare_to(ExactValue.from_float(2.5))
        <Ordering.GREATER: 1>
    """

    __slots__ = ("_rational", "_coeff", "_term")

    def __init__(
        self,
        rational: Union[Fraction, int] = 0,
        coeff: Union[Fraction, int] = 0,
        term=None,
    ):
        if term is None or coeff == 0:
            coeff, term = 0, None
        self._rational = Fraction(rational)
        self._coeff = Fraction(coeff)
        self._term = term

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_float(cls, value: float) -> "ExactValue":
        """
        Точное значение конечного double.

        Raises:
            ValueError: для NaN и бесконечностей
        """
        if not math.isfinite(value):
            raise ValueError(f"cannot represent non-finite float {value!r} exactly")
        return cls(Fraction(value))

    @classmethod
    def from_int(cls, value: int) -> "ExactValue":
        return cls(Fraction(value))

    @classmethod
    def from_fraction(cls, value: Fraction) -> "ExactValue":
        return cls(value)

    @classmethod
    def _of_term(cls, term) -> "ExactValue":
        return cls(0, 1, term)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def is_rational(self) -> bool:
        """True если значение известно как точное рациональное."""
        return self._term is None

    @property
    def rational_value(self) -> Optional[Fraction]:
        return self._rational if self._term is None else None

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def _scaled(self, factor: Fraction) -> "ExactValue":
        return ExactValue(self._rational * factor, self._coeff * factor, self._term)

    def _term_part(self) -> "ExactValue":
        return ExactValue(0, self._coeff, self._term)

    def __neg__(self) -> "ExactValue":
        return ExactValue(-self._rational, -self._coeff, self._term)

    def __add__(self, other: Operand) -> "ExactValue":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        if self._term is None or other._term is None or self._term == other._term:
            term = self._term if self._term is not None else other._term
            return ExactValue(self._rational + other._rational, self._coeff + other._coeff, term)
        composite = _CompositeTerm("add", (self._term_part(), other._term_part()))
        return ExactValue(self._rational + other._rational, 1, composite)

    def __radd__(self, other: Operand) -> "ExactValue":
        return self.__add__(other)

    def __sub__(self, other: Operand) -> "ExactValue":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other: Operand) -> "ExactValue":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other + (-self)

    def __mul__(self, other: Operand) -> "ExactValue":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        if self._term is None:
            return other._scaled(self._rational)
        if other._term is None:
            return self._scaled(other._rational)
        return ExactValue._of_term(_CompositeTerm("mul", (self, other)))

    def __rmul__(self, other: Operand) -> "ExactValue":
        return self.__mul__(other)

    def __truediv__(self, other: Operand) -> "ExactValue":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        if other._term is None:
            if other._rational == 0:
                raise ZeroDivisionError("division by exact zero")
            return self._scaled(1 / other._rational)
        if self._term is None and self._rational == 0:
            return ExactValue(0)
        if other._sign(tolerance_bits=DOMAIN_TOLERANCE_BITS) == 0:
            raise ZeroDivisionError(f"divisor {other} is indistinguishable from zero")
        return ExactValue._of_term(_CompositeTerm("div", (self, other)))

    def __rtruediv__(self, other: Operand) -> "ExactValue":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.__truediv__(self)

    # -------------------------------------------------------------------------
    # Элементарные функции
    # -------------------------------------------------------------------------

    def _apply(self, name: str) -> "ExactValue":
        if self._term is None:
            exact = _SPECIAL_VALUES[name](self._rational)
            if exact is not None:
                return ExactValue(exact)
            return ExactValue._of_term(_FunctionTerm(name, self._rational))
        self._check_domain(name)
        return ExactValue._of_term(_CompositeTerm(name, (self,)))

    def _check_domain(self, name: str) -> None:
        """Bounded проверка области определения для нерациональных аргументов."""
        if name == "sqrt" and self._sign(tolerance_bits=DOMAIN_TOLERANCE_BITS) < 0:
            raise ValueError(f"sqrt undefined for negative {self}")
        if name in ("ln", "log10") and self._sign(tolerance_bits=DOMAIN_TOLERANCE_BITS) <= 0:
            raise ValueError(f"{name} undefined for non-positive {self}")
        if name in ("asin", "acos"):
            above = (self - 1)._sign(tolerance_bits=DOMAIN_TOLERANCE_BITS) > 0
            below = (self + 1)._sign(tolerance_bits=DOMAIN_TOLERANCE_BITS) < 0
            if above or below:
                raise ValueError(f"{name} undefined for {self}")

    def exp(self) -> "ExactValue":
        return self._apply("exp")

    def ln(self) -> "ExactValue":
        return self._apply("ln")

    def log10(self) -> "ExactValue":
        return self._apply("log10")

    def sqrt(self) -> "ExactValue":
        return self._apply("sqrt")

    def sin(self) -> "ExactValue":
        return self._apply("sin")

    def cos(self) -> "ExactValue":
        return self._apply("cos")

    def tan(self) -> "ExactValue":
        return self._apply("tan")

    def asin(self) -> "ExactValue":
        return self._apply("asin")

    def acos(self) -> "ExactValue":
        return self._apply("acos")

    def atan(self) -> "ExactValue":
        return self._apply("atan")

    def pow(self, exponent: Operand) -> "ExactValue":
        """
        self ** exponent.

        Целые степени небольшого размера и рациональные корни вычисляются
        точно; остальные случаи остаются ленивыми term.

        Raises:
            ZeroDivisionError: ноль в отрицательной степени
            ValueError: отрицательное основание с нецелым показателем
        """
        exponent = _coerce(exponent)
        if exponent is None:
            raise TypeError("exponent must be an ExactValue, int, Fraction or float")
        x, y = self.rational_value, exponent.rational_value
        if x is not None and y is not None:
            return _rational_power(x, y)
        if y is not None and y == 0:
            return ExactValue(1)
        if y is None or y.denominator != 1:
            if self._sign(tolerance_bits=DOMAIN_TOLERANCE_BITS) < 0:
                raise ValueError(f"pow undefined for negative base {self} with exponent {exponent}")
        return ExactValue._of_term(_CompositeTerm("pow", (self, exponent)))

    # -------------------------------------------------------------------------
    # Приближения и знак
    # -------------------------------------------------------------------------

    def _approximate(self, prec: int) -> mpmath.mpf:
        if self._term is None:
            return _to_mpf(self._rational, prec)
        value = self._term.evaluate(prec)
        with _mp.workprec(prec):
            return _to_mpf(self._rational, prec) + _to_mpf(self._coeff, prec) * value

    def _enclosure(self, prec: int) -> tuple[mpmath.mpf, mpmath.mpf]:
        """
        Центр и радиус интервала, содержащего значение.

        Радиус считается от модулей слагаемых, поэтому сокращение
        rational + coeff * term не занижает оценку ошибки.
        """
        value = self._term.evaluate(prec)
        wp = prec + EXTRA_INPUT_BITS
        with _mp.workprec(wp):
            rational = _to_mpf(self._rational, wp)
            scaled = _to_mpf(self._coeff, wp) * value
            center = rational + scaled
            radius = (abs(rational) + abs(scaled)) * mpmath.ldexp(1, ERROR_GUARD_BITS - prec)
        return center, radius

    def _sign(self, tolerance_bits: Optional[int] = None) -> int:
        """
        Знак значения с адаптивной точностью.

        Args:
            tolerance_bits: None для strict режима; иначе значения с
                |x| <= 2^-tolerance_bits считаются нулём

        Raises:
            ComparabilityError: strict режим исчерпал MAX_PRECISION_BITS
        """
        if self._term is None:
            return (self._rational > 0) - (self._rational < 0)
        prec = INITIAL_PRECISION_BITS
        while True:
            center, radius = self._enclosure(prec)
            with _mp.workprec(prec + EXTRA_INPUT_BITS):
                if abs(center) > radius:
                    return 1 if center > 0 else -1
                if tolerance_bits is not None and radius <= mpmath.ldexp(1, -tolerance_bits):
                    return 0
            if prec >= MAX_PRECISION_BITS:
                if tolerance_bits is not None:
                    return 0
                raise ComparabilityError(
                    f"sign of {self} not resolved at {prec} bits of precision"
                )
            prec *= 2

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def is_comparable(self, other: Operand) -> bool:
        """
        Можно ли доказать порядок self и other.

        Разность должна быть либо точным рациональным, либо ненулевым
        кратным доказуемо иррационального term.
        """
        diff = self - _require(other)
        return diff._term is None or diff._term.irrational

    def compare_to(self, other: Operand) -> Ordering:
        """
        Strict трёхстороннее сравнение.

        Raises:
            ComparabilityError: если порядок нельзя доказать
        """
        other = _require(other)
        diff = self - other
        if not (diff._term is None or diff._term.irrational):
            raise ComparabilityError(f"{self} not comparable to {other}")
        return Ordering.from_sign(diff._sign())

    def compare_to_bounded(self, other: Operand, precision_bits: int) -> Ordering:
        """
        Bounded трёхстороннее сравнение: всегда завершается.

        Значения, отличающиеся не более чем на 2^-precision_bits, могут
        быть признаны равными.
        """
        diff = self - _require(other)
        return Ordering.from_sign(diff._sign(tolerance_bits=precision_bits))

    # -------------------------------------------------------------------------
    # Self-consistency
    # -------------------------------------------------------------------------

    def is_consistent(self, precision_bits: int) -> bool:
        """
        Проверка внутренней согласованности приближений.

        Интервалы, полученные на грубой и на полной точности, обязаны
        пересекаться; для fuzz-тестирования самого oracle.
        """
        if self._term is None:
            return True
        low = max(INITIAL_PRECISION_BITS, precision_bits // 8)
        high = max(2 * low, precision_bits)
        center_low, radius_low = self._enclosure(low)
        center_high, radius_high = self._enclosure(high)
        with _mp.workprec(high + EXTRA_INPUT_BITS):
            return abs(center_low - center_high) <= radius_low + radius_high

    # -------------------------------------------------------------------------
    # Преобразования
    # -------------------------------------------------------------------------

    def to_float(self) -> float:
        """
        Ближайший double (для нерациональных значений возможно двойное
        округление). Переполнение даёт ±inf.
        """
        if self._term is None:
            try:
                return float(self._rational)
            except OverflowError:
                return math.inf if self._rational > 0 else -math.inf
        approx = self._approximate(2 * INITIAL_PRECISION_BITS)
        try:
            return float(approx)
        except OverflowError:
            return math.inf if approx > 0 else -math.inf

    def __float__(self) -> float:
        return self.to_float()

    def to_nice_string(self, digits: int = 20) -> str:
        """Десятичное приближение для диагностики."""
        if self._term is None and self._rational.denominator == 1:
            return str(self._rational.numerator)
        prec = 4 * digits + EXTRA_INPUT_BITS
        return mpmath.nstr(self._approximate(prec), digits)

    def __str__(self) -> str:
        if self._term is None:
            return _render_rational(self._rational)
        if self._coeff == 1:
            scaled = str(self._term)
        elif self._coeff == -1:
            scaled = f"-{self._term}"
        else:
            scaled = f"{_render_rational(self._coeff)}*{self._term}"
        if self._rational == 0:
            return scaled
        return f"{_render_rational(self._rational)} + {scaled}"

    def __repr__(self) -> str:
        return f"ExactValue({self})"


# =============================================================================
# HELPERS
# =============================================================================


def _coerce(value) -> Optional[ExactValue]:
    if isinstance(value, ExactValue):
        return value
    if isinstance(value, float):
        return ExactValue.from_float(value)
    if isinstance(value, (int, Fraction)):
        return ExactValue(Fraction(value))
    return None


def _require(value) -> ExactValue:
    coerced = _coerce(value)
    if coerced is None:
        raise TypeError(f"cannot compare ExactValue with {type(value).__name__}")
    return coerced


def _rational_power(x: Fraction, y: Fraction) -> ExactValue:
    if y == 0 or x == 1:
        return ExactValue(1)
    if x == 0:
        if y < 0:
            raise ZeroDivisionError("zero raised to a negative power")
        return ExactValue(0)
    size = max(x.numerator.bit_length(), x.denominator.bit_length())
    if y.denominator == 1:
        e = y.numerator
        if x == -1:
            return ExactValue(1 if e % 2 == 0 else -1)
        if abs(e) * size <= EXACT_POWER_MAX_BITS:
            return ExactValue(x ** e)
        # рациональный, но слишком большой для точного вычисления
        return ExactValue._of_term(_FunctionTerm("pow", x, y, irrational=False))
    if x < 0:
        raise ValueError(
            f"pow undefined for negative base {_render_rational(x)} "
            f"with non-integer exponent {_render_rational(y)}"
        )
    if not _is_dyadic(y):
        return ExactValue._of_term(_FunctionTerm("pow", x, y, irrational=False))
    # x ** (m / 2^k) рационально только если x точный корень степени 2^k
    root = _exact_root(x, y.denominator.bit_length() - 1)
    if root is None:
        return ExactValue._of_term(_FunctionTerm("pow", x, y))
    root_size = max(root.numerator.bit_length(), root.denominator.bit_length())
    if abs(y.numerator) * root_size <= EXACT_POWER_MAX_BITS:
        return ExactValue(root ** y.numerator)
    return ExactValue._of_term(_FunctionTerm("pow", x, y, irrational=False))
