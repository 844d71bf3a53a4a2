"""
Error-Bound Checker: проверка документированных границ ошибки

Для входа x (и y для бинарных функций) каждая целевая функция
вычисляется во float (библиотека под тестом, по умолчанию модуль math) и
через exact-value oracle, после чего ULP класс сравнивается с границей.

Порядок проверок:
1. Деление: 3/x, -17/x, y/x (x != 0, нефинитный результат пропускается)
2. exp (результат ненулевой и конечный)
3. ln, log10 (x > 0)
4. sqrt (x >= 0)
5. sin, cos, tan, atan
6. asin, acos (|x| <= 1)
7. hypot(x, y) (ослабленная проверка при бесконечном результате)
8. pow(x, y) (x >= 0 или y целое; bounded сравнение)

Пропуски существуют потому, что поведение oracle на нефинитных входах и
вне области определения не определено либо вычислительно неразрешимо.

Модуль math в Python бросает OverflowError (и ValueError для pow(0, y<0))
там, где C возвращает бесконечность; такие случаи трактуются как
бесконечный float результат.
"""

import logging
import math
from types import ModuleType
from typing import Any, Callable, Final, Iterator, Optional, Union

from ulpcheck.checker.results import CheckResult
from ulpcheck.core.config import VerificationConfig
from ulpcheck.core.domain.sample import DomainSample
from ulpcheck.core.domain.ulp_class import Ordering, UlpClass
from ulpcheck.core.errors import BoundViolation
from ulpcheck.core.math.float_bits import is_integral, next_up
from ulpcheck.core.math.ulp_distance import approx_ulp_distance, ulp_distance
from ulpcheck.oracle.exact_value import ExactValue

logger = logging.getLogger(__name__)

# =============================================================================
# ГРАНИЦЫ ОШИБКИ
# =============================================================================

# Деление и sqrt обязаны быть correctly rounded, остальные в пределах 1 ulp
FUNCTION_BOUNDS: Final[dict[str, UlpClass]] = {
    "div": UlpClass.EXACT,
    "exp": UlpClass.WITHIN_1,
    "ln": UlpClass.WITHIN_1,
    "log10": UlpClass.WITHIN_1,
    "sqrt": UlpClass.EXACT,
    "sin": UlpClass.WITHIN_1,
    "cos": UlpClass.WITHIN_1,
    "tan": UlpClass.WITHIN_1,
    "atan": UlpClass.WITHIN_1,
    "asin": UlpClass.WITHIN_1,
    "acos": UlpClass.WITHIN_1,
    "hypot": UlpClass.WITHIN_1,
    "pow": UlpClass.WITHIN_1,
}

# Имена функций библиотеки под тестом для каждой проверяемой функции
LIBRARY_NAMES: Final[dict[str, str]] = {
    "exp": "exp",
    "ln": "log",
    "log10": "log10",
    "sqrt": "sqrt",
    "sin": "sin",
    "cos": "cos",
    "tan": "tan",
    "atan": "atan",
    "asin": "asin",
    "acos": "acos",
    "hypot": "hypot",
    "pow": "pow",
}

THREE: Final[ExactValue] = ExactValue.from_int(3)
MINUS_17: Final[ExactValue] = ExactValue.from_int(-17)

FloatLibrary = Union[ModuleType, Any]


class ErrorBoundChecker:
    """
    Проверка границ ошибки всех целевых функций в точке.

    library: объект с функциями в стиле модуля math (exp, log, log10,
    sqrt, sin, cos, tan, atan, asin, acos, hypot, pow). Позволяет
    проверять альтернативные реализации.
    """

    def __init__(
        self,
        config: Optional[VerificationConfig] = None,
        library: FloatLibrary = math,
    ):
        """
        Args:
            config: параметры точности (по умолчанию VerificationConfig())
            library: float библиотека под тестом
        """
        self.config = config or VerificationConfig()
        self.library = library

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def check_functions_at(self, x: float, y: float) -> None:
        """
        Проверка всех функций в (x, y) с остановкой на первом нарушении.

        Raises:
            BoundViolation: функция превысила границу (имя и входы в сообщении)
            ComparabilityError, InternalConsistencyError: отказ oracle
        """
        for result in self.iter_checks(x, y):
            if not result.passed:
                logger.error("bound violation: %s %r: %s", result.function, result.inputs, result.details)
                raise BoundViolation(
                    function=result.function,
                    inputs=result.inputs,
                    ulp_class=result.ulp_class,
                    bound=result.bound,
                    details=result.details,
                )

    def check_sample(self, sample: DomainSample) -> None:
        self.check_functions_at(sample.primary, sample.auxiliary)

    def evaluate(self, x: float, y: float) -> list[CheckResult]:
        """Все результаты проверок в (x, y) без исключения на нарушении."""
        return list(self.iter_checks(x, y))

    def iter_checks(self, x: float, y: float) -> Iterator[CheckResult]:
        """
        Последовательность результатов проверок в фиксированном порядке.

        Для нефинитного x проверки не выполняются.
        """
        if not math.isfinite(x):
            return
        x_exact = ExactValue.from_float(x)
        y_exact = ExactValue.from_float(y) if math.isfinite(y) else None

        if x != 0.0:
            yield self._check_division("div 3", 3.0, THREE, x, x_exact)
            yield self._check_division("div -17", -17.0, MINUS_17, x, x_exact)
            if y_exact is None:
                yield CheckResult.skip("div y", (y, x), FUNCTION_BOUNDS["div"], "non-finite dividend")
            else:
                yield self._check_division("div y", y, y_exact, x, x_exact)

        yield self._check_exp(x, x_exact)
        if x > 0.0:
            yield self._check_unary("ln", x, x_exact.ln)
            yield self._check_unary("log10", x, x_exact.log10)
        if x >= 0.0:
            yield self._check_unary("sqrt", x, x_exact.sqrt)
        yield self._check_unary("sin", x, x_exact.sin)
        yield self._check_unary("cos", x, x_exact.cos)
        yield self._check_unary("tan", x, x_exact.tan)
        yield self._check_unary("atan", x, x_exact.atan)
        if abs(x) <= 1.0:
            yield self._check_unary("asin", x, x_exact.asin)
            yield self._check_unary("acos", x, x_exact.acos)

        if y_exact is None:
            # hypot и pow не определены для нефинитного y в oracle
            return
        yield self._check_hypot(x, y, x_exact, y_exact)
        yield self._check_pow(x, y, x_exact, y_exact)

    # -------------------------------------------------------------------------
    # Отдельные проверки
    # -------------------------------------------------------------------------

    def _float(self, function: str, *args: float) -> float:
        try:
            return getattr(self.library, LIBRARY_NAMES[function])(*args)
        except OverflowError:
            return math.inf

    def _strict(self, function: str, inputs: tuple[float, ...], fp: float, exact: ExactValue) -> CheckResult:
        ulp_class = ulp_distance(fp, exact, consistency_bits=self.config.strict_consistency_bits)
        result = CheckResult.measured(function, inputs, FUNCTION_BOUNDS[function.split()[0]], fp, ulp_class)
        logger.debug("%s %r: %s", function, inputs, result.details)
        return result

    def _check_division(
        self,
        function: str,
        numerator: float,
        numerator_exact: ExactValue,
        x: float,
        x_exact: ExactValue,
    ) -> CheckResult:
        inputs = (numerator, x)
        quotient = numerator / x
        if not math.isfinite(quotient):
            return CheckResult.skip(function, inputs, FUNCTION_BOUNDS["div"], "non-finite quotient", quotient)
        return self._strict(function, inputs, quotient, numerator_exact / x_exact)

    def _check_exp(self, x: float, x_exact: ExactValue) -> CheckResult:
        result = self._float("exp", x)
        if result == 0.0 or math.isinf(result):
            # точное значение на краях диапазона вычислительно неразрешимо
            return CheckResult.skip("exp", (x,), FUNCTION_BOUNDS["exp"], "underflow or overflow", result)
        return self._strict("exp", (x,), result, x_exact.exp())

    def _check_unary(self, function: str, x: float, oracle: Callable[[], ExactValue]) -> CheckResult:
        return self._strict(function, (x,), self._float(function, x), oracle())

    def _check_hypot(self, x: float, y: float, x_exact: ExactValue, y_exact: ExactValue) -> CheckResult:
        inputs = (x, y)
        bound = FUNCTION_BOUNDS["hypot"]
        h = self._float("hypot", x, y)
        h_exact = (x_exact * x_exact + y_exact * y_exact).sqrt()
        if not math.isinf(h):
            return self._strict("hypot", inputs, h, h_exact)

        # Ослабленная проверка: значение oracle ещё не correctly rounded,
        # поэтому допускается и соседнее с бесконечностью
        h2 = h_exact.to_float()
        passed = math.isinf(h2) or math.isinf(next_up(h2))
        details = (
            f"{'PASS' if passed else 'FAIL'}: inf hypot, hypot = {h!r}, "
            f"hypot as exact = {h_exact.to_nice_string()}, hypot from exact = {h2!r}"
        )
        logger.debug("hypot %r: %s", inputs, details)
        return CheckResult(
            function="inf hypot",
            inputs=inputs,
            passed=passed,
            bound=bound,
            fp_result=h,
            details=details,
        )

    def _check_pow(self, x: float, y: float, x_exact: ExactValue, y_exact: ExactValue) -> CheckResult:
        inputs = (x, y)
        bound = FUNCTION_BOUNDS["pow"]
        if not (x >= 0.0 or is_integral(y)):
            return CheckResult.skip("pow", inputs, bound, "negative base with non-integer exponent")
        try:
            p = self._float("pow", x, y)
        except ValueError:
            if x != 0.0:
                raise
            # pow(±0, y < 0): полюс
            p = math.inf
        if not math.isfinite(p):
            return CheckResult.skip("pow", inputs, bound, "non-finite result", p)

        p_exact = x_exact.pow(y_exact)
        bits = self.config.compare_precision_bits
        if p_exact.compare_to_bounded(ExactValue.from_float(p), bits) == Ordering.EQUAL:
            return CheckResult(
                function="pow",
                inputs=inputs,
                passed=True,
                bound=bound,
                fp_result=p,
                ulp_class=UlpClass.EXACT,
                details=f"PASS: result={p!r} agrees with exact value at {bits} bits",
            )
        ulp_class = approx_ulp_distance(
            p,
            p_exact,
            precision_bits=bits,
            consistency_bits=self.config.approx_consistency_bits,
        )
        result = CheckResult.measured("pow", inputs, bound, p, ulp_class)
        logger.debug("pow %r: %s", inputs, result.details)
        return result
