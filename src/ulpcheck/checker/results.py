"""
CheckResult: результат проверки одной функции в одной точке.
"""

from dataclasses import dataclass
from typing import Optional

from ulpcheck.core.domain.ulp_class import UlpClass


@dataclass(frozen=True)
class CheckResult:
    """Результат проверки функции."""

    function: str
    inputs: tuple[float, ...]
    passed: bool
    bound: UlpClass

    # Пропуск: предусловие не выполнено либо float результат нефинитный
    skipped: bool = False
    skip_reason: str = ""

    # Измерения (None если проверка пропущена или ulp не измерялся)
    fp_result: Optional[float] = None
    ulp_class: Optional[UlpClass] = None

    # Детали
    details: str = ""

    @classmethod
    def skip(
        cls,
        function: str,
        inputs: tuple[float, ...],
        bound: UlpClass,
        reason: str,
        fp_result: Optional[float] = None,
    ) -> "CheckResult":
        return cls(
            function=function,
            inputs=inputs,
            passed=True,
            bound=bound,
            skipped=True,
            skip_reason=reason,
            fp_result=fp_result,
            details=f"SKIP: {reason}",
        )

    @classmethod
    def measured(
        cls,
        function: str,
        inputs: tuple[float, ...],
        bound: UlpClass,
        fp_result: float,
        ulp_class: UlpClass,
    ) -> "CheckResult":
        passed = ulp_class <= bound
        verdict = "PASS" if passed else "FAIL"
        return cls(
            function=function,
            inputs=inputs,
            passed=passed,
            bound=bound,
            fp_result=fp_result,
            ulp_class=ulp_class,
            details=f"{verdict}: result={fp_result!r}, ulp={ulp_class.name}, bound={bound.name}",
        )
