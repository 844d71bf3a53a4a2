"""
Таксономия фатальных ошибок верификации.

Все ошибки неустранимы в точке обнаружения: harness является pass/fail
верификатором, частичные отказы не допускаются.

- InternalConsistencyError: oracle не прошёл self-consistency проверку
- ComparabilityError: strict сравнение не смогло доказать порядок операндов
- BoundViolation: измеренный ULP класс превышает допустимую границу функции
"""

from typing import Optional


class VerificationFailure(AssertionError):
    """Базовый класс всех фатальных отказов верификации."""


class InternalConsistencyError(VerificationFailure):
    """
    Oracle нарушил собственную внутреннюю согласованность.

    Указывает на дефект exact-value oracle, а не тестируемой функции.
    """


class ComparabilityError(VerificationFailure, ArithmeticError):
    """
    Strict сравнение вызвано для операндов, порядок которых нельзя доказать.

    Сигнализирует о неверном использовании strict ULP-distance пути:
    вызывающий обязан гарантировать доказуемую сравнимость своих входов.
    """


class BoundViolation(VerificationFailure):
    """
    Функция превысила документированную границу ошибки.

    Сообщение содержит имя функции и входы для воспроизведения.
    """

    def __init__(
        self,
        function: str,
        inputs: tuple[float, ...],
        ulp_class: Optional[int] = None,
        bound: Optional[int] = None,
        details: str = "",
    ):
        self.function = function
        self.inputs = inputs
        self.ulp_class = ulp_class
        self.bound = bound
        self.details = details
        rendered = ", ".join(repr(v) for v in inputs)
        message = f"{function}: {rendered}"
        if details:
            message = f"{message} ({details})"
        super().__init__(message)


class SelfTestFailure(VerificationFailure):
    """
    ULP-distance engine дал неверную классификацию на заведомо известных входах.

    Self-test сравнивает соседние double между собой, поэтому отказ
    указывает на дефект самого движка, а не тестируемой библиотеки.
    """
