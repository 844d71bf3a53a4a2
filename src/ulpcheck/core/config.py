"""
VerificationConfig: конфигурация прогона верификации.

Immutable Pydantic модель. Явно передаётся в генератор сэмплов,
checker и driver; глобального состояния (seed singleton) нет.
"""

import math
from typing import Final, Optional

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Число рандомизированных проверок в sweep фазе
RANDOM_ITERATIONS_DEFAULT: Final[int] = 200

# Точность bounded сравнений (абсолютная толерантность 2^-bits)
COMPARE_PRECISION_BITS_DEFAULT: Final[int] = 2000

# Точность self-consistency проверки oracle в strict и approx режимах
STRICT_CONSISTENCY_BITS_DEFAULT: Final[int] = 2000
APPROX_CONSISTENCY_BITS_DEFAULT: Final[int] = 1000

# Геометрическая последовательность self-test: знак чередуется, модуль растёт
SELF_TEST_START_DEFAULT: Final[float] = -1.0e-300 / 5.0
SELF_TEST_RATIO_DEFAULT: Final[float] = -1.7
SELF_TEST_MAX_STEPS_DEFAULT: Final[int] = 5000


class VerificationConfig(BaseModel):
    """
    Параметры прогона.

    seed=None означает недетерминированный seed, который генератор
    выбирает сам и сообщает в отчёте.
    """

    seed: Optional[int] = Field(None, ge=0, description="Seed для воспроизводимых прогонов")
    random_iterations: int = Field(
        RANDOM_ITERATIONS_DEFAULT, ge=0, description="Число случайных проверок"
    )
    compare_precision_bits: int = Field(
        COMPARE_PRECISION_BITS_DEFAULT, ge=64, description="Cutoff bounded сравнений (bits)"
    )
    strict_consistency_bits: int = Field(
        STRICT_CONSISTENCY_BITS_DEFAULT, ge=64, description="Self-consistency для strict ULP"
    )
    approx_consistency_bits: int = Field(
        APPROX_CONSISTENCY_BITS_DEFAULT, ge=64, description="Self-consistency для approx ULP"
    )
    self_test_start: float = Field(
        SELF_TEST_START_DEFAULT, description="Первое значение self-test последовательности"
    )
    self_test_ratio: float = Field(
        SELF_TEST_RATIO_DEFAULT, description="Множитель self-test последовательности"
    )
    self_test_max_steps: int = Field(
        SELF_TEST_MAX_STEPS_DEFAULT, gt=0, description="Предел шагов self-test"
    )

    model_config = {"frozen": True}

    @field_validator("self_test_start")
    @classmethod
    def validate_start(cls, v: float) -> float:
        """Старт должен быть конечным и ненулевым, иначе последовательность не растёт."""
        if v == 0.0 or not math.isfinite(v):
            raise ValueError(f"self_test_start must be finite and nonzero, got {v}")
        return v

    @field_validator("self_test_ratio")
    @classmethod
    def validate_ratio(cls, v: float) -> float:
        """|ratio| > 1, чтобы последовательность достигла переполнения."""
        if not math.isfinite(v) or abs(v) <= 1.0:
            raise ValueError(f"self_test_ratio must satisfy 1 < |ratio| < inf, got {v}")
        return v
