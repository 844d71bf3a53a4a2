"""
DomainSample: пара входов для одной проверки функций.

Immutable Pydantic модель. Оба значения гарантированно конечны
(NaN и бесконечности отклоняются при валидации).
"""

import math

from pydantic import BaseModel, Field, field_validator


class DomainSample(BaseModel):
    """
    Пара 64-bit float входов.

    primary используется всеми функциями, auxiliary только бинарными
    (y/x, hypot, pow).
    """

    primary: float = Field(..., description="Основной вход x")
    auxiliary: float = Field(..., description="Вспомогательный вход y для бинарных функций")

    model_config = {"frozen": True}

    @field_validator("primary", "auxiliary")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        """NaN/Inf недопустимы: oracle не определён на нефинитных входах."""
        if not math.isfinite(v):
            raise ValueError(f"sample value must be finite, got {v!r}")
        return v

    def as_tuple(self) -> tuple[float, float]:
        return (self.primary, self.auxiliary)
