"""Sampling: источники входов для верификации.

- SampleGenerator: случайные конечные double с явным seed
- BOUNDARY_CORPUS: фиксированные граничные и регрессионные входы
"""

from .boundary import BOUNDARY_CORPUS, INFINITE_HYPOT_SAMPLE, SUBNORMAL_HYPOT_SAMPLE
from .generator import SampleGenerator

__all__ = [
    "BOUNDARY_CORPUS",
    "INFINITE_HYPOT_SAMPLE",
    "SUBNORMAL_HYPOT_SAMPLE",
    "SampleGenerator",
]
