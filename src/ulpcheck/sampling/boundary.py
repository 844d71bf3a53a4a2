"""
Boundary corpus: фиксированный набор регрессионных входов

Покрывает ±0.0, ±1, ±0.5, наименьший subnormal, наименьший normal и
наибольшую конечную величину, каждый с характерным вспомогательным входом.
Плюс две регрессионные пары:
- (MAX_FINITE, -1.0128673137222576e307): hypot переполняется в бесконечность
- (-2.6718173667255144e-307, -1.1432573432387167e-308): hypot ошибался
  в одной из распространённых реализаций
"""

from typing import Final

from ulpcheck.core.domain.sample import DomainSample
from ulpcheck.core.math.float_bits import MAX_FINITE, MIN_NORMAL, MIN_SUBNORMAL

# Регрессионные пары hypot
INFINITE_HYPOT_SAMPLE: Final[DomainSample] = DomainSample(
    primary=MAX_FINITE, auxiliary=-1.0128673137222576e307
)
SUBNORMAL_HYPOT_SAMPLE: Final[DomainSample] = DomainSample(
    primary=-2.6718173667255144e-307, auxiliary=-1.1432573432387167e-308
)

BOUNDARY_CORPUS: Final[tuple[DomainSample, ...]] = (
    INFINITE_HYPOT_SAMPLE,
    SUBNORMAL_HYPOT_SAMPLE,
    # Нули обоих знаков
    DomainSample(primary=0.0, auxiliary=-0.0),
    DomainSample(primary=-0.0, auxiliary=0.0),
    DomainSample(primary=0.0, auxiliary=2.0),
    # Единицы и половины
    DomainSample(primary=1.0, auxiliary=0.5),
    DomainSample(primary=-1.0, auxiliary=3.0),
    DomainSample(primary=0.5, auxiliary=-2.0),
    DomainSample(primary=-0.5, auxiliary=0.5),
    # Края диапазона
    DomainSample(primary=MIN_SUBNORMAL, auxiliary=-1.0),
    DomainSample(primary=-MIN_SUBNORMAL, auxiliary=MIN_SUBNORMAL),
    DomainSample(primary=MIN_NORMAL, auxiliary=1.0),
    DomainSample(primary=-MIN_NORMAL, auxiliary=-MIN_NORMAL),
    DomainSample(primary=MAX_FINITE, auxiliary=2.0),
    DomainSample(primary=-MAX_FINITE, auxiliary=MAX_FINITE),
)
