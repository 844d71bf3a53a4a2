"""
UlpClass и Ordering: дискретные результаты сравнения.

UlpClass упорядочен по серьёзности, поэтому граница функции проверяется
обычным сравнением: `ulp_class <= UlpClass.WITHIN_1`.
"""

from enum import IntEnum


class UlpClass(IntEnum):
    """
    Классификация расстояния между float и точным значением.

    - EXACT: fp является (одним из) ближайших представимых значений
    - WITHIN_1: fp соседнее с ближайшим значением (ошибка < 1 ulp)
    - WITHIN_2: fp отстоит на одно представимое значение от брекета
    - WRONG: ошибка больше 2 ulp
    """

    EXACT = 0
    WITHIN_1 = 1
    WITHIN_2 = 2
    WRONG = 3


class Ordering(IntEnum):
    """Результат трёхстороннего сравнения двух точных значений."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    @classmethod
    def from_sign(cls, sign: int) -> "Ordering":
        if sign < 0:
            return cls.LESS
        if sign > 0:
            return cls.GREATER
        return cls.EQUAL
