"""Verification Driver: последовательный прогон фаз верификации.

SELF_TEST -> BOUNDARY_CORPUS -> RANDOM_SWEEP -> PASSED (или FAILED из любой фазы)
"""

from .state_machine import (
    PhaseTransition,
    VerificationDriver,
    VerificationPhase,
    VerificationReport,
)

__all__ = [
    "PhaseTransition",
    "VerificationDriver",
    "VerificationPhase",
    "VerificationReport",
]
