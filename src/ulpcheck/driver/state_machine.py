"""Verification Driver: фазовый автомат прогона верификации.

Фазы строго последовательны, отказ любой фазы фатален:
- SELF_TEST: ULP-distance движок на соседних double (геометрическая последовательность)
- BOUNDARY_CORPUS: фиксированные граничные и регрессионные входы
- RANDOM_SWEEP: random_iterations свежих случайных сэмплов
- PASSED / FAILED: терминальные состояния

VerificationFailure фиксируется в отчёте; любое другое исключение
пробрасывается без изменений.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional
import logging
import math
import time

from ulpcheck.checker.bound_checker import ErrorBoundChecker
from ulpcheck.core.config import VerificationConfig
from ulpcheck.core.domain.sample import DomainSample
from ulpcheck.core.domain.ulp_class import UlpClass
from ulpcheck.core.errors import SelfTestFailure, VerificationFailure
from ulpcheck.core.math.float_bits import next_down
from ulpcheck.core.math.ulp_distance import ulp_distance
from ulpcheck.oracle.exact_value import ExactValue
from ulpcheck.sampling.boundary import BOUNDARY_CORPUS
from ulpcheck.sampling.generator import SampleGenerator

logger = logging.getLogger(__name__)


class VerificationPhase(str, Enum):
    """Фаза прогона."""
    PENDING = "PENDING"
    SELF_TEST = "SELF_TEST"
    BOUNDARY_CORPUS = "BOUNDARY_CORPUS"
    RANDOM_SWEEP = "RANDOM_SWEEP"
    PASSED = "PASSED"
    FAILED = "FAILED"


TERMINAL_PHASES = frozenset({VerificationPhase.PASSED, VerificationPhase.FAILED})


@dataclass(frozen=True)
class PhaseTransition:
    """Один переход фазового автомата."""

    previous_phase: VerificationPhase
    new_phase: VerificationPhase
    reason: str
    elapsed_seconds: float


@dataclass(frozen=True)
class VerificationReport:
    """Итог прогона верификации."""

    final_phase: VerificationPhase
    passed: bool
    seed: int

    # Счётчики
    self_test_steps: int
    boundary_samples_checked: int
    random_samples_checked: int

    elapsed_seconds: float
    transitions: tuple[PhaseTransition, ...]

    # Отказ (None при успехе)
    failed_phase: Optional[VerificationPhase] = None
    failure: Optional[str] = None

    @property
    def samples_checked(self) -> int:
        return self.boundary_samples_checked + self.random_samples_checked

    def summary(self) -> str:
        """Однострочная сводка для CLI."""
        if self.passed:
            return (
                f"PASSED seed={self.seed} self_test_steps={self.self_test_steps} "
                f"samples={self.samples_checked} elapsed={self.elapsed_seconds:.2f}s"
            )
        return (
            f"FAILED in {self.failed_phase.value if self.failed_phase else '?'} "
            f"seed={self.seed}: {self.failure}"
        )


class VerificationDriver:
    """Driver прогона: SELF_TEST -> BOUNDARY_CORPUS -> RANDOM_SWEEP -> PASSED.

    Каждая фаза доступна отдельно (run_self_test, run_boundary_corpus,
    run_random_sweep) и бросает VerificationFailure на первом отказе.
    run() проходит все фазы и возвращает VerificationReport.

    Driver одноразовый: повторный run() запрещён.
    """

    def __init__(
        self,
        config: Optional[VerificationConfig] = None,
        checker: Optional[ErrorBoundChecker] = None,
        generator: Optional[SampleGenerator] = None,
        corpus: Iterable[DomainSample] = BOUNDARY_CORPUS,
    ):
        """
        Args:
            config: параметры прогона
            checker: checker границ (по умолчанию ErrorBoundChecker(config))
            generator: источник случайных сэмплов (по умолчанию SampleGenerator(config.seed))
            corpus: граничные входы
        """
        self.config = config or VerificationConfig()
        self.checker = checker or ErrorBoundChecker(self.config)
        self.generator = generator or SampleGenerator(self.config.seed)
        self.corpus = tuple(corpus)

        self.phase = VerificationPhase.PENDING
        self._transitions: List[PhaseTransition] = []
        self._started_at: Optional[float] = None

    # -------------------------------------------------------------------------
    # Фазы
    # -------------------------------------------------------------------------

    def run_self_test(self) -> int:
        """Self-test ULP-distance движка.

        x начинается с self_test_start и умножается на self_test_ratio до
        переполнения. Для каждого x с предшественниками prev и prevprev:
        - ulp_distance(x, x) == EXACT
        - (prev, x) и (x, prev) == WITHIN_2
        - (prevprev, x) и (x, prevprev) == WRONG

        Returns:
            Число проверенных значений x

        Raises:
            SelfTestFailure: неверная классификация
        """
        x = self.config.self_test_start
        steps = 0
        while math.isfinite(x) and steps < self.config.self_test_max_steps:
            self._self_test_point(x)
            x *= self.config.self_test_ratio
            steps += 1
        logger.info("self-test checked %d values", steps)
        return steps

    def _self_test_point(self, x: float) -> None:
        self._expect(x, x, UlpClass.EXACT)
        prev = next_down(x)
        if not math.isfinite(prev):
            return
        self._expect(prev, x, UlpClass.WITHIN_2)
        self._expect(x, prev, UlpClass.WITHIN_2)
        prevprev = next_down(prev)
        if not math.isfinite(prevprev):
            return
        self._expect(prevprev, x, UlpClass.WRONG)
        self._expect(x, prevprev, UlpClass.WRONG)

    def _expect(self, fp: float, exact: float, expected: UlpClass) -> None:
        actual = ulp_distance(
            fp,
            ExactValue.from_float(exact),
            consistency_bits=self.config.strict_consistency_bits,
        )
        if actual != expected:
            raise SelfTestFailure(
                f"ulp_distance({fp!r}, {exact!r}) = {actual.name}, expected {expected.name}"
            )

    def run_boundary_corpus(self) -> int:
        """Проверка всех граничных входов. Returns: число сэмплов."""
        for index, sample in enumerate(self.corpus):
            logger.debug("boundary sample %d: %r", index, sample.as_tuple())
            self.checker.check_sample(sample)
        logger.info("boundary corpus checked %d samples", len(self.corpus))
        return len(self.corpus)

    def run_random_sweep(self) -> int:
        """Проверка random_iterations случайных сэмплов. Returns: число сэмплов."""
        count = 0
        for sample in self.generator.samples(self.config.random_iterations):
            logger.debug("random sample %d: %r", count, sample.as_tuple())
            self.checker.check_sample(sample)
            count += 1
        logger.info("random sweep checked %d samples (seed %d)", count, self.generator.seed)
        return count

    # -------------------------------------------------------------------------
    # Полный прогон
    # -------------------------------------------------------------------------

    def run(self) -> VerificationReport:
        """Прогон всех фаз.

        Returns:
            VerificationReport; passed=False если какая-либо фаза отказала

        Raises:
            RuntimeError: driver уже запускался
        """
        if self.phase != VerificationPhase.PENDING:
            raise RuntimeError(f"driver already ran (phase {self.phase.value})")
        self._started_at = time.monotonic()
        logger.info("verification started, seed %d", self.generator.seed)

        self_test_steps = 0
        boundary_checked = 0
        random_checked = 0
        failed_phase: Optional[VerificationPhase] = None
        failure: Optional[str] = None

        try:
            self._transition(VerificationPhase.SELF_TEST, "start")
            self_test_steps = self.run_self_test()

            self._transition(VerificationPhase.BOUNDARY_CORPUS, "self-test passed")
            boundary_checked = self.run_boundary_corpus()

            self._transition(VerificationPhase.RANDOM_SWEEP, "boundary corpus passed")
            random_checked = self.run_random_sweep()

            self._transition(VerificationPhase.PASSED, "random sweep passed")
        except VerificationFailure as exc:
            failed_phase = self.phase
            failure = str(exc)
            logger.error("%s failed: %s", failed_phase.value, failure)
            self._transition(VerificationPhase.FAILED, f"{type(exc).__name__}: {failure}")

        return VerificationReport(
            final_phase=self.phase,
            passed=self.phase == VerificationPhase.PASSED,
            seed=self.generator.seed,
            self_test_steps=self_test_steps,
            boundary_samples_checked=boundary_checked,
            random_samples_checked=random_checked,
            elapsed_seconds=self._elapsed(),
            transitions=tuple(self._transitions),
            failed_phase=failed_phase,
            failure=failure,
        )

    def _elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return time.monotonic() - self._started_at

    def _transition(self, new_phase: VerificationPhase, reason: str) -> None:
        if self.phase in TERMINAL_PHASES:
            raise RuntimeError(f"no transitions out of terminal phase {self.phase.value}")
        transition = PhaseTransition(
            previous_phase=self.phase,
            new_phase=new_phase,
            reason=reason,
            elapsed_seconds=self._elapsed(),
        )
        self._transitions.append(transition)
        logger.info("%s -> %s (%s)", self.phase.value, new_phase.value, reason)
        self.phase = new_phase
