"""
Тесты для command line entry point

Проверяет:
1. Успешный прогон: exit 0 и сводка в stdout
2. Отказ верификации: exit 1
3. Ошибки использования: exit 2 (argparse)
"""

import pytest

from ulpcheck import cli
from ulpcheck.driver import VerificationPhase, VerificationReport


class FailingDriver:
    """Driver, всегда возвращающий отказ."""

    def __init__(self, config):
        self.config = config

    def run(self):
        return VerificationReport(
            final_phase=VerificationPhase.FAILED,
            passed=False,
            seed=self.config.seed,
            self_test_steps=0,
            boundary_samples_checked=0,
            random_samples_checked=0,
            elapsed_seconds=0.0,
            transitions=(),
            failed_phase=VerificationPhase.SELF_TEST,
            failure="boom",
        )


class TestCli:
    """Тесты CLI."""

    def test_success(self, capsys):
        exit_code = cli.main(["7", "--iterations", "1", "--log-level", "WARNING"])
        assert exit_code == 0
        assert capsys.readouterr().out.startswith("PASSED seed=7")

    def test_failure_exit_code(self, capsys, monkeypatch):
        monkeypatch.setattr(cli, "VerificationDriver", FailingDriver)
        exit_code = cli.main(["3"])
        assert exit_code == 1
        assert "FAILED in SELF_TEST seed=3: boom" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "argv",
        [
            ["not-a-seed"],
            ["--iterations", "-1"],
            ["-5"],
            ["--log-level", "LOUD"],
        ],
    )
    def test_bad_usage(self, argv):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(argv)
        assert exc_info.value.code == 2

    def test_parser_defaults(self):
        args = cli.build_parser().parse_args([])
        assert args.seed is None
        assert args.iterations == 200
        assert args.log_level == "INFO"
