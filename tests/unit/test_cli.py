"""Tests for the command-line interface."""

import pytest

from shiftbook.cli import build_parser, main
from shiftbook.models import Period


@pytest.fixture
def cli_env(monkeypatch, tmp_path, storage_path, seeded_backend):
    """Point the CLI at the seeded local storage file."""
    monkeypatch.setenv("CONFIG__STORAGE__BACKEND", "local")
    monkeypatch.setenv("CONFIG__STORAGE__LOCAL__PATH", str(storage_path))
    return tmp_path / "missing.yml"


class TestParser:

    def test_summary_defaults(self):
        args = build_parser().parse_args(["summary"])
        assert args.period is Period.DAY
        assert args.date is None

    def test_series_options(self):
        args = build_parser().parse_args(["series", "--period", "month", "--today", "2024-05-08", "--length", "3"])
        assert args.period is Period.MONTH
        assert args.today.day == 8
        assert args.length == 3

    def test_rejects_unknown_period(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["summary", "--period", "year"])

    @pytest.mark.parametrize("length", ["0", "-3", "many"])
    def test_rejects_non_positive_length(self, length):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["series", "--length", length])

    def test_rejects_bad_date(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["summary", "--date", "someday"])


class TestCommands:

    def test_list(self, cli_env, capsys):
        assert main(["--config", str(cli_env), "list"]) == 0
        out = capsys.readouterr().out
        assert out.index("08.05.2024") < out.index("30.04.2024")
        assert "1400.00 ₽" in out

    def test_summary(self, cli_env, capsys):
        assert main(["--config", str(cli_env), "summary", "--period", "week", "--date", "2024-05-08"]) == 0
        out = capsys.readouterr().out
        assert "Сводка за неделю: 6 мая - 12 мая" in out
        assert "3540.00 ₽" in out

    def test_series(self, cli_env, capsys):
        assert main(["--config", str(cli_env), "series", "--period", "month", "--today", "2024-05-08"]) == 0
        out = capsys.readouterr().out
        assert "Чистыми за текущий месяц: 3540.00 ₽" in out
        assert "апр." in out

    def test_delete(self, cli_env, capsys):
        assert main(["--config", str(cli_env), "delete", "2024-05-06T07:00:00.000Z"]) == 0
        assert main(["--config", str(cli_env), "delete", "2024-05-06T07:00:00.000Z"]) == 1
        assert "not found" in capsys.readouterr().err
