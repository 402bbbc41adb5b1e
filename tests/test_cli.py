"""CLI behaviour coverage for the click command group."""

from __future__ import annotations

import re

import pytest
from click.testing import CliRunner

from lib_log_durable import __init__conf__
from lib_log_durable import cli as cli_mod

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI colour codes.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click group with ``CliRunner`` and capture output."""

    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, args or [], prog_name=__init__conf__.shell_command)
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == cli_mod.summary_info()


def test_cli_info_command_matches_summary() -> None:
    exit_code, stdout, _ = run_cli(["info"])

    assert exit_code == 0
    assert stdout == cli_mod.summary_info()
    assert "Info for lib_log_durable:" in stdout
    assert f"version       = {__init__conf__.version}" in stdout


def test_cli_version_flag() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == f"lib_log_durable version {__init__conf__.version}"


@pytest.mark.parametrize("mode, batches", [("immediate", "6"), ("deferred", "1")])
def test_cli_demo_reports_batches_per_mode(mode: str, batches: str) -> None:
    exit_code, stdout, exception = run_cli(["demo", "--mode", mode, "--user", "carol"])

    assert exception is None
    assert exit_code == 0
    plain = strip_ansi(stdout)
    assert f"mode={mode} batches={batches} events=6 user=carol" in plain
    assert "order received" in plain
    assert "CLIENT RESPONSE: 504 Gateway Timeout" in plain


def test_cli_demo_forwards_options(monkeypatch: pytest.MonkeyPatch) -> None:
    recorded: dict[str, object] = {}

    def fake_logdemo(**kwargs: object) -> dict[str, object]:
        recorded.update(kwargs)
        return {"mode": "immediate", "user": "x", "batches": 0, "events": 0}

    monkeypatch.setattr(cli_mod, "_logdemo", fake_logdemo)

    exit_code, _stdout, _ = run_cli(["demo", "--mode", "IMMEDIATE"])

    assert exit_code == 0
    assert recorded == {"immediate": True, "user": "demo-user"}


def test_cli_demo_rejects_unknown_mode() -> None:
    exit_code, stdout, _ = run_cli(["demo", "--mode", "eventually"])

    assert exit_code != 0
    assert "eventually" in stdout


def test_main_returns_zero_on_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_mod.main(["info"]) == 0
    assert "Info for lib_log_durable:" in capsys.readouterr().out


def test_main_translates_usage_errors(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli_mod.main(["no-such-command"])

    assert exit_code == 2
    assert "No such command" in capsys.readouterr().err
