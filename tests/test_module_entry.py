"""Module entry stories ensuring `python -m` mirrors the CLI."""

from __future__ import annotations

import runpy
import subprocess
import sys

import pytest

from freesend import __init__conf__, entry
from freesend.adapters import cli as cli_mod


@pytest.mark.os_agnostic
def test_module_entry_executes_cli_and_shows_help(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """python -m invocation with no args shows help and exits 0."""
    monkeypatch.setattr(sys, "argv", ["freesend"], raising=False)

    with pytest.raises(SystemExit) as exc:
        runpy.run_module("freesend.__main__", run_name="__main__")

    captured = capsys.readouterr()
    assert exc.value.code == 0
    assert "Usage:" in captured.out
    assert __init__conf__.shell_command in captured.out


@pytest.mark.os_agnostic
def test_module_entry_usage_error_exits_nonzero(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A usage error through module entry exits 2."""
    monkeypatch.setattr(sys, "argv", ["freesend", "send"], raising=False)

    with pytest.raises(SystemExit) as exc:
        runpy.run_module("freesend.__main__", run_name="__main__")

    assert exc.value.code == 2
    assert "--subject" in capsys.readouterr().err


@pytest.mark.os_agnostic
def test_module_entry_cli_exports_all_registered_commands() -> None:
    """CLI facade exports all registered commands."""
    expected_commands = {"cli_config", "cli_config_deploy", "cli_info", "cli_payload", "cli_send"}
    exported = {name for name in dir(cli_mod) if name.startswith("cli_")}
    assert expected_commands.issubset(exported)


@pytest.mark.os_agnostic
def test_module_entry_subprocess_help() -> None:
    """Verify `python -m freesend --help` works via subprocess."""
    result = subprocess.run(  # noqa: S603
        [sys.executable, "-m", "freesend", "--help"],
        capture_output=True,
        timeout=30,
        check=False,
        # rich-click output is Unicode; cp1252 consoles cannot decode it
        encoding="utf-8",
        errors="replace",
    )
    assert result.returncode == 0
    assert "Usage:" in result.stdout
    assert __init__conf__.shell_command in result.stdout


@pytest.mark.os_agnostic
def test_module_entry_subprocess_version() -> None:
    """Verify `python -m freesend --version` outputs version."""
    result = subprocess.run(  # noqa: S603
        [sys.executable, "-m", "freesend", "--version"],
        capture_output=True,
        timeout=30,
        check=False,
        encoding="utf-8",
        errors="replace",
    )
    assert result.returncode == 0
    assert __init__conf__.version in result.stdout


@pytest.mark.os_agnostic
def test_entry_main_invokes_cli_with_help(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """entry.main() wires production services and invokes the CLI."""
    monkeypatch.setattr(sys, "argv", ["freesend", "--help"])

    exit_code = entry.main()

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Usage:" in captured.out
    assert "send" in captured.out


@pytest.mark.os_agnostic
def test_entry_main_returns_nonzero_on_error(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """entry.main() returns the CLI's exit code on errors."""
    monkeypatch.setattr(sys, "argv", ["freesend", "no-such-command"])

    exit_code = entry.main()

    assert exit_code != 0
    assert "No such command" in capsys.readouterr().err
