"""Tests for the click command surface."""
from __future__ import annotations

import pytest
from click.testing import CliRunner

import main
from main import cli


@pytest.fixture()
def runner(monkeypatch, tmp_path):
    monkeypatch.delenv("DIGGER_LOG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_new_appends_extension_and_creates_file(runner, tmp_path):
    result = runner.invoke(cli, ["new", "board"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "board.toml").exists()
    assert "board.toml" in result.output


def test_new_leaves_existing_file(runner, tmp_path):
    (tmp_path / "board.toml").write_text("ticket_data = []\n", encoding="utf-8")
    result = runner.invoke(cli, ["new", "board.toml"])
    assert result.exit_code == 0
    assert "already exists" in result.output
    assert (tmp_path / "board.toml").read_text(encoding="utf-8") == "ticket_data = []\n"


def test_run_missing_file_fails_before_session(runner, tmp_path, monkeypatch):
    launched = []
    monkeypatch.setattr(main, "run_session", lambda *a, **k: launched.append(a))
    result = runner.invoke(cli, ["run", "absent"])
    assert result.exit_code == 1
    assert "was not found" in result.output
    assert launched == []
    assert not (tmp_path / "absent.toml").exists()


def test_run_empty_file_reports_error(runner, tmp_path, monkeypatch):
    (tmp_path / "empty.toml").write_text("", encoding="utf-8")
    launched = []
    monkeypatch.setattr(main, "run_session", lambda *a, **k: launched.append(a))
    result = runner.invoke(cli, ["run", "empty"])
    assert result.exit_code == 1
    assert "empty" in result.output
    assert launched == []


def test_run_launches_session_with_loaded_tickets(runner, tmp_path, monkeypatch):
    assert runner.invoke(cli, ["new", "board"]).exit_code == 0
    seen = []
    monkeypatch.setattr(main, "run_session", lambda session, settings: seen.append(session))
    result = runner.invoke(cli, ["run", "board"])
    assert result.exit_code == 0, result.output
    assert len(seen) == 1
    assert len(seen[0]) == 1


def test_run_without_terminal_fails_cleanly(runner, tmp_path):
    assert runner.invoke(cli, ["new", "board"]).exit_code == 0
    result = runner.invoke(cli, ["run", "board"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert main.__version__ in result.output


def test_unusable_log_file_reports_error(runner, tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setenv("DIGGER_LOG_FILE", str(blocker / "digger.log"))
    result = runner.invoke(cli, ["new", "board"])
    assert result.exit_code == 1
    assert "Error: Cannot open log file" in result.output
    assert not isinstance(result.exception, OSError)
    assert not (tmp_path / "board.toml").exists()
