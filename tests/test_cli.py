"""
Command-line interface.
"""
import sys

import pytest

import cli


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["cli.py", *args])
    cli.main()


def test_no_command_prints_help(monkeypatch, capsys):
    run_cli(monkeypatch)
    assert "Commands:" in capsys.readouterr().out


def test_unknown_command_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "frobnicate")

    assert exc.value.code == 1
    assert "Unknown command: frobnicate" in capsys.readouterr().out


def test_tables_command(monkeypatch, capsys):
    monkeypatch.setenv("DB_CONNECTION_STRING", "sqlite://")
    run_cli(monkeypatch, "tables")

    out = capsys.readouterr().out
    assert "Successfully connected to the database!" in out
    assert "Public Tables in the Database" in out


def test_health_command_reports_unhealthy_without_table(monkeypatch, capsys):
    monkeypatch.setenv("DB_CONNECTION_STRING", "sqlite://")
    run_cli(monkeypatch, "health")

    out = capsys.readouterr().out
    assert "Unhealthy" in out


def test_missing_configuration_exits(monkeypatch, capsys):
    monkeypatch.delenv("DB_CONNECTION_STRING", raising=False)
    monkeypatch.chdir("/")

    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "tables")

    assert exc.value.code == 1
    assert "DB_CONNECTION_STRING" in capsys.readouterr().err


def test_serve_exits_when_database_unreachable(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("DB_CONNECTION_STRING", f"sqlite:///{tmp_path}/nope/posts.db")

    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "serve")

    assert exc.value.code == 1
    assert "Failed to ping" in capsys.readouterr().err
