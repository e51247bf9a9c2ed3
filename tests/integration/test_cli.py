"""
tests/integration/test_cli.py
=============================
Tests for scripts/diagnose.py, driven through main(argv).
"""

import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "diagnose.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("diagnose_cli", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_conflict_report(cli, capsys):
    assert cli.main(["problem1", "--backend", "dpll"]) == 0
    out = capsys.readouterr().out
    assert "Running diagnostics on problem1" in out
    assert "CONFLICT FOUND" in out
    assert "Union: {a1, a2}" in out


def test_hypothesis_resolves_conflict(cli, capsys):
    assert cli.main(["problem2", "--hs", "a1"]) == 0
    assert "NO CONFLICT" in capsys.readouterr().out


def test_timeout_option(cli, capsys):
    assert cli.main(["problem3", "--timeout-ms", "5000"]) == 0
    assert "Union: {a1, a2, o1}" in capsys.readouterr().out


def test_list(cli, capsys):
    assert cli.main(["--list"]) == 0
    names = capsys.readouterr().out.split()
    assert {"problem1", "problem2", "problem3", "problem_fa"} <= set(names)


def test_unknown_problem(cli, capsys):
    assert cli.main(["no_such_problem"]) == 1
    assert "not found" in capsys.readouterr().err


def test_invalid_hypothesis(cli, capsys):
    assert cli.main(["problem1", "--hs", "zz"]) == 2
    assert "Invalid diagnosis problem" in capsys.readouterr().err


def test_version(cli, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == "MBD-Core 0.1.0"
