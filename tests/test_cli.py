"""
test_cli.py - Testes para o CLI de scaffolding (tron create/build/start)

Propósito:
    Validar arquivos gerados por create e a delegação ao toolchain
    externo, com subprocess.run mockado.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

from tron_lsp.cli import (
    DEFAULT_DESCRIPTOR,
    DEFAULT_ENTRY,
    TOOLCHAIN_DIR,
    main,
    run_command,
)


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_create_writes_starter_files(tmp_path):
    with patch("tron_lsp.cli.subprocess.run", return_value=_completed()) as mock_run:
        assert main(["create", "--path", str(tmp_path)]) == 0

    assert (tmp_path / "tron.toml").read_text(encoding="utf-8") == DEFAULT_DESCRIPTOR
    assert (tmp_path / "main.tron").read_text(encoding="utf-8") == DEFAULT_ENTRY

    cmd = mock_run.call_args[0][0]
    assert cmd == ["npm", "install", "tron-lang"]
    assert mock_run.call_args.kwargs["cwd"] == str(tmp_path)


def test_descriptor_defaults():
    assert 'name = "TronProject"' in DEFAULT_DESCRIPTOR
    assert 'entry = "main"' in DEFAULT_DESCRIPTOR
    assert 'version = "0.0.1"' in DEFAULT_DESCRIPTOR
    assert DEFAULT_ENTRY == 'print "Hello, World!";\n'


def test_create_survives_missing_npm(tmp_path, capsys):
    """npm ausente é reportado, mas create não falha."""
    with patch("tron_lsp.cli.subprocess.run", side_effect=FileNotFoundError("npm")):
        assert main(["create", "--path", str(tmp_path)]) == 0

    assert (tmp_path / "main.tron").exists()
    assert "error:" in capsys.readouterr().err


def test_build_runs_cargo_in_toolchain_dir(tmp_path):
    with patch("tron_lsp.cli.subprocess.run", return_value=_completed(stdout="ok")) as mock_run:
        assert main(["build", "--path", str(tmp_path)]) == 0

    assert mock_run.call_args[0][0] == ["cargo", "build"]
    assert mock_run.call_args.kwargs["cwd"] == str(tmp_path / TOOLCHAIN_DIR)


def test_start_runs_cargo_run(tmp_path):
    with patch("tron_lsp.cli.subprocess.run", return_value=_completed()) as mock_run:
        assert main(["start", "--path", str(tmp_path)]) == 0

    assert mock_run.call_args[0][0] == ["cargo", "run"]


def test_build_failure_reports_stderr(tmp_path, capsys):
    failed = _completed(returncode=101, stderr="could not compile")
    with patch("tron_lsp.cli.subprocess.run", return_value=failed):
        assert main(["build", "--path", str(tmp_path)]) == 0

    err = capsys.readouterr().err
    assert "error:" in err
    assert "stderr: could not compile" in err


def test_run_command_echoes_stdout(capsys):
    with patch("tron_lsp.cli.subprocess.run", return_value=_completed(stdout="built")):
        assert run_command(["cargo", "build"], cwd=Path(".")) == 0
    assert "stdout: built" in capsys.readouterr().out


def test_run_command_stderr_without_failure(capsys):
    with patch("tron_lsp.cli.subprocess.run", return_value=_completed(stderr="warning: unused")):
        assert run_command(["cargo", "build"], cwd=Path(".")) == 0
    assert "stderr: warning: unused" in capsys.readouterr().err


def test_help_and_unknown_commands(capsys):
    assert main([]) == 0
    assert main(["help"]) == 0
    assert main(["frobnicate"]) == 0
    assert "create" in capsys.readouterr().out
