from pathlib import Path

import pytest
from typer.testing import CliRunner

from locenv.cli import app

runner = CliRunner()


def test_locate_command_reports_match(project_tree: Path) -> None:
    start = project_tree / "services" / "api" / "src"

    result = runner.invoke(
        app,
        ["locate", "--profile", "production", "--start", str(start), "--ceiling", str(project_tree)],
    )

    assert result.exit_code == 0
    assert str(project_tree / ".env.production") in result.output
    assert "Profile: production" in result.output


def test_locate_command_reads_profile_variable(project_tree: Path) -> None:
    result = runner.invoke(
        app,
        ["locate", "--profile-var", "DEPLOY_ENV", "--start", str(project_tree), "--ceiling", str(project_tree)],
        env={"DEPLOY_ENV": "staging"},
    )

    assert result.exit_code == 0
    assert "Profile: staging" in result.output


def test_locate_command_exits_when_missing(project_tree: Path) -> None:
    result = runner.invoke(
        app,
        ["locate", "-p", "mine", "-s", str(project_tree), "-c", str(project_tree)],
    )

    assert result.exit_code == 1
    assert "No .env.mine file found" in result.output


def test_load_command_lists_keys(tmp_path: Path) -> None:
    (tmp_path / ".env.dev").write_text("TEST_VAR=test\nSECRET=hunter2\n", encoding="utf-8")

    result = runner.invoke(
        app,
        ["load", "-p", "dev", "-s", str(tmp_path), "-c", str(tmp_path)],
        env={"TEST_VAR": None, "SECRET": None},
    )

    assert result.exit_code == 0
    assert "Loaded 'dev' environment" in result.output
    assert "• TEST_VAR" in result.output
    assert "hunter2" not in result.output


def test_load_command_exports_for_shell(tmp_path: Path) -> None:
    (tmp_path / ".env.dev").write_text('GREETING="hello world"\n', encoding="utf-8")

    result = runner.invoke(
        app,
        ["load", "-p", "dev", "-s", str(tmp_path), "-c", str(tmp_path), "--export"],
        env={"GREETING": None},
    )

    assert result.exit_code == 0
    assert "export GREETING='hello world'" in result.stdout


def test_load_command_reports_parse_errors(tmp_path: Path) -> None:
    (tmp_path / ".env.dev").write_text("NOT VALID LINE\n", encoding="utf-8")

    result = runner.invoke(app, ["load", "-p", "dev", "-s", str(tmp_path), "-c", str(tmp_path)])

    assert result.exit_code == 1
    assert "Malformed statement" in result.output


def test_load_command_writes_log(tmp_path: Path) -> None:
    (tmp_path / ".env.dev").write_text("A=1\n", encoding="utf-8")
    log_dir = tmp_path / "logs"

    result = runner.invoke(
        app,
        ["load", "-p", "dev", "-s", str(tmp_path), "-c", str(tmp_path), "--log-dir", str(log_dir)],
        env={"A": None},
    )

    assert result.exit_code == 0
    assert "Recorded 1 events (0 errors)." in result.output
    log_files = list(log_dir.glob("locenv_*.log"))
    assert len(log_files) == 1
    assert "[I001]" in log_files[0].read_text(encoding="utf-8")


def test_candidates_command_marks_active_profile(project_tree: Path) -> None:
    result = runner.invoke(
        app,
        ["candidates", "-p", "staging", "-s", str(project_tree), "-c", str(project_tree)],
    )

    assert result.exit_code == 0
    assert "Active profile: 'staging'" in result.output
    assert "✔ config/.env.staging" in result.output
    assert ".env.production" in result.output


def test_locate_command_accepts_relative_start(
    project_tree: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(project_tree)

    result = runner.invoke(
        app, ["locate", "-p", "production", "--start", "services/api", "-c", str(project_tree)]
    )

    assert result.exit_code == 0
    assert "Profile: production" in result.output
