from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from devil_roulette.tools import simulate
from devil_roulette.tools.simulate import app

runner = CliRunner()


def test_run_command_prints_summary_and_signature(tmp_path: Path) -> None:
    args = ["run", "--seed", "93", "--settings", str(tmp_path / "settings.json"), "--quiet"]
    first = runner.invoke(app, args)
    second = runner.invoke(app, args)
    assert first.exit_code == 0, first.output
    assert "Run Summary" in first.output
    assert "Deterministic signature" in first.output
    assert first.output == second.output


def test_run_command_writes_logs(tmp_path: Path) -> None:
    logs_dir = tmp_path / "logs"
    result = runner.invoke(
        app,
        ["run", "--seed", "4", "--settings", str(tmp_path / "settings.json"), "--logs-dir", str(logs_dir), "--quiet"],
    )
    assert result.exit_code == 0, result.output
    assert (logs_dir / "latest.log").exists()
    assert (logs_dir / "gameplay.log").read_text(encoding="utf-8")


def test_sweep_command_reports_winners() -> None:
    result = runner.invoke(app, ["sweep", "--start", "1", "--count", "5"])
    assert result.exit_code == 0, result.output
    assert "Winners:" in result.output


def test_sweep_command_exits_cleanly_when_a_run_stalls(monkeypatch: pytest.MonkeyPatch) -> None:
    def stalled(seed, policy):
        raise RuntimeError("Battle exceeded the action cap.")

    monkeypatch.setattr(simulate, "run_simulation", stalled)
    result = runner.invoke(app, ["sweep", "--start", "3", "--count", "2"])
    assert result.exit_code == 1
    assert "Sweep aborted at seed 3" in result.output
