from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from skillbridge.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def test_cli_heuristic_evaluation_writes_output(tmp_path: Path, runner: CliRunner) -> None:
    profile_path = tmp_path / "profile.json"
    config_path = tmp_path / "config.yaml"
    output_path = tmp_path / "out" / "evaluation.json"

    write_json(
        profile_path,
        {
            "fullName": "Ann",
            "skills": "react, node.js, sql, docker",
            "experience": "3 years",
            "education": "Bachelor of Engineering",
        },
    )
    config_path.write_text("heuristic:\n  seed: 5\nengine:\n  default_mode: heuristic\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "evaluate",
            "--profile",
            str(profile_path),
            "--config",
            str(config_path),
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0, result.output
    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    assert rendered["source"] == "heuristic"
    assert rendered["readinessScore"] == 100
    assert rendered["eligibility"] == "Eligible"
    assert len(rendered["strengths"]) == 4


def test_cli_reports_missing_fields(tmp_path: Path, runner: CliRunner) -> None:
    profile_path = tmp_path / "profile.json"
    write_json(profile_path, {"fullName": "Ann"})

    result = runner.invoke(app, ["evaluate", "--profile", str(profile_path), "--mode", "heuristic"])

    assert result.exit_code == 1


def test_cli_generative_without_key_fails_cleanly(
    tmp_path: Path, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    profile_path = tmp_path / "profile.json"
    write_json(profile_path, {"fullName": "Ann", "skills": "react"})

    result = runner.invoke(app, ["evaluate", "--profile", str(profile_path), "--mode", "generative"])

    assert result.exit_code == 1


def test_cli_rejects_invalid_config(tmp_path: Path, runner: CliRunner) -> None:
    profile_path = tmp_path / "profile.json"
    config_path = tmp_path / "config.yaml"
    write_json(profile_path, {"fullName": "Ann", "skills": "react"})
    config_path.write_text("gateway:\n  temperature: 0.4\n", encoding="utf-8")

    result = runner.invoke(app, ["evaluate", "--profile", str(profile_path), "--config", str(config_path)])

    assert result.exit_code != 0
