"""Integration tests for the command line interface."""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from ptce.presentation.cli import main as cli_main
from ptce.presentation.cli.main import cli

RED = {
    "id": "1",
    "name": "Red Titan",
    "attributes": {"offense": 90, "defense": 60, "agility": 70, "strategy": 80, "endurance": 50},
}
BLUE = {
    "id": "2",
    "name": "Blue Warden",
    "attributes": {
        "attack_power": 40,
        "defense": 85,
        "speed_agility": 55,
        "strategy": 65,
        "endurance": 90,
    },
}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch):
    """Keep the CLI from reconfiguring the root logger during tests."""
    monkeypatch.setattr(cli_main, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.delenv("OPEN_AI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def contender_files(tmp_path):
    red = tmp_path / "red.json"
    blue = tmp_path / "blue.json"
    red.write_text(json.dumps(RED))
    blue.write_text(json.dumps(BLUE))
    return str(red), str(blue)


class TestCLI:
    """Test cases for the ptce command."""

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "determine" in result.output
        assert "summary" in result.output

    def test_determine_text(self, runner, contender_files):
        result = runner.invoke(cli, ["determine", *contender_files, "--heuristic"])

        assert result.exit_code == 0, result.output
        assert "Winner:" in result.output
        assert "Confidence:" in result.output

    def test_determine_json(self, runner, contender_files):
        result = runner.invoke(cli, ["determine", *contender_files, "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["winner"]["id"] in ("1", "2")
        assert set(data["scores"]) == {"1", "2"}

    def test_determine_detailed_yaml(self, runner, contender_files):
        result = runner.invoke(
            cli, ["determine", *contender_files, "--detailed", "--format", "yaml"]
        )

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.output)
        assert data["evaluation_mode"] == "source"
        assert data["interactions"][-1]["action"] == "winner_determined"

    def test_determine_detailed_report(self, runner, contender_files):
        result = runner.invoke(cli, ["determine", *contender_files, "--detailed"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("=== PTCE Process Log ===")
        assert "1. Red Titan (ID: 1)" in result.output
        assert "Final Consensus Scores:" in result.output

    def test_same_contender_twice(self, runner, contender_files):
        red, _ = contender_files

        result = runner.invoke(cli, ["determine", red, red])

        assert result.exit_code == 1

    def test_invalid_contender_file(self, runner, tmp_path, contender_files):
        broken = tmp_path / "broken.json"
        broken.write_text(json.dumps({"id": "3", "name": "No Stats"}))

        result = runner.invoke(cli, ["determine", str(broken), contender_files[0]])

        assert result.exit_code == 2
        assert "missing: attributes" in result.output

    def test_summary(self, runner, contender_files):
        result = runner.invoke(cli, ["summary", *contender_files])

        assert result.exit_code == 0
        assert "Red Titan demonstrates particular strength in attack and strategy." in (
            result.output
        )
        assert "Blue Warden demonstrates particular strength in endurance and defense." in (
            result.output
        )

    def test_config_file(self, runner, tmp_path, contender_files):
        config = tmp_path / "ptce.yaml"
        config.write_text("ptce:\n  variance_threshold: 0.1\n")

        result = runner.invoke(
            cli, ["--config", str(config), "determine", *contender_files, "--format", "json"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["reasoning"].startswith("Initial disagreement detected")

    @pytest.mark.parametrize(
        "flags, expected",
        [([], "ERROR"), (["--verbose"], logging.INFO), (["--debug"], logging.DEBUG)],
    )
    def test_log_level_from_settings_unless_flagged(
        self, runner, monkeypatch, contender_files, flags, expected
    ):
        calls = []
        monkeypatch.setattr(
            cli_main, "setup_logging", lambda level, **kwargs: calls.append((level, kwargs))
        )
        monkeypatch.setenv("LOG_LEVEL", "error")
        monkeypatch.setenv("LOG_JSON", "true")
        monkeypatch.delenv("LOG_FILE", raising=False)

        result = runner.invoke(cli, [*flags, "summary", contender_files[0]])

        assert result.exit_code == 0, result.output
        assert calls == [(expected, {"log_file": None, "json_format": True})]
