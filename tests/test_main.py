"""Tests for the command line entry point."""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from airperf.core.logging_system import LoggingError
from airperf.main import main, parse_args


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text("logging:\n  use_platform_dir: false\n")
    return path


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep CLI runs from writing to the user's log directory."""
    with patch("airperf.main.initialize_logging") as initialize:
        yield initialize


def write_request(tmp_path: Path, payload: dict) -> str:
    path = tmp_path / "request.json"
    path.write_text(json.dumps(payload))
    return str(path)


class TestParseArgs:
    """Test argument parsing."""

    def test_weight_balance_options(self) -> None:
        args = parse_args(["weight-balance", "loading.json", "--scenario", "maxFuel", "--strict"])

        assert args.command == "weight-balance"
        assert args.request == "loading.json"
        assert args.scenario == "maxFuel"
        assert args.strict

    def test_serve_defaults(self) -> None:
        args = parse_args(["serve"])
        assert args.host is None
        assert args.port is None

    def test_unknown_scenario(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["weight-balance", "loading.json", "--scenario", "ferry"])

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            parse_args([])


class TestPerformanceCommand:
    """Test the performance command."""

    def test_success(self, tmp_path: Path, settings_file: Path, performance_payload: dict, capsys) -> None:
        request = write_request(tmp_path, performance_payload)

        assert main(["--config", str(settings_file), "performance", request]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["pressureAltitude"]["result"] == 612.0
        assert output["takeoffPerformance"]["isFeasible"] is True

    def test_stdin(self, settings_file: Path, performance_payload: dict, capsys, monkeypatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(performance_payload)))

        assert main(["--config", str(settings_file), "performance", "-"]) == 0
        assert "pressureAltitude" in capsys.readouterr().out

    def test_validation_error(self, tmp_path: Path, settings_file: Path, performance_payload: dict, capsys) -> None:
        performance_payload["qnh"] = ""
        request = write_request(tmp_path, performance_payload)

        assert main(["--config", str(settings_file), "performance", request]) == 1
        assert json.loads(capsys.readouterr().out)["fields"]["qnh"] == "QNH is required"

    def test_missing_request_file(self, tmp_path: Path, settings_file: Path, capsys) -> None:
        assert main(["--config", str(settings_file), "performance", str(tmp_path / "absent.json")]) == 2
        assert json.loads(capsys.readouterr().out)["code"] == "VALIDATION_ERROR"

    def test_invalid_json(self, tmp_path: Path, settings_file: Path, capsys) -> None:
        path = tmp_path / "request.json"
        path.write_text("{not json")

        assert main(["--config", str(settings_file), "performance", str(path)]) == 2
        assert "not valid JSON" in json.loads(capsys.readouterr().out)["error"]


class TestWeightBalanceCommand:
    """Test the weight-balance command."""

    def test_success(self, tmp_path: Path, settings_file: Path, wb_payload: dict, capsys) -> None:
        request = write_request(tmp_path, wb_payload)

        assert main(["--config", str(settings_file), "weight-balance", request]) == 0
        assert json.loads(capsys.readouterr().out)["weightAndBalance"]["takeoffWeight"] == 624.58

    def test_scenario_option(self, tmp_path: Path, settings_file: Path, wb_payload: dict, capsys) -> None:
        request = write_request(tmp_path, wb_payload)

        assert main(["--config", str(settings_file), "weight-balance", request, "--scenario", "maxFuel"]) == 0
        items = json.loads(capsys.readouterr().out)["weightAndBalance"]["items"]
        assert {item["name"]: item["weight"] for item in items}["Baggage"] == 0.0

    def test_strict_option(self, tmp_path: Path, settings_file: Path, wb_payload: dict, capsys) -> None:
        wb_payload["emptyWeight"] = 500
        request = write_request(tmp_path, wb_payload)

        assert main(["--config", str(settings_file), "weight-balance", request]) == 0
        capsys.readouterr()
        assert main(["--config", str(settings_file), "weight-balance", request, "--strict"]) == 1
        assert json.loads(capsys.readouterr().out)["code"] == "WEIGHT_LIMIT_ERROR"


class TestStartupErrors:
    """Test configuration and logging failures."""

    def test_missing_config(self, tmp_path: Path, capsys) -> None:
        assert main(["--config", str(tmp_path / "absent.yaml"), "performance", "-"]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_logging_error(self, settings_file: Path, no_logging_setup, capsys) -> None:
        no_logging_setup.side_effect = LoggingError("Logging config file not found: x.yaml")

        assert main(["--config", str(settings_file), "performance", "-"]) == 2
        assert "Logging error" in capsys.readouterr().err

    def test_logging_settings_passed(self, settings_file: Path, no_logging_setup, monkeypatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("{}"))
        main(["--config", str(settings_file), "performance", "-"])

        no_logging_setup.assert_called_once_with(None, use_platform_dir=False)
