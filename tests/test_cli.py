"""End-to-end tests for the loadreport command-line interface."""

import json

import pytest
import yaml
from click.testing import CliRunner

import loadreport.cli
from loadreport.cli import cli
from loadreport.reporting import ReportError
from loadreport.results import Result, results_to_dataframe


@pytest.fixture
def results_csv(tmp_path):
    results = [
        Result(timestamp=1_700_000_000.0, latency=0.05, bytes_in=512, status_code=200, url="/api/users"),
        Result(timestamp=1_700_000_000.5, latency=0.15, bytes_in=256, status_code=200, url="/api/orders"),
        Result(timestamp=1_700_000_001.0, latency=0.15, status_code=503, url="/static/app.js"),
        Result(timestamp=1_700_000_001.5, latency=0.25, status_code=0, error="connection refused", url="/health"),
    ]
    path = tmp_path / "results.csv"
    results_to_dataframe(results).to_csv(path, index=False)
    return path


def test_text_report(results_csv):
    result = CliRunner().invoke(cli, ["report", str(results_csv)])
    assert result.exit_code == 0, result.output
    assert "OVERALL: 4 results" in result.output
    assert "50.00%" in result.output
    assert "connection refused" in result.output


def test_json_report(results_csv):
    result = CliRunner().invoke(cli, ["report", str(results_csv), "--type", "json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["requests"] == 4
    assert data["status_codes"] == {"0": 1, "200": 2, "503": 1}


def test_histogram_report(results_csv):
    result = CliRunner().invoke(cli, ["report", str(results_csv), "--type", "hist[100ms,200ms]"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[1].split()[2:4] == ["3", "75.00%"]
    assert lines[2].split()[2:4] == ["1", "25.00%"]


def test_invalid_histogram_buckets(results_csv):
    result = CliRunner().invoke(cli, ["report", str(results_csv), "--type", "hist[200ms,100ms]"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_report_with_config(results_csv, tmp_path):
    config_path = tmp_path / "report.yaml"
    config_path.write_text(yaml.dump({
        "report": {
            "type": "text",
            "show_urls": True,
            "buckets": [{"label": "API", "pattern": "/api/"}],
        }
    }))
    output_path = tmp_path / "out" / "report.txt"

    result = CliRunner().invoke(cli, [
        "report", str(results_csv), "--config", str(config_path), "--output", str(output_path),
    ])
    assert result.exit_code == 0, result.output
    text = output_path.read_text()
    assert "API: 2 results" in text
    assert "Remaining: 2 results" in text
    assert "  /api/orders: 1" in text


def test_generate_and_validate_config(tmp_path):
    runner = CliRunner()
    config_path = tmp_path / "generated.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(config_path)])
    assert result.exit_code == 0, result.output
    assert config_path.exists()

    result = runner.invoke(cli, ["validate", str(config_path)])
    assert result.exit_code == 0, result.output
    assert "Configuration is valid" in result.output


def test_validate_invalid_config(tmp_path):
    config_path = tmp_path / "bad.json"
    config_path.write_text(json.dumps({"report": {"type": "hist", "success_status_range": [500, 200]}}))

    result = CliRunner().invoke(cli, ["validate", str(config_path)])
    assert result.exit_code == 1
    assert "Configuration has 2 errors" in result.output


def test_failed_write_leaves_no_output_file(results_csv, tmp_path, monkeypatch):
    def failing_write(reporter, results, stream):
        stream.write(b"OVERALL: partial")
        raise ReportError("Failed to write report: disk full")

    monkeypatch.setattr(loadreport.cli, "write_report", failing_write)
    output_path = tmp_path / "report.txt"

    result = CliRunner().invoke(cli, ["report", str(results_csv), "--output", str(output_path)])
    assert result.exit_code == 1
    assert "disk full" in result.output
    assert not output_path.exists()


def test_validate_non_string_label(tmp_path):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("report:\n  buckets:\n    - label: [a]\n      pattern: /\n")

    result = CliRunner().invoke(cli, ["validate", str(config_path)])
    assert result.exit_code == 1
    assert "Configuration has 1 errors" in result.output
    assert "label and pattern must be strings" in result.output
