"""Integration tests for the smire command line."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from smire.cli import cli


pytestmark = pytest.mark.integration


@pytest.fixture
def runner(monkeypatch, dataset_path):
    monkeypatch.setenv("SMIRE_DATA_PATH", str(dataset_path))
    monkeypatch.setenv("SMIRE_LOG_LEVEL", "WARNING")
    return CliRunner()


def test_call_prints_json_envelope(runner):
    result = runner.invoke(cli, ["call", "get_summary", "-a", "month=Oct-24", "-a", "pillar=Retail"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["Total_TPV"] == 2000
    assert payload["filters"]["pillar"] == "Retail"


def test_call_uses_latest_month(runner):
    result = runner.invoke(cli, ["call", "get_churn_candidates"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["brand_ids"] == ["B2", "B3"]


def test_call_welcome_message_is_plain_text(runner):
    result = runner.invoke(cli, ["call", "get_welcome_message"])
    assert result.exit_code == 0
    assert "SMIRE" in result.stdout


def test_invalid_month_exits_with_usage_status(runner):
    result = runner.invoke(cli, ["call", "get_summary", "-a", "month=last month"])
    assert result.exit_code == 2


def test_unknown_tool_exits_with_usage_status(runner):
    result = runner.invoke(cli, ["call", "get_everything"])
    assert result.exit_code == 2


def test_malformed_argument_pair(runner):
    result = runner.invoke(cli, ["call", "get_summary", "-a", "month"])
    assert result.exit_code == 2


def test_check_data_reports_profile(runner):
    result = runner.invoke(cli, ["check-data"])
    assert result.exit_code == 0, result.output
    report = json.loads(result.stdout)
    assert report["rows"] == 6
    assert report["missing_columns"] == []


def test_check_data_fails_on_missing_columns(runner, monkeypatch, tmp_path):
    path = tmp_path / "thin.json"
    path.write_text(json.dumps([{"month": "Oct-24", "tpv": "10"}]))
    monkeypatch.setenv("SMIRE_DATA_PATH", str(path))
    result = runner.invoke(cli, ["check-data"])
    assert result.exit_code == 1


def test_serve_runs_configured_transport(runner, monkeypatch):
    calls = {}

    def fake_run(settings):
        calls["settings"] = settings

    monkeypatch.setattr("smire.cli.run_server", fake_run)
    result = runner.invoke(cli, ["serve", "--transport", "sse"])
    assert result.exit_code == 0, result.output
    assert calls["settings"].transport == "sse"
