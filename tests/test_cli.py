"""Tests for the bw-scan command line interface."""

import json
from contextlib import nullcontext
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from bw_scanner.cli import cli
from bw_scanner.exceptions import ConfigurationError


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Scanner config limited to FAS and TSLA."""
    monkeypatch.delenv("BW_TICKERS", raising=False)
    monkeypatch.delenv("BW_CONFIG", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("tickers: [FAS, TSLA]\n")
    return str(path)


@pytest.fixture
def market(gateway, make_bars, make_vix, today, monkeypatch):
    """FAS near its high, TSLA without any history."""
    monkeypatch.setattr("bw_scanner.scanner.utc_today", lambda now=None: today)
    monkeypatch.setattr("bw_scanner.cli.utc_today", lambda now=None: today)
    gateway.history["VIX"] = make_vix(20.0)
    gateway.add_ticker(
        "FAS",
        make_bars([100.0] * 30 + [95.0], [100.0] * 31),
        spot=95.0,
        chain=[(92.5, 3.9, 4.1), (97.5, 1.9, 2.1)],
    )
    with patch("bw_scanner.cli._make_client", side_effect=lambda: nullcontext(gateway)):
        yield gateway


class TestScanCommand:
    """Test suite for the scan command."""

    def test_json_output(self, runner, config_file, market):
        result = runner.invoke(cli, ["--config", config_file, "scan", "--json"], obj={})

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["halt"] is False
        assert [row[0] for row in data["drawdownTable"]] == ["FAS", "TSLA"]
        assert data["drawdownTable"][1][1:] == ["ERROR", "-", "-", "-", "No data"]
        assert data["otm1"][-1][0] == "SUMMED AVG RETURN"

    def test_text_report(self, runner, config_file, market):
        result = runner.invoke(cli, ["--config", config_file, "scan"], obj={})

        assert result.exit_code == 0
        assert "Run Date (PT):" in result.output
        assert "VIX 100% of SMA20 → Market conditions normal" in result.output
        assert "BW Ticker Drawdown Check" in result.output
        assert "3rd Closest ITM\nNo data available." in result.output

    def test_tickers_option_overrides_config(self, runner, config_file, market):
        result = runner.invoke(
            cli, ["--config", config_file, "--tickers", "fas", "scan", "--json"], obj={}
        )

        assert result.exit_code == 0
        assert [row[0] for row in json.loads(result.stdout)["drawdownTable"]] == ["FAS"]

    def test_halt_prints_status_only(self, runner, config_file, market, make_vix):
        market.history["VIX"] = make_vix(40.0)

        result = runner.invoke(cli, ["--config", config_file, "scan"], obj={})

        assert result.exit_code == 0
        assert "VIX 190.48% of SMA20 → BW HALT" in result.output
        assert "BW Ticker Drawdown Check" not in result.output

    def test_volatility_unavailable_exits_1(self, runner, config_file, market):
        market.failing.add("VIX")

        result = runner.invoke(cli, ["--config", config_file, "scan", "--json"], obj={})

        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"error": "VIX data unavailable – aborting BW scan"}

    def test_missing_token(self, runner, config_file):
        with patch(
            "bw_scanner.cli.TradierConfig.load",
            side_effect=ConfigurationError("TRADIER_TOKEN environment variable not set"),
        ):
            result = runner.invoke(cli, ["--config", config_file, "scan"], obj={})

        assert result.exit_code == 1
        assert "Error: TRADIER_TOKEN environment variable not set" in result.output

    def test_invalid_config_file(self, runner, tmp_path, monkeypatch):
        monkeypatch.delenv("BW_TICKERS", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("halt_ratio: 100\n")

        result = runner.invoke(cli, ["--config", str(path), "scan"], obj={})

        assert result.exit_code == 1
        assert "caution_ratio must be below halt_ratio" in result.output

    def test_non_numeric_threshold(self, runner, tmp_path, monkeypatch):
        monkeypatch.delenv("BW_TICKERS", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("halt_ratio: high\n")

        result = runner.invoke(cli, ["--config", str(path), "vix"], obj={})

        assert result.exit_code == 1
        assert "Error: halt_ratio must be a number, got 'high'" in result.output


class TestVixCommand:
    """Test suite for the vix command."""

    def test_caution(self, runner, config_file, market, make_vix):
        market.history["VIX"] = make_vix(28.0)

        result = runner.invoke(cli, ["--config", config_file, "vix"], obj={})

        assert result.exit_code == 0
        assert "VIX 137.25% of SMA20 → HIGH-VOL CAUTION" in result.output

    def test_verbose_shows_inputs(self, runner, config_file, market):
        result = runner.invoke(cli, ["--config", config_file, "-v", "vix"], obj={})

        assert result.exit_code == 0
        assert "Last close: 20.00" in result.output
        assert "SMA20:     20.00" in result.output

    def test_unavailable(self, runner, config_file, market):
        market.failing.add("VIX")

        result = runner.invoke(cli, ["--config", config_file, "vix"], obj={})

        assert result.exit_code == 1
        assert "Error:" in result.output
