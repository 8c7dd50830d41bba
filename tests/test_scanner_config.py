"""Unit tests for configuration management."""

import pytest

from bw_scanner import config as config_module
from bw_scanner.config import ScannerConfig, TradierConfig
from bw_scanner.exceptions import ConfigurationError


class TestTradierConfig:
    """Test suite for TradierConfig class."""

    def test_defaults(self):
        config = TradierConfig(api_key="token")

        assert config.base_url == "https://api.tradier.com/v1"
        assert config.timeout == 10
        assert config.request_delay == 0.1

    def test_empty_token_rejected(self):
        with pytest.raises(ConfigurationError, match="token is not configured"):
            TradierConfig(api_key="")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ConfigurationError, match="Timeout must be positive"):
            TradierConfig(api_key="token", timeout=0)

    def test_negative_delay_rejected(self):
        with pytest.raises(ConfigurationError, match="cannot be negative"):
            TradierConfig(api_key="token", request_delay=-1)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TRADIER_TOKEN", "env-token")
        assert TradierConfig.from_env().api_key == "env-token"

    def test_from_env_missing(self, monkeypatch):
        monkeypatch.delenv("TRADIER_TOKEN", raising=False)
        with pytest.raises(ConfigurationError, match="TRADIER_TOKEN"):
            TradierConfig.from_env()

    def test_from_file(self, tmp_path, monkeypatch):
        (tmp_path / "token.txt").write_text("tradier_token = 'file-token'\n")
        monkeypatch.setattr(config_module, "__file__", str(tmp_path / "pkg" / "config.py"))

        assert TradierConfig.from_file("token.txt").api_key == "file-token"

    def test_from_file_unparsable(self, tmp_path, monkeypatch):
        (tmp_path / "token.txt").write_text("just-a-token")
        monkeypatch.setattr(config_module, "__file__", str(tmp_path / "pkg" / "config.py"))

        with pytest.raises(ConfigurationError, match="Could not parse token"):
            TradierConfig.from_file("token.txt")

    def test_from_file_missing(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_module, "__file__", str(tmp_path / "pkg" / "config.py"))
        with pytest.raises(FileNotFoundError):
            TradierConfig.from_file("token.txt")

    def test_load_falls_back_to_env(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_module, "__file__", str(tmp_path / "pkg" / "config.py"))
        monkeypatch.setenv("TRADIER_TOKEN", "env-token")

        assert TradierConfig.load().api_key == "env-token"


class TestScannerConfig:
    """Test suite for ScannerConfig class."""

    def test_defaults(self):
        config = ScannerConfig()

        assert config.tickers == ["BITX", "FAS", "MSTX", "PLTR", "SMCI", "SOXL", "SPXL", "TNA", "TSLA"]
        assert config.halt_ratio == 150.0
        assert config.caution_ratio == 125.0
        assert config.momentum_max_ratio == 140.0
        assert config.rotation_drawdown_pct == 30.0
        assert config.deep_itm_drawdown_pct == 20.0
        assert config.hybrid_drawdown_pct == 10.0
        assert config.expiration_window_days == 7
        assert config.drawdown_lookback_days == 84
        assert config.smoothing_window == 5
        assert config.smoothed_high_cap == 60

    def test_tickers_normalized(self):
        assert ScannerConfig(tickers=[" tsla", "soxl ", ""]).tickers == ["TSLA", "SOXL"]

    def test_duplicate_tickers_removed_in_order(self):
        assert ScannerConfig(tickers=["TSLA", "fas", "tsla", "FAS", "SOXL"]).tickers == [
            "TSLA",
            "FAS",
            "SOXL",
        ]

    def test_numeric_strings_coerced(self):
        config = ScannerConfig(halt_ratio="160", sma_window="20")

        assert config.halt_ratio == 160.0
        assert config.sma_window == 20
        assert isinstance(config.sma_window, int)

    def test_non_numeric_threshold_rejected(self):
        with pytest.raises(ConfigurationError, match="halt_ratio must be a number"):
            ScannerConfig(halt_ratio="high")

    def test_fractional_window_rejected(self):
        with pytest.raises(ConfigurationError, match="smoothing_window must be a whole number"):
            ScannerConfig(smoothing_window=2.5)

    def test_tickers_must_be_a_list(self):
        with pytest.raises(ConfigurationError, match="tickers must be a list"):
            ScannerConfig(tickers=None)

    def test_empty_tickers_rejected(self):
        with pytest.raises(ConfigurationError, match="tickers cannot be empty"):
            ScannerConfig(tickers=[])

    def test_ratio_order_validated(self):
        with pytest.raises(ConfigurationError, match="caution_ratio must be below halt_ratio"):
            ScannerConfig(caution_ratio=160.0)

    def test_drawdown_order_validated(self):
        with pytest.raises(ConfigurationError, match="hybrid < deep_itm < rotation"):
            ScannerConfig(hybrid_drawdown_pct=25.0)

    def test_window_validated(self):
        with pytest.raises(ConfigurationError, match="smoothing_window must be at least 1"):
            ScannerConfig(smoothing_window=0)

    def test_load_missing_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BW_TICKERS", raising=False)
        config = ScannerConfig.load_from_file(tmp_path / "absent.yaml")
        assert config == ScannerConfig()

    def test_load_from_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BW_TICKERS", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("tickers: [TSLA, SOXL]\nhalt_ratio: 160\nexpiration_window_days: 10\n")

        config = ScannerConfig.load_from_file(path)

        assert config.tickers == ["TSLA", "SOXL"]
        assert config.halt_ratio == 160
        assert config.expiration_window_days == 10
        assert config.caution_ratio == 125.0

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BW_TICKERS", "fas,tna")
        path = tmp_path / "config.yaml"
        path.write_text("tickers: [TSLA]\n")

        assert ScannerConfig.load_from_file(path).tickers == ["FAS", "TNA"]

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("tickers: [TSLA\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ScannerConfig.load_from_file(path)

    def test_null_tickers_in_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BW_TICKERS", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("tickers:\n")

        with pytest.raises(ConfigurationError, match="tickers must be a list"):
            ScannerConfig.load_from_file(path)

    def test_non_numeric_threshold_in_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BW_TICKERS", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("halt_ratio: high\n")

        with pytest.raises(ConfigurationError, match="halt_ratio must be a number"):
            ScannerConfig.load_from_file(path)

    def test_unknown_key(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BW_TICKERS", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("halt_ration: 160\n")

        with pytest.raises(ConfigurationError, match="Unknown configuration keys: halt_ration"):
            ScannerConfig.load_from_file(path)
