"""Configuration management for the Tradier gateway and the scan pipeline."""

import logging
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from . import constants
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class TradierConfig:
    """
    Configuration for the Tradier API client.

    Attributes:
        api_key: Tradier bearer token
        base_url: Base URL for the Tradier API
        timeout: Request timeout in seconds
        request_delay: Pause after each successful request (seconds)
    """

    api_key: str
    base_url: str = "https://api.tradier.com/v1"
    timeout: int = 10
    request_delay: float = 0.1

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.api_key:
            raise ConfigurationError("Tradier token is not configured")

        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be positive")

        if self.request_delay < 0:
            raise ConfigurationError("Request delay cannot be negative")

    @classmethod
    def from_env(cls, api_key_var: str = "TRADIER_TOKEN") -> "TradierConfig":
        """
        Load configuration from environment variables.

        Args:
            api_key_var: Name of environment variable containing the token

        Returns:
            TradierConfig instance

        Raises:
            ConfigurationError: If the token environment variable is not set
        """
        api_key = os.getenv(api_key_var)
        if not api_key:
            raise ConfigurationError(f"{api_key_var} environment variable not set")

        return cls(api_key=api_key)

    @classmethod
    def from_file(cls, file_path: str = "config/tradier_token.txt") -> "TradierConfig":
        """
        Load configuration from a file.

        The file should contain a line in the format:
        tradier_token = 'value'

        Args:
            file_path: Path to the token file (relative to project root)

        Returns:
            TradierConfig instance

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: If the token cannot be parsed
        """
        project_root = Path(__file__).parent.parent
        full_path = project_root / file_path

        if not full_path.exists():
            raise FileNotFoundError(
                f"Token file not found at {full_path}. "
                f"Please create the file with format: tradier_token = 'your_token'"
            )

        content = full_path.read_text().strip()

        match = re.match(r"tradier_token\s*=\s*['\"](.+?)['\"]", content)
        if not match:
            raise ConfigurationError(
                f"Could not parse token from {file_path}. "
                f"Expected format: tradier_token = 'your_token'"
            )

        return cls(api_key=match.group(1))

    @classmethod
    def load(cls) -> "TradierConfig":
        """Load from the token file, falling back to the environment."""
        try:
            return cls.from_file()
        except FileNotFoundError:
            logger.debug("Token file not found, reading TRADIER_TOKEN from environment")
            return cls.from_env()


_FLOAT_FIELDS = (
    "halt_ratio",
    "caution_ratio",
    "momentum_max_ratio",
    "rotation_drawdown_pct",
    "deep_itm_drawdown_pct",
    "hybrid_drawdown_pct",
    "min_otm_cash_yield_pct",
    "min_itm_assigned_gain_pct",
)

_INT_FIELDS = (
    "sma_window",
    "volatility_lookback_days",
    "drawdown_lookback_days",
    "smoothing_window",
    "smoothed_high_cap",
    "momentum_lookback_days",
    "momentum_window",
    "max_strikes_per_side",
    "expiration_window_days",
)


def _as_number(name: str, value: Any) -> float:
    """Coerce a numeric setting, rejecting booleans, None and non-numeric text."""
    if isinstance(value, bool) or value is None:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e


@dataclass
class ScannerConfig:
    """
    Thresholds and windows for one scan.

    Every number the pipeline compares against lives here so a scan is a
    function of (config, gateway data) only.

    Attributes:
        tickers: Symbols scanned, in output order
        volatility_symbol: Index used by the volatility gate
        halt_ratio: VIX/SMA percent at or above which the scan halts
        caution_ratio: VIX/SMA percent at or above which OTM tables are suppressed
        momentum_max_ratio: VIX/SMA percent below which momentum overrides apply
        sma_window: Sessions in the VIX moving average
        volatility_lookback_days: Calendar days of VIX history requested
        rotation_drawdown_pct: Drawdown strictly above which a ticker needs rotation
        deep_itm_drawdown_pct: Drawdown at or above which deep ITM calls are used
        hybrid_drawdown_pct: Drawdown at or above which the hybrid approach is used
        drawdown_lookback_days: Calendar days of history for the high-water mark
        smoothing_window: Moving average window applied to daily highs
        smoothed_high_cap: Most recent averaged highs considered
        momentum_lookback_days: Calendar days of history for the momentum check
        momentum_window: Recent highs averaged by the momentum check
        expiration_window_days: Max calendar days to the scanned expiration
        max_strikes_per_side: Closest strikes kept above and below spot
        min_otm_cash_yield_pct: Cash yield for an OTM call to work
        min_itm_assigned_gain_pct: Assigned gain for an ITM call to work
    """

    tickers: list[str] = field(default_factory=lambda: list(constants.DEFAULT_TICKERS))
    volatility_symbol: str = constants.VOLATILITY_SYMBOL
    halt_ratio: float = constants.HALT_RATIO
    caution_ratio: float = constants.CAUTION_RATIO
    momentum_max_ratio: float = constants.MOMENTUM_MAX_RATIO
    sma_window: int = constants.SMA_WINDOW
    volatility_lookback_days: int = constants.VOLATILITY_LOOKBACK_DAYS
    rotation_drawdown_pct: float = constants.ROTATION_DRAWDOWN_PCT
    deep_itm_drawdown_pct: float = constants.DEEP_ITM_DRAWDOWN_PCT
    hybrid_drawdown_pct: float = constants.HYBRID_DRAWDOWN_PCT
    drawdown_lookback_days: int = constants.DRAWDOWN_LOOKBACK_DAYS
    smoothing_window: int = constants.SMOOTHING_WINDOW
    smoothed_high_cap: int = constants.SMOOTHED_HIGH_CAP
    momentum_lookback_days: int = constants.MOMENTUM_LOOKBACK_DAYS
    momentum_window: int = constants.MOMENTUM_WINDOW
    expiration_window_days: int = constants.EXPIRATION_WINDOW_DAYS
    max_strikes_per_side: int = constants.MAX_STRIKES_PER_SIDE
    min_otm_cash_yield_pct: float = constants.MIN_OTM_CASH_YIELD_PCT
    min_itm_assigned_gain_pct: float = constants.MIN_ITM_ASSIGNED_GAIN_PCT

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if isinstance(self.tickers, str) or not isinstance(self.tickers, (list, tuple)):
            raise ConfigurationError("tickers must be a list of symbols")
        normalized = [str(t).strip().upper() for t in self.tickers if t is not None]
        # First occurrence wins, preserving output order
        self.tickers = list(dict.fromkeys(t for t in normalized if t))
        if not self.tickers:
            raise ConfigurationError("tickers cannot be empty")

        for name in _FLOAT_FIELDS:
            setattr(self, name, _as_number(name, getattr(self, name)))
        for name in _INT_FIELDS:
            value = _as_number(name, getattr(self, name))
            if not float(value).is_integer():
                raise ConfigurationError(f"{name} must be a whole number, got {value}")
            setattr(self, name, int(value))

        if not self.caution_ratio < self.halt_ratio:
            raise ConfigurationError("caution_ratio must be below halt_ratio")
        if not self.hybrid_drawdown_pct < self.deep_itm_drawdown_pct < self.rotation_drawdown_pct:
            raise ConfigurationError(
                "drawdown thresholds must satisfy hybrid < deep_itm < rotation"
            )

        for name in _INT_FIELDS:
            if name == "expiration_window_days":
                continue
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be at least 1")

        if self.expiration_window_days < 0:
            raise ConfigurationError("expiration_window_days cannot be negative")

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get default configuration file path (~/.bw_scanner/config.yaml)."""
        return Path.home() / ".bw_scanner" / "config.yaml"

    @classmethod
    def load_from_file(cls, path: Optional[Path] = None) -> "ScannerConfig":
        """Load configuration from YAML file.

        If the file doesn't exist, returns default configuration. The
        ``BW_TICKERS`` environment variable (comma-separated) overrides the
        ticker list from the file.

        Args:
            path: Optional path to config file (default: ~/.bw_scanner/config.yaml)

        Returns:
            Configuration instance

        Raises:
            ConfigurationError: If configuration file is invalid
        """
        config_path = Path(path) if path else cls.get_default_config_path()

        config_dict: dict[str, Any] = {}

        if config_path.exists():
            try:
                with open(config_path) as f:
                    file_config = yaml.safe_load(f)
                    if file_config:
                        config_dict = file_config
                logger.debug(f"Loaded configuration from {config_path}")
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
        else:
            logger.debug(f"Configuration file not found at {config_path}, using defaults")

        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration file must contain a mapping")

        return cls.merge_with_defaults(config_dict)

    @classmethod
    def merge_with_defaults(cls, config_dict: dict[str, Any]) -> "ScannerConfig":
        """Merge a configuration dictionary with defaults and environment variables.

        Precedence order (highest to lowest):
        1. Environment variables
        2. Config file values
        3. Default values

        Raises:
            ConfigurationError: If a key is unknown or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        values = dict(config_dict)

        env_tickers = os.getenv("BW_TICKERS")
        if env_tickers:
            values["tickers"] = env_tickers.split(",")

        if isinstance(values.get("tickers"), str):
            values["tickers"] = values["tickers"].split(",")

        try:
            return cls(**values)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
