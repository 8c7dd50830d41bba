"""
Shared constants for the buy-write scan.

This module centralizes the default thresholds and windows used by the
scan pipeline. ScannerConfig reads its defaults from here, so tuning a
value in one place changes it everywhere.
"""

# =============================================================================
# Ticker Universe
# =============================================================================

DEFAULT_TICKERS: tuple[str, ...] = (
    "BITX",
    "FAS",
    "MSTX",
    "PLTR",
    "SMCI",
    "SOXL",
    "SPXL",
    "TNA",
    "TSLA",
)
"""Leveraged ETFs and single names scanned by default."""

VOLATILITY_SYMBOL = "VIX"
"""Index whose closes drive the volatility gate."""


# =============================================================================
# Volatility Gate
# =============================================================================

HALT_RATIO = 150.0
"""VIX at or above this percent of its SMA halts the scan."""

CAUTION_RATIO = 125.0
"""VIX at or above this percent of its SMA suppresses OTM candidates."""

MOMENTUM_MAX_RATIO = 140.0
"""Momentum override is only honored while VIX is below this percent of its SMA."""

SMA_WINDOW = 20
"""Sessions in the VIX simple moving average."""

VOLATILITY_LOOKBACK_DAYS = 40
"""Calendar days of VIX history requested (covers 20 sessions plus gaps)."""


# =============================================================================
# Drawdown Classifier
# =============================================================================

ROTATION_DRAWDOWN_PCT = 30.0
"""Drawdown strictly above this percent is classified Evaluate Rotation."""

DEEP_ITM_DRAWDOWN_PCT = 20.0
"""Drawdown at or above this percent is classified Deep ITM."""

HYBRID_DRAWDOWN_PCT = 10.0
"""Drawdown at or above this percent is classified Hybrid."""

DRAWDOWN_LOOKBACK_DAYS = 84
"""Calendar days (12 weeks) of history used for the high-water mark."""

SMOOTHING_WINDOW = 5
"""Trailing window of the moving average applied to daily highs."""

SMOOTHED_HIGH_CAP = 60
"""Most recent averaged points considered for the smoothed high."""


# =============================================================================
# Momentum Filter
# =============================================================================

MOMENTUM_LOOKBACK_DAYS = 10
"""Calendar days of history requested for the momentum check."""

MOMENTUM_WINDOW = 5
"""Recent highs averaged for the momentum check."""


# =============================================================================
# Option Scorer
# =============================================================================

EXPIRATION_WINDOW_DAYS = 7
"""Only expirations within this many calendar days (inclusive) are scanned."""

MAX_STRIKES_PER_SIDE = 3
"""Closest strikes kept on each side of spot."""

MIN_OTM_CASH_YIELD_PCT = 2.0
"""Cash yield an OTM call needs to be flagged as working."""

MIN_ITM_ASSIGNED_GAIN_PCT = 1.5
"""Assigned gain an ITM call needs to be flagged as working."""


# =============================================================================
# Presentation
# =============================================================================

DRAWDOWN_HEADERS: list[str] = [
    "Ticker",
    "Current",
    "RawHigh",
    "12W SMA-High",
    "Drawdown%",
    "Status",
]
"""Column order of drawdown rows."""

OPTION_HEADERS: list[str] = [
    "Expiration",
    "Ticker",
    "Spot",
    "Strike",
    "Premium",
    "%OTM/ITM",
    "BW",
    "Yield",
    "Gain",
    "Works",
]
"""Column order of option rows."""

SUMMARY_LABEL = "SUMMED AVG RETURN"
SEPARATOR_CELL = "---"

RUN_DATE_TIMEZONE = "America/Los_Angeles"
"""Timezone the run date is stamped in."""
