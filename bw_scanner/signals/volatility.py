"""
Volatility gate.

Compares the latest VIX close with its 20-session simple moving average
and maps the ratio onto a regime. The gate runs before anything else and
a HALT regime ends the scan.
"""

import logging
from datetime import date
from typing import List, Optional

from ..config import ScannerConfig
from ..exceptions import InsufficientDataError
from ..gateway import QuoteGateway
from ..models import Bar, VolatilityReading, VolatilityRegime
from ..utils import lookback_window

logger = logging.getLogger(__name__)


def compute_volatility_reading(bars: List[Bar], window: int = 20) -> VolatilityReading:
    """
    Latest close against the SMA of the last ``window`` closes.

    Args:
        bars: VIX bars, oldest first
        window: SMA length in sessions

    Returns:
        VolatilityReading

    Raises:
        InsufficientDataError: If fewer than ``window`` closes are available
    """
    closes = [bar.close for bar in bars]
    if len(closes) < window:
        raise InsufficientDataError(
            f"Need {window} volatility closes for SMA{window}, got {len(closes)}"
        )

    sma = sum(closes[-window:]) / window
    return VolatilityReading(last_close=closes[-1], sma=sma)


def classify_regime(
    ratio: float, halt_ratio: float = 150.0, caution_ratio: float = 125.0
) -> VolatilityRegime:
    """Map a VIX/SMA percent to a regime, checking the higher threshold first."""
    if ratio >= halt_ratio:
        return VolatilityRegime.HALT
    if ratio >= caution_ratio:
        return VolatilityRegime.CAUTION
    return VolatilityRegime.NORMAL


def format_ratio(ratio: float) -> str:
    """Ratio with at most two decimals and no trailing zeros, e.g. 100, 130.5, 190.48."""
    return f"{ratio:.2f}".rstrip("0").rstrip(".")


def regime_message(ratio: float, regime: VolatilityRegime, symbol: str = "VIX") -> str:
    """Status line shown above the scan results."""
    if regime == VolatilityRegime.HALT:
        outcome = "BW HALT"
    elif regime == VolatilityRegime.CAUTION:
        outcome = "HIGH-VOL CAUTION"
    else:
        outcome = "Market conditions normal"
    return f"{symbol} {format_ratio(ratio)}% of SMA20 → {outcome}"


class VolatilityGate:
    """
    Fetches VIX history and decides the scan's regime.

    Example:
        gate = VolatilityGate(client, ScannerConfig())
        reading, regime = gate.evaluate(date.today())
    """

    def __init__(self, gateway: QuoteGateway, config: Optional[ScannerConfig] = None):
        self.gateway = gateway
        self.config = config or ScannerConfig()

    def read(self, today: date) -> VolatilityReading:
        """
        Fetch the lookback window of VIX closes and compute the reading.

        Raises:
            InsufficientDataError: If fewer than ``sma_window`` closes came back
            TradierAPIError: If the history request fails
        """
        start, end = lookback_window(self.config.volatility_lookback_days, today)
        bars = self.gateway.get_history(self.config.volatility_symbol, "daily", start, end)
        return compute_volatility_reading(bars, self.config.sma_window)

    def evaluate(self, today: date) -> tuple[VolatilityReading, VolatilityRegime]:
        """Read VIX and classify the regime."""
        reading = self.read(today)
        regime = classify_regime(
            reading.ratio, self.config.halt_ratio, self.config.caution_ratio
        )
        logger.info(
            f"{self.config.volatility_symbol} at {reading.ratio}% of SMA{self.config.sma_window} "
            f"(last={reading.last_close:.2f}, sma={reading.sma:.2f}) -> {regime.value}"
        )
        return reading, regime
