"""
Momentum filter.

A ticker in the most severe drawdown class can stay in the scan when its
last close is above the average of its last five highs, i.e. it is
already recovering. The override is only honored while VIX is calm
enough, a band stricter than the volatility gate's own thresholds.
"""

import logging
from datetime import date
from typing import List, Optional

from ..config import ScannerConfig
from ..exceptions import ScanError
from ..gateway import QuoteGateway
from ..models import Bar
from ..utils import lookback_window

logger = logging.getLogger(__name__)


def has_momentum(bars: List[Bar], window: int = 5) -> bool:
    """
    True when the last close is above the mean of the last ``window`` highs.

    Returns False (never raises) when fewer than ``window`` highs or no
    closes are available.
    """
    closes = [bar.close for bar in bars]
    highs = [bar.high for bar in bars]
    if not closes or len(highs) < window:
        return False

    avg_high = sum(highs[-window:]) / window
    return closes[-1] > avg_high


class MomentumFilter:
    """Decides whether a severe drawdown is overridden by recent strength."""

    def __init__(self, gateway: QuoteGateway, config: Optional[ScannerConfig] = None):
        self.gateway = gateway
        self.config = config or ScannerConfig()

    def override(self, ticker: str, today: date) -> bool:
        """
        Fetch the short momentum window and test it.

        Gateway failures are logged and read as "no override".
        """
        start, end = lookback_window(self.config.momentum_lookback_days, today)
        try:
            bars = self.gateway.get_history(ticker, "daily", start, end)
        except ScanError as e:
            logger.warning(f"Momentum check failed for {ticker}: {e}")
            return False
        except Exception as e:
            logger.warning(f"Unexpected error in momentum check for {ticker}: {e}", exc_info=True)
            return False
        return has_momentum(bars, self.config.momentum_window)

    def retains(self, ticker: str, volatility_ratio: float, today: date) -> bool:
        """
        True when a severe drawdown should stay eligible.

        Requires VIX below ``momentum_max_ratio`` percent of its SMA and a
        positive momentum override.
        """
        if volatility_ratio >= self.config.momentum_max_ratio:
            logger.info(
                f"{ticker}: volatility {volatility_ratio}% >= "
                f"{self.config.momentum_max_ratio}%, momentum override not allowed"
            )
            return False

        retained = self.override(ticker, today)
        logger.info(f"{ticker}: momentum override {'applies' if retained else 'does not apply'}")
        return retained
