"""
Drawdown classifier.

Measures each ticker's decline from a smoothed 12-week high and sorts it
into the call-writing approach that fits: OTM calls for shallow
drawdowns, a hybrid mix, deep ITM calls, or a rotation review.

The high-water mark is the highest 5-day average of daily highs, not the
raw high, so one spike day does not read as a deep drawdown.
"""

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from ..config import ScannerConfig
from ..exceptions import NoDataError, ScanError
from ..gateway import QuoteGateway
from ..models import Bar, DrawdownFailure, DrawdownResult, DrawdownRow, DrawdownStatus
from ..utils import lookback_window
from .momentum import MomentumFilter

logger = logging.getLogger(__name__)


def smoothed_high(highs: List[float], window: int = 5, cap: int = 60) -> float:
    """
    Highest trailing moving average of daily highs.

    Only the most recent ``cap`` averages are considered.

    Args:
        highs: Daily highs, oldest first
        window: Moving average length
        cap: Number of most recent averages to consider

    Raises:
        NoDataError: If fewer than ``window`` highs are available
    """
    if len(highs) < window:
        raise NoDataError(f"Need {window} highs to smooth, got {len(highs)}")

    averages = [
        sum(highs[i - window + 1 : i + 1]) / window for i in range(window - 1, len(highs))
    ]
    return max(averages[-cap:])


def classify_drawdown(
    drawdown_pct: float,
    rotation_pct: float = 30.0,
    deep_itm_pct: float = 20.0,
    hybrid_pct: float = 10.0,
) -> DrawdownStatus:
    """
    Classify a drawdown percent, most severe first.

    >30 rotation, [20, 30] deep ITM, [10, 20) hybrid, <10 OTM.
    """
    if drawdown_pct > rotation_pct:
        return DrawdownStatus.EVALUATE_ROTATION
    if drawdown_pct >= deep_itm_pct:
        return DrawdownStatus.DEEP_ITM
    if drawdown_pct >= hybrid_pct:
        return DrawdownStatus.HYBRID
    return DrawdownStatus.OTM


def compute_drawdown(
    ticker: str, bars: List[Bar], config: Optional[ScannerConfig] = None
) -> DrawdownRow:
    """
    Build the drawdown row for one ticker.

    The status is derived from the rounded drawdown so the displayed
    percent and the status always agree.

    Raises:
        NoDataError: If the series is empty or too short to smooth
    """
    config = config or ScannerConfig()
    if len(bars) < config.smoothing_window:
        raise NoDataError("No data")

    closes = [bar.close for bar in bars]
    highs = [bar.high for bar in bars]

    current = closes[-1]
    high = smoothed_high(highs, config.smoothing_window, config.smoothed_high_cap)
    drawdown_pct = round((high - current) / high * 100, 2)

    return DrawdownRow(
        ticker=ticker,
        current_price=current,
        raw_high=max(closes),
        smoothed_high=high,
        drawdown_pct=drawdown_pct,
        status=classify_drawdown(
            drawdown_pct,
            config.rotation_drawdown_pct,
            config.deep_itm_drawdown_pct,
            config.hybrid_drawdown_pct,
        ),
    )


class DrawdownClassifier:
    """
    Classifies tickers and builds the eligibility set.

    Example:
        classifier = DrawdownClassifier(client, config)
        table, eligible = classifier.scan(config.tickers, 118.4, today)
    """

    def __init__(
        self,
        gateway: QuoteGateway,
        config: Optional[ScannerConfig] = None,
        momentum_filter: Optional[MomentumFilter] = None,
    ):
        self.gateway = gateway
        self.config = config or ScannerConfig()
        self.momentum_filter = momentum_filter or MomentumFilter(gateway, self.config)

    def classify(self, ticker: str, today: date) -> DrawdownResult:
        """
        Fetch the 12-week history and classify one ticker.

        A failed fetch or unusable series yields a DrawdownFailure instead
        of raising, so one bad ticker does not stop the scan.
        """
        start, end = lookback_window(self.config.drawdown_lookback_days, today)
        try:
            bars = self.gateway.get_history(ticker, "daily", start, end)
            row = compute_drawdown(ticker, bars, self.config)
        except ScanError as e:
            logger.warning(f"Drawdown failed for {ticker}: {e}")
            return DrawdownFailure(ticker=ticker, reason=str(e))
        except Exception as e:
            logger.warning(f"Unexpected error computing drawdown for {ticker}: {e}", exc_info=True)
            return DrawdownFailure(ticker=ticker, reason=str(e) or type(e).__name__)

        logger.info(f"{ticker}: drawdown {row.drawdown_pct}% -> {row.status.value}")
        return row

    def is_eligible(self, result: DrawdownResult, volatility_ratio: float, today: date) -> bool:
        """Failures are never eligible; rotation candidates need a momentum override."""
        if isinstance(result, DrawdownFailure):
            return False
        if result.status == DrawdownStatus.EVALUATE_ROTATION:
            return self.momentum_filter.retains(result.ticker, volatility_ratio, today)
        return True

    def scan(
        self, tickers: List[str], volatility_ratio: float, today: date
    ) -> Tuple[List[DrawdownResult], Dict[str, DrawdownStatus]]:
        """
        Classify every ticker in order.

        Returns:
            (drawdown table in ticker order, eligible ticker -> status)
        """
        table: List[DrawdownResult] = []
        eligibility: Dict[str, DrawdownStatus] = {}

        for ticker in tickers:
            result = self.classify(ticker, today)
            table.append(result)
            if self.is_eligible(result, volatility_ratio, today):
                eligibility[ticker] = result.status

        logger.info(f"{len(eligibility)}/{len(tickers)} tickers eligible for buy-writes")
        return table, eligibility
