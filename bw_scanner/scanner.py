"""
Buy-write scan pipeline.

This module provides the BWScanner class, the single entry point that
runs the volatility gate, drawdown classification, option scoring and
aggregation in order.

Each run is independent: results depend only on the configuration and on
what the gateway returns during the run. Two runs back to back can still
differ if market data changes between them.
"""

import logging
from datetime import datetime
from typing import List, Optional

import pytz

from .config import ScannerConfig
from .exceptions import ScanAbortedError, ScanError
from .gateway import QuoteGateway
from .models import CallOption, ScanResult, VolatilityRegime
from .options import OptionScorer, distribute_by_rank, summarize
from .signals import DrawdownClassifier, MomentumFilter, VolatilityGate, regime_message
from .utils import format_run_date, utc_today

logger = logging.getLogger(__name__)


class BWScanner:
    """
    Covered call ("buy-write") scanner.

    Example:
        config = ScannerConfig.load_from_file()
        with TradierClient(TradierConfig.load()) as client:
            result = BWScanner(client, config).run()
        print(result.vix_status)
    """

    def __init__(self, gateway: QuoteGateway, config: Optional[ScannerConfig] = None):
        """
        Initialize the scanner.

        Args:
            gateway: Market data source (TradierClient in production)
            config: Scan thresholds (uses defaults if None)
        """
        self.gateway = gateway
        self.config = config or ScannerConfig()
        self.volatility_gate = VolatilityGate(gateway, self.config)
        self.momentum_filter = MomentumFilter(gateway, self.config)
        self.drawdown_classifier = DrawdownClassifier(
            gateway, self.config, self.momentum_filter
        )
        self.option_scorer = OptionScorer(gateway, self.config)

        logger.info(f"BWScanner initialized for {len(self.config.tickers)} tickers")

    def run(self, now: Optional[datetime] = None) -> ScanResult:
        """
        Run one complete scan.

        Args:
            now: Optional clock reading (defaults to current time)

        Returns:
            ScanResult

        Raises:
            ScanAbortedError: If volatility data is unavailable or insufficient
        """
        if now is None:
            now = datetime.now(pytz.utc)
        today = utc_today(now)
        run_date = format_run_date(now)

        try:
            reading, regime = self.volatility_gate.evaluate(today)
        except ScanError as e:
            logger.error(f"Volatility data unavailable: {e}")
            raise ScanAbortedError(
                f"{self.config.volatility_symbol} data unavailable – aborting BW scan"
            ) from e

        ratio = reading.ratio
        vix_status = regime_message(ratio, regime, self.config.volatility_symbol)
        n_buckets = self.config.max_strikes_per_side

        if regime == VolatilityRegime.HALT:
            logger.warning(vix_status)
            return ScanResult(
                vix_status=vix_status,
                halt=True,
                regime=regime,
                volatility_ratio=ratio,
                run_date=run_date,
                otm_tables=[summarize([]) for _ in range(n_buckets)],
                itm_tables=[summarize([]) for _ in range(n_buckets)],
            )

        drawdown_table, eligibility = self.drawdown_classifier.scan(
            self.config.tickers, ratio, today
        )

        otm_buckets: List[List[CallOption]] = [[] for _ in range(n_buckets)]
        itm_buckets: List[List[CallOption]] = [[] for _ in range(n_buckets)]

        for ticker in eligibility:
            scored = self.option_scorer.score_ticker(ticker, today)
            if scored is None:
                continue
            otm_rows, itm_rows = scored
            if regime != VolatilityRegime.CAUTION:
                distribute_by_rank(otm_buckets, otm_rows)
            distribute_by_rank(itm_buckets, itm_rows)

        if regime == VolatilityRegime.CAUTION:
            logger.info("High-volatility caution: OTM tables suppressed")

        return ScanResult(
            vix_status=vix_status,
            halt=False,
            regime=regime,
            volatility_ratio=ratio,
            run_date=run_date,
            drawdown_table=drawdown_table,
            eligibility=eligibility,
            otm_tables=[summarize(bucket) for bucket in otm_buckets],
            itm_tables=[summarize(bucket) for bucket in itm_buckets],
        )
