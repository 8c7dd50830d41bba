"""
Option scorer for buy-write candidates.

For each eligible ticker, picks the nearest weekly expiration, takes the
closest strikes on each side of spot and computes what a buy-write on
each contract would return.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from ..config import ScannerConfig
from ..exceptions import ScanError
from ..gateway import QuoteGateway
from ..models import CallOption, OptionQuote
from ..utils import days_until

logger = logging.getLogger(__name__)


def select_expiration(
    expirations: List[date], today: date, window_days: int = 7
) -> Optional[date]:
    """Earliest expiration between today and ``window_days`` out, inclusive."""
    in_window = [
        exp for exp in expirations if 0 <= days_until(exp, today) <= window_days
    ]
    return min(in_window) if in_window else None


def partition_calls(
    chain: List[OptionQuote], spot: float, limit: int = 3
) -> Tuple[List[OptionQuote], List[OptionQuote]]:
    """
    Split calls into the closest OTM and ITM strikes.

    OTM (strike > spot) is ordered by ascending strike, ITM (strike < spot)
    by distance from spot. A strike exactly at spot belongs to neither.
    Puts are ignored.

    Returns:
        (otm, itm), each at most ``limit`` long
    """
    calls = [c for c in chain if c.is_call]
    otm = sorted((c for c in calls if c.strike > spot), key=lambda c: c.strike)
    itm = sorted((c for c in calls if c.strike < spot), key=lambda c: abs(c.strike - spot))
    return otm[:limit], itm[:limit]


def score_call(
    contract: OptionQuote,
    spot: float,
    ticker: str,
    config: Optional[ScannerConfig] = None,
) -> Optional[CallOption]:
    """
    Compute buy-write metrics for one call.

    Returns None when the contract has neither bid nor ask.

    Formulas (percent units):
        premium = (bid + ask) / 2
        breakeven = spot - premium
        cash_yield = premium / spot * 100
        assigned_gain = (strike + premium - spot) / spot * 100
        pct_moneyness = (strike / spot - 1) * 100

    An OTM call works with a cash yield of at least 2%; an ITM call works
    with an assigned gain of at least 1.5%.
    """
    config = config or ScannerConfig()
    if contract.bid == 0 and contract.ask == 0:
        logger.debug(f"{ticker} {contract.strike} call has no quote, skipping")
        return None

    strike = contract.strike
    premium = (contract.bid + contract.ask) / 2
    cash_yield = premium / spot * 100
    assigned_gain = (strike + premium - spot) / spot * 100

    works = (strike > spot and cash_yield >= config.min_otm_cash_yield_pct) or (
        strike < spot and assigned_gain >= config.min_itm_assigned_gain_pct
    )

    return CallOption(
        expiration=contract.expiration_date,
        ticker=ticker,
        spot=spot,
        strike=strike,
        premium=premium,
        pct_moneyness=(strike / spot - 1) * 100,
        breakeven=spot - premium,
        cash_yield=cash_yield,
        assigned_gain=assigned_gain,
        works=works,
    )


class OptionScorer:
    """
    Fetches quotes and chains for an eligible ticker and scores its calls.

    Example:
        scorer = OptionScorer(client, config)
        scored = scorer.score_ticker("TSLA", today)
        if scored:
            otm_rows, itm_rows = scored
    """

    def __init__(self, gateway: QuoteGateway, config: Optional[ScannerConfig] = None):
        self.gateway = gateway
        self.config = config or ScannerConfig()

    def _score_side(
        self, contracts: List[OptionQuote], spot: float, ticker: str
    ) -> List[CallOption]:
        scored = (score_call(c, spot, ticker, self.config) for c in contracts)
        return [row for row in scored if row is not None]

    def score_ticker(
        self, ticker: str, today: date
    ) -> Optional[Tuple[List[CallOption], List[CallOption]]]:
        """
        Score the closest OTM and ITM calls for one ticker.

        Returns None (soft skip) when spot is unavailable, no expiration
        falls inside the window, or a gateway call fails.

        Returns:
            (otm rows, itm rows), closest first
        """
        try:
            spot = self.gateway.get_quote(ticker).last
            if not spot:
                logger.warning(f"{ticker}: no spot price, skipping option scan")
                return None

            expiration = select_expiration(
                self.gateway.get_expirations(ticker),
                today,
                self.config.expiration_window_days,
            )
            if expiration is None:
                logger.warning(
                    f"{ticker}: no expiration within {self.config.expiration_window_days} days, "
                    "skipping option scan"
                )
                return None

            chain = self.gateway.get_chain(ticker, expiration)
        except ScanError as e:
            logger.warning(f"{ticker}: option data unavailable: {e}")
            return None
        except Exception as e:
            logger.warning(f"{ticker}: unexpected error fetching option data: {e}", exc_info=True)
            return None

        otm, itm = partition_calls(chain, spot, self.config.max_strikes_per_side)
        otm_rows = self._score_side(otm, spot, ticker)
        itm_rows = self._score_side(itm, spot, ticker)

        logger.info(
            f"{ticker}: spot={spot:.2f} exp={expiration} "
            f"scored {len(otm_rows)} OTM / {len(itm_rows)} ITM calls"
        )
        return otm_rows, itm_rows
