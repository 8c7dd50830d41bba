"""Shared pytest fixtures for scanner tests.

Provides an in-memory quote gateway that serves bars by date range, so
the 84-day drawdown window and the 10-day momentum window see different
slices of the same series, just as they do against Tradier.
"""

from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

import pytest
import pytz

from bw_scanner.models import Bar, OptionQuote, Quote
from bw_scanner.tradier.exceptions import TradierAPIError

TODAY = date(2026, 10, 16)
NOW = pytz.utc.localize(datetime(2026, 10, 16, 20, 0, 0))


def build_bars(
    closes: List[float], highs: Optional[List[float]] = None, end: date = TODAY
) -> List[Bar]:
    """Consecutive daily bars ending on ``end``; highs default to the closes."""
    highs = highs if highs is not None else list(closes)
    assert len(highs) == len(closes)
    start = end - timedelta(days=len(closes) - 1)
    return [
        Bar(date=start + timedelta(days=i), close=c, high=h)
        for i, (c, h) in enumerate(zip(closes, highs))
    ]


def build_vix(last: float, base: float = 20.0, count: int = 30) -> List[Bar]:
    """VIX series flat at ``base`` except for the final close."""
    closes = [base] * (count - 1) + [last]
    return build_bars(closes)


class FakeGateway:
    """
    In-memory QuoteGateway.

    Attributes:
        history: symbol -> full bar series (filtered by requested range)
        quotes: symbol -> last price (None for no trade)
        expirations: symbol -> expiration dates
        chains: (symbol, expiration) -> contracts
        failing: symbols whose every request raises TradierAPIError
        calls: log of (operation, symbol) tuples in call order
    """

    def __init__(self) -> None:
        self.history: Dict[str, List[Bar]] = {}
        self.quotes: Dict[str, Optional[float]] = {}
        self.expirations: Dict[str, List[date]] = {}
        self.chains: Dict[tuple, List[OptionQuote]] = {}
        self.failing: set = set()
        self.calls: List[tuple] = []

    def _check(self, operation: str, symbol: str) -> None:
        self.calls.append((operation, symbol))
        if symbol in self.failing:
            raise TradierAPIError(f"Tradier API error: 500 - {symbol} unavailable")

    def get_history(self, symbol: str, interval: str, start: date, end: date) -> List[Bar]:
        self._check("history", symbol)
        return [b for b in self.history.get(symbol, []) if start <= b.date <= end]

    def get_quote(self, symbol: str) -> Quote:
        self._check("quote", symbol)
        return Quote(symbol=symbol, last=self.quotes.get(symbol))

    def get_expirations(self, symbol: str) -> List[date]:
        self._check("expirations", symbol)
        return list(self.expirations.get(symbol, []))

    def get_chain(self, symbol: str, expiration: date) -> List[OptionQuote]:
        self._check("chain", symbol)
        return list(self.chains.get((symbol, expiration), []))

    def add_ticker(
        self,
        symbol: str,
        bars: List[Bar],
        spot: Optional[float] = None,
        chain: Optional[List[tuple]] = None,
        days_out: int = 3,
    ) -> None:
        """
        Register history and, optionally, an option chain.

        ``chain`` entries are (strike, bid, ask) call quotes expiring
        ``days_out`` days after TODAY.
        """
        self.history[symbol] = bars
        if spot is None:
            return
        expiration = TODAY + timedelta(days=days_out)
        self.quotes[symbol] = spot
        self.expirations[symbol] = [expiration, expiration + timedelta(days=7)]
        self.chains[(symbol, expiration)] = [
            OptionQuote(
                symbol=symbol,
                strike=strike,
                bid=bid,
                ask=ask,
                option_type="call",
                expiration_date=expiration,
            )
            for strike, bid, ask in (chain or [])
        ]


@pytest.fixture
def today() -> date:
    """Fixed scan date."""
    return TODAY


@pytest.fixture
def now() -> datetime:
    """Fixed scan clock (1:00 PM Pacific on TODAY)."""
    return NOW


@pytest.fixture
def gateway() -> FakeGateway:
    """Empty in-memory gateway."""
    return FakeGateway()


@pytest.fixture
def make_bars() -> Callable[..., List[Bar]]:
    """Factory for consecutive daily bars ending TODAY."""
    return build_bars


@pytest.fixture
def make_vix() -> Callable[..., List[Bar]]:
    """Factory for VIX series with a chosen final close."""
    return build_vix
