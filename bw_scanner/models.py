"""
Data models for the buy-write scan.

Rows are typed records with named fields. They are converted to the
positional lists the presentation layer indexes into only in
``bw_scanner.formatters``.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Union


class VolatilityRegime(Enum):
    """Market regime derived from VIX relative to its moving average."""

    HALT = "halt"  # No buy-writes at all
    CAUTION = "caution"  # ITM calls only
    NORMAL = "normal"  # Full scan


class DrawdownStatus(Enum):
    """
    Drawdown classification of a ticker, mildest first.

    The value is the label shown in the drawdown table.
    """

    OTM = "OTM"
    HYBRID = "Hybrid"
    DEEP_ITM = "Deep ITM"
    EVALUATE_ROTATION = "Evaluate Rotation"


@dataclass(frozen=True)
class Bar:
    """One daily price bar."""

    date: date
    close: float
    high: float


@dataclass(frozen=True)
class Quote:
    """Current quote for a symbol. ``last`` is None when the symbol has not traded."""

    symbol: str
    last: Optional[float]


@dataclass(frozen=True)
class OptionQuote:
    """A single contract from an option chain as returned by the gateway."""

    symbol: str
    strike: float
    bid: float
    ask: float
    option_type: str  # "call" or "put"
    expiration_date: date

    @property
    def is_call(self) -> bool:
        """True for call contracts."""
        return self.option_type.lower() == "call"


@dataclass(frozen=True)
class VolatilityReading:
    """
    Latest VIX close against its simple moving average.

    Attributes:
        last_close: Most recent VIX close
        sma: Simple moving average of the trailing window of closes
    """

    last_close: float
    sma: float

    @property
    def ratio(self) -> float:
        """Last close as a percent of the SMA, rounded to 2 decimals."""
        return round(self.last_close / self.sma * 100, 2)


@dataclass(frozen=True)
class DrawdownRow:
    """
    Drawdown of one ticker from its smoothed 12-week high.

    Attributes:
        ticker: Symbol
        current_price: Latest close
        raw_high: Highest close in the lookback
        smoothed_high: Highest 5-day average of daily highs
        drawdown_pct: Percent decline from the smoothed high (2 decimals)
        status: Classification of the drawdown
    """

    ticker: str
    current_price: float
    raw_high: float
    smoothed_high: float
    drawdown_pct: float
    status: DrawdownStatus


@dataclass(frozen=True)
class DrawdownFailure:
    """A ticker whose drawdown could not be computed."""

    ticker: str
    reason: str


DrawdownResult = Union[DrawdownRow, DrawdownFailure]


@dataclass(frozen=True)
class CallOption:
    """
    A scored call contract.

    Percentages are expressed in percent units (2.5 = 2.5%).

    Attributes:
        expiration: Contract expiration date
        ticker: Underlying symbol
        spot: Underlying last price
        strike: Strike price
        premium: Mid price, (bid + ask) / 2
        pct_moneyness: (strike / spot - 1) * 100, positive when OTM
        breakeven: Net cost of the buy-write, spot - premium
        cash_yield: Premium as a percent of spot
        assigned_gain: Return if called away, (strike + premium - spot) / spot
        works: True when the contract meets the strategy's minimum return
    """

    expiration: date
    ticker: str
    spot: float
    strike: float
    premium: float
    pct_moneyness: float
    breakeven: float
    cash_yield: float
    assigned_gain: float
    works: bool

    @property
    def is_otm(self) -> bool:
        """True when the strike is above spot."""
        return self.strike > self.spot


@dataclass
class OptionTable:
    """
    One rank bucket (e.g. "2nd closest OTM") across all eligible tickers.

    ``average_return`` is None until the table is summarized, and stays
    None for an empty table.
    """

    rows: list[CallOption] = field(default_factory=list)
    average_return: Optional[float] = None

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        """True when no ticker contributed a row."""
        return not self.rows


@dataclass
class ScanResult:
    """
    Complete output of one scan.

    Attributes:
        vix_status: Human-readable regime message
        halt: True when the volatility gate stopped the scan
        regime: Volatility regime
        volatility_ratio: VIX as a percent of its SMA
        drawdown_table: One result per ticker, in ticker order
        eligibility: Eligible tickers mapped to their retained status
        otm_tables: Closest, 2nd and 3rd closest OTM buckets
        itm_tables: Closest, 2nd and 3rd closest ITM buckets
        run_date: Pacific time stamp of the run
    """

    vix_status: str
    halt: bool
    regime: VolatilityRegime
    volatility_ratio: float
    run_date: str
    drawdown_table: list[DrawdownResult] = field(default_factory=list)
    eligibility: dict[str, DrawdownStatus] = field(default_factory=dict)
    otm_tables: list[OptionTable] = field(default_factory=list)
    itm_tables: list[OptionTable] = field(default_factory=list)
