"""
Tradier API response parsers.

This module converts raw Tradier payloads into internal models. Tradier
collapses single-element lists into a bare object and empty results into
``null``, so every parser normalizes through ``_as_list`` first.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from ..models import Bar, OptionQuote, Quote
from .exceptions import TradierAPIError, TradierInvalidSymbolError

logger = logging.getLogger(__name__)


def _as_list(value: Any) -> List[Any]:
    """Normalize Tradier's null / object / list shapes to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _section(data: Any, key: str) -> Dict[str, Any]:
    """Return ``data[key]`` as a dict, treating null and the string "null" as empty."""
    if not isinstance(data, dict):
        raise TradierAPIError(f"Unexpected Tradier response: {data!r}")
    section = data.get(key)
    if isinstance(section, dict):
        return section
    return {}


def _to_float(value: Any) -> Optional[float]:
    """Convert a numeric field, returning None for missing or malformed values."""
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_history(symbol: str, data: Dict[str, Any]) -> List[Bar]:
    """
    Parse a /markets/history response into bars, oldest first.

    Days without a positive close and high are dropped.

    Args:
        symbol: Symbol the history was requested for
        data: Raw Tradier API response

    Returns:
        List of Bar objects (possibly empty)
    """
    days = _as_list(_section(data, "history").get("day"))

    bars: List[Bar] = []
    for day in days:
        close = _to_float(day.get("close"))
        high = _to_float(day.get("high"))
        if not close or not high:
            logger.debug(f"Skipping incomplete bar for {symbol}: {day}")
            continue
        try:
            bar_date = date.fromisoformat(day["date"])
        except (KeyError, TypeError, ValueError):
            logger.debug(f"Skipping bar with bad date for {symbol}: {day}")
            continue
        bars.append(Bar(date=bar_date, close=close, high=high))

    bars.sort(key=lambda b: b.date)
    return bars


def parse_quote(symbol: str, data: Dict[str, Any]) -> Quote:
    """
    Parse a /markets/quotes response for a single symbol.

    Raises:
        TradierInvalidSymbolError: If the symbol is not in the response
    """
    quotes = _as_list(_section(data, "quotes").get("quote"))
    for quote in quotes:
        if str(quote.get("symbol", "")).upper() == symbol.upper():
            return Quote(symbol=symbol, last=_to_float(quote.get("last")))

    raise TradierInvalidSymbolError(f"Symbol {symbol} not found in quote response")


def parse_expirations(data: Dict[str, Any]) -> List[date]:
    """Parse a /markets/options/expirations response into sorted dates."""
    expirations: List[date] = []
    for raw in _as_list(_section(data, "expirations").get("date")):
        try:
            expirations.append(date.fromisoformat(raw))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed expiration date: {raw!r}")
    return sorted(expirations)


def parse_chain(symbol: str, expiration: date, data: Dict[str, Any]) -> List[OptionQuote]:
    """
    Parse a /markets/options/chains response.

    Missing bid or ask values are read as 0.0, which the scorer treats as
    "no market".

    Args:
        symbol: Underlying symbol
        expiration: Expiration the chain was requested for
        data: Raw Tradier API response

    Returns:
        List of OptionQuote objects, calls and puts
    """
    contracts: List[OptionQuote] = []
    for option in _as_list(_section(data, "options").get("option")):
        strike = _to_float(option.get("strike"))
        if strike is None:
            continue

        raw_expiration = option.get("expiration_date")
        try:
            contract_expiration = (
                date.fromisoformat(raw_expiration) if raw_expiration else expiration
            )
        except (TypeError, ValueError):
            contract_expiration = expiration

        contracts.append(
            OptionQuote(
                symbol=symbol,
                strike=strike,
                bid=_to_float(option.get("bid")) or 0.0,
                ask=_to_float(option.get("ask")) or 0.0,
                option_type=str(option.get("option_type", "")).lower(),
                expiration_date=contract_expiration,
            )
        )

    return contracts
