"""
Quote gateway contract.

The scan pipeline only depends on this protocol. ``TradierClient`` is the
production implementation; tests supply in-memory fakes.
"""

from datetime import date
from typing import Protocol

from .models import Bar, OptionQuote, Quote


class QuoteGateway(Protocol):
    """Market data operations consumed by the scan."""

    def get_history(
        self, symbol: str, interval: str, start: date, end: date
    ) -> list[Bar]:
        """Daily bars for ``symbol`` between ``start`` and ``end`` inclusive, oldest first."""
        ...

    def get_quote(self, symbol: str) -> Quote:
        """Current quote for ``symbol``."""
        ...

    def get_expirations(self, symbol: str) -> list[date]:
        """Option expiration dates for ``symbol``, earliest first."""
        ...

    def get_chain(self, symbol: str, expiration: date) -> list[OptionQuote]:
        """All contracts for ``symbol`` expiring on ``expiration``."""
        ...
