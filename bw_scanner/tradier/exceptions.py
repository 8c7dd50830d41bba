"""Exceptions for Tradier API client."""

from ..exceptions import ScanError


class TradierAPIError(ScanError):
    """Base exception for Tradier API errors."""

    pass


class TradierAuthenticationError(TradierAPIError):
    """
    Authentication failure with Tradier API.

    The bearer token is missing, invalid or lacks market data access.
    """

    pass


class TradierRateLimitError(TradierAPIError):
    """API rate limit exceeded."""

    pass


class TradierInvalidSymbolError(TradierAPIError):
    """Invalid or unknown symbol."""

    pass
