"""
Tradier API client module.

This module provides the production quote gateway over Tradier's
Market Data REST API. It includes:

- TradierClient: Bearer-token HTTP client implementing QuoteGateway
- Parsers converting Tradier payloads into Bar, Quote and OptionQuote
"""

from .client import TradierClient
from .exceptions import (
    TradierAPIError,
    TradierAuthenticationError,
    TradierInvalidSymbolError,
    TradierRateLimitError,
)

__all__ = [
    "TradierClient",
    "TradierAPIError",
    "TradierAuthenticationError",
    "TradierInvalidSymbolError",
    "TradierRateLimitError",
]
