"""
Tradier API client.

This module provides the authenticated HTTP client for Tradier's Market
Data API and implements the QuoteGateway protocol on top of it. It handles:

- Bearer token authentication
- Status code mapping to typed exceptions
- A fixed pause after each successful request

Requests are never retried. One failure is final for that unit of work
and the caller decides whether it is fatal.
"""

import logging
import time
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from ..config import TradierConfig
from ..models import Bar, OptionQuote, Quote
from . import endpoints
from .exceptions import (
    TradierAPIError,
    TradierAuthenticationError,
    TradierInvalidSymbolError,
    TradierRateLimitError,
)
from .parsers import parse_chain, parse_expirations, parse_history, parse_quote

logger = logging.getLogger(__name__)


class TradierClient:
    """
    Client for interacting with Tradier API.

    Example:
        config = TradierConfig.from_env()
        with TradierClient(config) as client:
            quote = client.get_quote("TSLA")
            print(f"Last price: ${quote.last}")
    """

    def __init__(self, config: TradierConfig):
        """
        Initialize client with configuration.

        Args:
            config: TradierConfig instance with token and settings
        """
        self.config = config
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Authorization": f"Bearer {config.api_key}",
                "User-Agent": "BWScanner/1.0",
            }
        )
        logger.info("Tradier client initialized")

    def _get_full_url(self, endpoint: str) -> str:
        """Construct full API URL from endpoint path."""
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        return f"{self.config.base_url.rstrip('/')}{endpoint}"

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Make authenticated GET request.

        Args:
            endpoint: API endpoint path
            params: Query parameters

        Returns:
            JSON response as dictionary

        Raises:
            TradierAuthenticationError: If the token is rejected (401/403)
            TradierRateLimitError: If rate limit exceeded (429)
            TradierInvalidSymbolError: If resource not found (404)
            TradierAPIError: For other API, network or decoding errors
        """
        url = self._get_full_url(endpoint)

        logger.debug(f"GET {url}")
        if params:
            logger.debug(f"  Params: {params}")

        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.exceptions.Timeout as e:
            raise TradierAPIError(
                f"Request timeout after {self.config.timeout}s for {endpoint}"
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise TradierAPIError("Connection error. Check your internet connection.") from e
        except requests.exceptions.RequestException as e:
            raise TradierAPIError(f"API request failed: {str(e)}") from e

        if response.status_code in (401, 403):
            logger.error(f"Authentication failed ({response.status_code})")
            raise TradierAuthenticationError(
                "Authentication failed. Check your Tradier token."
            )
        elif response.status_code == 429:
            logger.warning("Rate limit exceeded (429)")
            raise TradierRateLimitError(
                "Tradier API rate limit exceeded. Please wait before retrying."
            )
        elif response.status_code == 404:
            raise TradierInvalidSymbolError(
                f"Resource not found. Check symbol or endpoint: {endpoint}"
            )
        elif not response.ok:
            raise TradierAPIError(
                f"Tradier API error: {response.status_code} - {response.reason} - {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TradierAPIError(f"Invalid JSON response from API: {str(e)}") from e

        logger.debug(f"Response: {response.status_code}")

        if self.config.request_delay:
            time.sleep(self.config.request_delay)

        return data

    def get_history(
        self, symbol: str, interval: str, start: date, end: date
    ) -> List[Bar]:
        """
        Get historical bars for a symbol.

        Args:
            symbol: Stock or index symbol (e.g., "TSLA", "VIX")
            interval: "daily", "weekly" or "monthly"
            start: First date (inclusive)
            end: Last date (inclusive)

        Returns:
            Bars sorted oldest first (empty if Tradier has no data)
        """
        logger.info(f"Fetching {interval} history for {symbol} from {start} to {end}")
        params = {
            "symbol": symbol,
            "interval": interval,
            "start": start.isoformat(),
            "end": end.isoformat(),
        }
        data = self.get(endpoints.MARKETS_HISTORY, params=params)
        return parse_history(symbol, data)

    def get_quote(self, symbol: str) -> Quote:
        """
        Get the current quote for a symbol.

        Raises:
            TradierInvalidSymbolError: If symbol not in response
            TradierAPIError: For other API errors
        """
        logger.info(f"Fetching quote for {symbol}")
        data = self.get(endpoints.MARKETS_QUOTES, params={"symbols": symbol})
        return parse_quote(symbol, data)

    def get_expirations(self, symbol: str) -> List[date]:
        """Get option expiration dates for a symbol, earliest first."""
        logger.info(f"Fetching option expirations for {symbol}")
        data = self.get(endpoints.MARKETS_OPTION_EXPIRATIONS, params={"symbol": symbol})
        return parse_expirations(data)

    def get_chain(self, symbol: str, expiration: date) -> List[OptionQuote]:
        """Get the option chain for one expiration."""
        logger.info(f"Fetching option chain for {symbol} expiring {expiration}")
        params = {"symbol": symbol, "expiration": expiration.isoformat()}
        data = self.get(endpoints.MARKETS_OPTION_CHAINS, params=params)
        return parse_chain(symbol, expiration, data)

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
        logger.info("Tradier client closed")

    def __enter__(self) -> "TradierClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - ensures cleanup."""
        self.close()
