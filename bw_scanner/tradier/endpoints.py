"""
Tradier API endpoint definitions.

Documentation: https://documentation.tradier.com/brokerage-api
"""

# Market Data Endpoints
MARKETS_HISTORY = "/markets/history"
MARKETS_QUOTES = "/markets/quotes"
MARKETS_OPTION_EXPIRATIONS = "/markets/options/expirations"
MARKETS_OPTION_CHAINS = "/markets/options/chains"
