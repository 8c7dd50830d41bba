"""
Buy-write (covered call) scanner for leveraged ETFs.

Polls the Tradier market data API for a fixed ticker universe, gates the
scan on VIX relative to its 20-day average, classifies each ticker's
drawdown from a smoothed high, and scores near-dated call options for
the tickers that remain eligible.
"""

__version__ = "1.0.0"
