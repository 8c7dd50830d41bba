"""Custom exceptions for buy-write scan operations."""


class ScanError(Exception):
    """Base exception for scan operations."""

    pass


class ConfigurationError(ScanError):
    """Invalid configuration or missing gateway credential."""

    pass


class InsufficientDataError(ScanError):
    """Not enough volatility closes to compute the moving average."""

    pass


class NoDataError(ScanError):
    """Price history for a ticker is empty or unusable."""

    pass


class ScanAbortedError(ScanError):
    """
    Scan-fatal failure.

    Raised once by the pipeline entry point when the scan cannot produce
    any result, e.g. VIX data is unavailable. The original cause is
    chained via ``__cause__``.
    """

    pass
