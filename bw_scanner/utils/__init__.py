"""Shared utility functions."""

from .date_utils import days_until, format_run_date, lookback_window, utc_today

__all__ = ["days_until", "format_run_date", "lookback_window", "utc_today"]
