"""
Market signal package.

This package contains the per-scan signal stages:
- volatility: VIX circuit breaker (HALT / CAUTION / NORMAL)
- drawdown: drawdown from a smoothed high-water mark
- momentum: override for severe drawdowns with strong recent price action
"""

from .drawdown import DrawdownClassifier, classify_drawdown, compute_drawdown, smoothed_high
from .momentum import MomentumFilter, has_momentum
from .volatility import VolatilityGate, classify_regime, compute_volatility_reading, regime_message

__all__ = [
    # volatility
    "VolatilityGate",
    "classify_regime",
    "compute_volatility_reading",
    "regime_message",
    # drawdown
    "DrawdownClassifier",
    "classify_drawdown",
    "compute_drawdown",
    "smoothed_high",
    # momentum
    "MomentumFilter",
    "has_momentum",
]
