"""PineSage - static analysis tools for TradingView indicator scripts."""

__version__ = "1.0.0"
