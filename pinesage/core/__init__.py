"""Indicator storage collaborators."""

from pinesage.core.indicators import IndicatorStore, is_indicator_name

__all__ = ["IndicatorStore", "is_indicator_name"]
