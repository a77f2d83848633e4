"""Daily candle sources, all returning newest-first series."""

from fvg_engine.sources.base import CandleSource

__all__ = ["CandleSource"]
