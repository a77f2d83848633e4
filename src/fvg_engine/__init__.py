"""fvg-engine: fair value gap detection over OHLC candle series."""

from .engine import detect_fair_value_gaps, summarize
from .fills import track_fills
from .indicators import FvgIndicator, detect_for_indicators
from .models import Candle, CandleOrder, Gap, GapType
from .registry import fetch, scan
from .scanner import detect_gaps

__all__ = [
    "Candle",
    "CandleOrder",
    "FvgIndicator",
    "Gap",
    "GapType",
    "detect_fair_value_gaps",
    "detect_for_indicators",
    "detect_gaps",
    "fetch",
    "scan",
    "summarize",
    "track_fills",
]
__version__ = "0.1.0"
