"""Source registry — fetches candles through a fallback chain and scans them.

Chain order follows data quality for daily bars:
- Alpha Vantage  (primary, needs ``FVG_ALPHA_VANTAGE_API_KEY``)
- Seeking Alpha  (fallback, needs ``FVG_SEEKING_ALPHA_API_KEY``)
- yfinance       (keyless fallback)
- mock           (only when ``FVG_ALLOW_MOCK_DATA`` is set)
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from fvg_engine.config import get_settings
from fvg_engine.indicators import FvgIndicator, detect_for_indicators
from fvg_engine.models import Candle, CandleOrder, Gap
from fvg_engine.sources.base import CandleSource

log = structlog.get_logger(__name__)

# Lazy imports: sources are only loaded when first used
_alphavantage: CandleSource | None = None
_seekingalpha: CandleSource | None = None
_yfinance: CandleSource | None = None
_mock: CandleSource | None = None


def _get_alphavantage() -> CandleSource:
    global _alphavantage
    if _alphavantage is None:
        from fvg_engine.sources.alphavantage import AlphaVantageSource  # noqa: PLC0415
        _alphavantage = AlphaVantageSource()
    return _alphavantage


def _get_seekingalpha() -> CandleSource:
    global _seekingalpha
    if _seekingalpha is None:
        from fvg_engine.sources.seekingalpha import SeekingAlphaSource  # noqa: PLC0415
        _seekingalpha = SeekingAlphaSource()
    return _seekingalpha


def _get_yfinance() -> CandleSource:
    global _yfinance
    if _yfinance is None:
        from fvg_engine.sources.yfinance import YFinanceSource  # noqa: PLC0415
        _yfinance = YFinanceSource()
    return _yfinance


def _get_mock() -> CandleSource:
    global _mock
    if _mock is None:
        from fvg_engine.sources.mock import MockSource  # noqa: PLC0415
        _mock = MockSource()
    return _mock


def pick(symbol: str) -> list[CandleSource]:
    """Return the ordered source chain for *symbol*."""
    chain = [_get_alphavantage(), _get_seekingalpha(), _get_yfinance()]
    if get_settings().allow_mock_data:
        chain.append(_get_mock())
    return chain


async def fetch(symbol: str, limit: int = 100) -> list[Candle] | None:
    """Fetch daily candles for *symbol*, newest first, trying sources in order.

    Returns the first non-empty result, or ``None`` if every source fails.
    Sources that are not configured (missing API key) are skipped.
    """
    for source in pick(symbol):
        if not source.supports(symbol):
            continue
        try:
            result = await source.fetch(symbol, limit)
        except RuntimeError as exc:
            log.warning("candle_source_unavailable", source=source.name, error=str(exc))
            continue
        if result:
            log.info("candles_fetched", symbol=symbol, source=source.name, count=len(result))
            return result
        log.info("candle_source_empty", symbol=symbol, source=source.name)

    log.error("candle_sources_exhausted", symbol=symbol)
    return None


def default_indicator() -> FvgIndicator:
    """A single indicator using the configured detection thresholds."""
    settings = get_settings()
    return FvgIndicator(
        id="fvg",
        min_gap_size=settings.min_gap_size_pct,
        min_candle_size=settings.min_candle_size_pct,
    )


async def scan(
    symbol: str,
    indicators: Sequence[FvgIndicator] | None = None,
    limit: int = 100,
) -> list[Gap] | None:
    """Fetch *symbol*'s candles and detect fair value gaps on them.

    Returns ``None`` when no source has data for *symbol*.
    """
    candles = await fetch(symbol, limit)
    if candles is None:
        return None
    if indicators is None:
        indicators = [default_indicator()]
    return detect_for_indicators(candles, indicators, order=CandleOrder.DESCENDING)
