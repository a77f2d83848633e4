"""Alpha Vantage source — daily stock bars from the TIME_SERIES_DAILY endpoint.

Requires an Alpha Vantage API key: https://www.alphavantage.co/support/#api-key
Set ``FVG_ALPHA_VANTAGE_API_KEY`` before use.
"""

from __future__ import annotations

import asyncio
import re

import aiohttp
import structlog

from fvg_engine.config import get_settings
from fvg_engine.models import Candle
from fvg_engine.sources.base import CandleSource

log = structlog.get_logger(__name__)

_QUERY_URL = "https://www.alphavantage.co/query"
_SERIES_KEY = "Time Series (Daily)"

# Payload keys Alpha Vantage uses instead of data: bad symbol, rate limit
_NO_DATA_KEYS = ("Error Message", "Note", "Information")

_STOCK_RE = re.compile(r"^[A-Z][A-Z0-9]{0,6}(\.[A-Z]{1,3})?$")


class AlphaVantageSource(CandleSource):
    """Fetches daily OHLCV bars from Alpha Vantage.

    Uses ``outputsize=compact`` (latest 100 bars). Rate-limit and error
    payloads return ``None`` so the registry can fall through to the next
    source.
    """

    name = "alphavantage"

    def supports(self, symbol: str) -> bool:
        return bool(_STOCK_RE.match(symbol.upper()))

    async def fetch(self, symbol: str, limit: int) -> list[Candle] | None:
        settings = get_settings()
        api_key = settings.alpha_vantage_api_key
        if not api_key:
            raise RuntimeError(
                "FVG_ALPHA_VANTAGE_API_KEY environment variable is not set. "
                "Get a free key at https://www.alphavantage.co/support/#api-key"
            )

        params = {
            "function": "TIME_SERIES_DAILY",
            "symbol": symbol.upper(),
            "outputsize": "compact" if limit <= 100 else "full",
            "apikey": api_key,
        }
        timeout = aiohttp.ClientTimeout(total=settings.http_timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(_QUERY_URL, params=params) as resp:
                    if resp.status != 200:
                        log.warning("alphavantage_http_error", symbol=symbol, status=resp.status)
                        return None
                    payload = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            # ValueError: body was not JSON
            log.warning("alphavantage_request_failed", symbol=symbol, error=repr(exc))
            return None

        return self._parse(payload, limit)

    @staticmethod
    def _parse(payload: dict | None, limit: int) -> list[Candle] | None:
        """Convert a TIME_SERIES_DAILY response into newest-first candles."""
        if not payload:
            return None

        for key in _NO_DATA_KEYS:
            if key in payload:
                log.warning("alphavantage_no_data", reason=key, detail=payload[key])
                return None

        series = payload.get(_SERIES_KEY)
        if not isinstance(series, dict):
            return None

        candles: list[Candle] = []
        for date, values in series.items():
            try:
                candles.append(
                    Candle(
                        date=date,
                        open=float(values["1. open"]),
                        high=float(values["2. high"]),
                        low=float(values["3. low"]),
                        close=float(values["4. close"]),
                        volume=float(values.get("5. volume") or 0.0),
                    )
                )
            except (KeyError, TypeError, ValueError):
                continue

        # ISO dates sort lexically
        candles.sort(key=lambda c: c.date, reverse=True)
        return candles[:limit] or None
