"""Seeking Alpha source — daily historical prices via the RapidAPI gateway.

Requires a RapidAPI key subscribed to the Seeking Alpha API.
Set ``FVG_SEEKING_ALPHA_API_KEY`` before use.
"""

from __future__ import annotations

import asyncio
import datetime
import math
import re

import requests
import structlog

from fvg_engine.config import get_settings
from fvg_engine.models import Candle
from fvg_engine.sources.base import CandleSource

log = structlog.get_logger(__name__)

_HOST = "seeking-alpha.p.rapidapi.com"
_PRICES_URL = f"https://{_HOST}/symbols/get-historical-prices"

_STOCK_RE = re.compile(r"^[A-Z][A-Z0-9]{0,6}(\.[A-Z]{1,3})?$")


class SeekingAlphaSource(CandleSource):
    """Fetches daily OHLCV bars from Seeking Alpha.

    ``requests`` is synchronous; the blocking call runs in a thread pool so
    the async interface stays non-blocking.
    """

    name = "seekingalpha"

    def supports(self, symbol: str) -> bool:
        return bool(_STOCK_RE.match(symbol.upper()))

    async def fetch(self, symbol: str, limit: int) -> list[Candle] | None:
        settings = get_settings()
        api_key = settings.seeking_alpha_api_key
        if not api_key:
            raise RuntimeError(
                "FVG_SEEKING_ALPHA_API_KEY environment variable is not set. "
                "Subscribe to the Seeking Alpha API on https://rapidapi.com"
            )

        end = datetime.date.today()
        # Weekends and holidays: ask for ~1.5x calendar days
        start = end - datetime.timedelta(days=int(limit * 1.5 + 5))
        payload = await asyncio.to_thread(
            self._download, symbol.upper(), start, end, api_key, settings.http_timeout
        )
        return self._parse(payload, limit)

    @staticmethod
    def _download(
        symbol: str,
        start: datetime.date,
        end: datetime.date,
        api_key: str,
        timeout: float,
    ) -> dict | None:
        """Blocking Seeking Alpha request — called via asyncio.to_thread."""
        headers = {"x-rapidapi-key": api_key, "x-rapidapi-host": _HOST}
        params = {
            "symbol": symbol,
            "show_by": "day",
            "start": start.isoformat(),
            "end": end.isoformat(),
            "sort": "as_of_date",
        }
        try:
            resp = requests.get(_PRICES_URL, headers=headers, params=params, timeout=timeout)
            if resp.status_code != 200:
                log.warning("seekingalpha_http_error", symbol=symbol, status=resp.status_code)
                return None
            data = resp.json()
        except requests.RequestException as exc:
            # includes requests.JSONDecodeError for non-JSON bodies
            log.warning("seekingalpha_request_failed", symbol=symbol, error=repr(exc))
            return None
        return data if isinstance(data, dict) else None

    @staticmethod
    def _parse(payload: dict | None, limit: int) -> list[Candle] | None:
        """Convert a historical-prices response into newest-first candles.

        Rows without attributes, without a date, or with non-numeric prices
        are skipped.
        """
        if not payload or not isinstance(payload.get("data"), list):
            return None

        candles: list[Candle] = []
        for item in payload["data"]:
            attrs = item.get("attributes") if isinstance(item, dict) else None
            if not attrs or not attrs.get("as_of_date"):
                continue
            try:
                prices = [float(attrs[key]) for key in ("open", "high", "low", "close")]
            except (KeyError, TypeError, ValueError):
                continue
            if any(math.isnan(p) for p in prices):
                continue
            try:
                volume = float(attrs.get("volume") or 0.0)
            except (TypeError, ValueError):
                volume = 0.0
            candles.append(Candle(attrs["as_of_date"], *prices, volume=volume))

        candles.sort(key=lambda c: c.date, reverse=True)
        return candles[:limit] or None
