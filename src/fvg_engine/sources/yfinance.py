"""yfinance source — daily bars for stocks, ETFs, indices and crypto."""

from __future__ import annotations

import asyncio
import datetime
import re

import structlog
import yfinance as yf

from fvg_engine.models import Candle
from fvg_engine.sources.base import CandleSource

log = structlog.get_logger(__name__)

_STOCK_RE = re.compile(r"^(\^[A-Z]+|[A-Z]{1,5})$")
_INTL_STOCK_RE = re.compile(r"^[A-Z0-9]{1,7}\.[A-Z]{1,3}$")
_CRYPTO_RE = re.compile(r"^[A-Z0-9]{2,10}-[A-Z]{3,4}$")


class YFinanceSource(CandleSource):
    """Fetches daily OHLCV data via yfinance.

    Covers stocks, ETFs, indices (``^GSPC``), international listings
    (``RIO.L``) and crypto pairs (``BTC-USD``). yfinance is synchronous;
    blocking calls run in a thread pool so the async interface stays
    non-blocking.
    """

    name = "yfinance"

    def supports(self, symbol: str) -> bool:
        up = symbol.upper()
        return bool(
            _STOCK_RE.match(up)
            or _INTL_STOCK_RE.match(up)
            or _CRYPTO_RE.match(up)
        )

    async def fetch(self, symbol: str, limit: int) -> list[Candle] | None:
        # Add headroom for weekends / market holidays
        start = datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(
            days=int(limit * 1.5 + 5)
        )
        df = await asyncio.to_thread(self._download, symbol.upper(), start)
        if df is None or df.empty:
            return None

        candles: list[Candle] = []
        for ts, row in df.tail(limit).iterrows():
            try:
                candles.append(
                    Candle(
                        date=ts.strftime("%Y-%m-%d"),
                        open=float(row["Open"]),
                        high=float(row["High"]),
                        low=float(row["Low"]),
                        close=float(row["Close"]),
                        volume=float(row.get("Volume", 0.0) or 0.0),
                    )
                )
            except (ValueError, KeyError):
                continue

        # yfinance returns oldest-first
        candles.reverse()
        return candles or None

    @staticmethod
    def _download(ticker: str, start: datetime.datetime):
        """Blocking yfinance fetch — called via asyncio.to_thread."""
        try:
            df = yf.Ticker(ticker).history(
                start=start.strftime("%Y-%m-%d"),
                interval="1d",
                auto_adjust=True,
            )
        except Exception as exc:  # yfinance raises a wide range of errors
            log.warning("yfinance_download_failed", ticker=ticker, error=str(exc))
            return None
        return df if not df.empty else None
