"""Synthetic candle source for demos and offline development.

Only consulted by the registry when ``FVG_ALLOW_MOCK_DATA`` is enabled.
"""

from __future__ import annotations

import datetime
import math
import random

from fvg_engine.models import Candle
from fvg_engine.sources.base import CandleSource

DEFAULT_DAYS = 31


def _seed(symbol: str) -> int:
    return sum(ord(ch) for ch in symbol)


def mock_candles(
    symbol: str,
    days: int = DEFAULT_DAYS,
    today: datetime.date | None = None,
) -> list[Candle]:
    """Generate *days* daily candles for *symbol*, newest first.

    The base price and volatility derive from the symbol, and the noise is
    seeded from it too, so a symbol always produces the same shape.
    """
    up = symbol.upper()
    today = today or datetime.date.today()
    base_price = _seed(up) % 1000 + 50
    volatility = len(up) % 5 + 1
    rng = random.Random(_seed(up))

    candles: list[Candle] = []
    for offset in range(days - 1, -1, -1):
        drift = math.sin(offset / 5) * volatility
        open_ = base_price + drift + rng.random() * volatility
        close = open_ + (rng.random() - 0.5) * volatility * 2
        high = max(open_, close) + rng.random() * volatility
        low = min(open_, close) - rng.random() * volatility
        candles.append(
            Candle(
                date=(today - datetime.timedelta(days=offset)).isoformat(),
                open=round(open_, 2),
                high=round(high, 2),
                low=round(low, 2),
                close=round(close, 2),
                volume=float(rng.randint(500_000, 1_500_000)),
            )
        )

    candles.reverse()
    return candles


class MockSource(CandleSource):
    """Returns a deterministic synthetic series for any symbol."""

    name = "mock"

    def supports(self, symbol: str) -> bool:
        return bool(symbol.strip())

    async def fetch(self, symbol: str, limit: int) -> list[Candle] | None:
        return mock_candles(symbol, days=min(limit, DEFAULT_DAYS)) or None
