"""Abstract base class for all candle sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fvg_engine.models import Candle


class CandleSource(ABC):
    """Base class every candle source must implement.

    Sources are tried in order by the registry. The first one to return
    a non-empty list wins; the next source is tried on None or empty.
    """

    #: Human-readable source name used in logs and error messages.
    name: str = ""

    @abstractmethod
    def supports(self, symbol: str) -> bool:
        """Return True if this source can attempt to fetch *symbol*.

        Implementations should do a quick pattern check (e.g. regex) and
        return False fast for symbols they definitely cannot handle.
        """

    @abstractmethod
    async def fetch(self, symbol: str, limit: int) -> list[Candle] | None:
        """Fetch daily candles for *symbol*.

        Args:
            symbol: Normalised uppercase ticker (e.g. ``AAPL``, ``BTC-USD``).
            limit:  Maximum number of bars to return (most-recent *limit* bars).

        Returns:
            A list of :class:`~fvg_engine.models.Candle` objects, **newest
            first**, or ``None`` if the symbol is not available from this
            source.
        """
