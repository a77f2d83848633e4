"""Data models for candles and fair value gaps."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

#: Candle ordering key: an ISO date string or a unix timestamp.
DateKey = str | int | float


@dataclass(slots=True, frozen=True)
class Candle:
    """A single OHLCV bar.

    Attributes:
        date:   Ordering key (ISO date string or unix timestamp).
        open:   Opening price.
        high:   Highest price during the bar.
        low:    Lowest price during the bar.
        close:  Closing price.
        volume: Traded volume (unused by gap detection).

    Price invariants (``low <= open, close <= high``) are not enforced here:
    gap detection tolerates malformed bars instead of rejecting them.
    """

    date: DateKey
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> Candle:
        """Build a candle from a dict with ``date`` (or ``time``) and OHLC keys."""
        date = row["date"] if "date" in row else row["time"]
        return cls(
            date=date,
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=float(row.get("volume") or 0.0),
        )


class GapType(str, enum.Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"


class CandleOrder(str, enum.Enum):
    """Chronological ordering of a candle sequence as supplied by the caller."""

    ASCENDING = "ascending"
    DESCENDING = "descending"
    AUTO = "auto"


def resolve_order(candles: Sequence[Candle], order: CandleOrder | str) -> CandleOrder:
    """Resolve ``auto`` to a concrete ordering from the first and last dates.

    Anything that is not clearly ascending (equal or incomparable dates)
    resolves to descending, the newest-first order sources return.
    """
    order = CandleOrder(order)
    if order is not CandleOrder.AUTO:
        return order
    if len(candles) < 2:
        return CandleOrder.DESCENDING
    try:
        ascending = candles[0].date < candles[-1].date
    except TypeError:
        return CandleOrder.DESCENDING
    return CandleOrder.ASCENDING if ascending else CandleOrder.DESCENDING


@dataclass(slots=True)
class Gap:
    """A fair value gap found in a candle series.

    Attributes:
        id:           ``"<type>-<origin_index>"``, unique within one detection run.
        type:         Bullish or bearish.
        origin_index: Index of the pattern's middle candle in the caller's
                      original (as-supplied) candle sequence.
        origin_date:  Date of the middle candle.
        upper_bound:  Top of the untraded price interval.
        lower_bound:  Bottom of the untraded price interval.
        filled:       Whether later price action traded back through the gap.
        filled_date:  Date of the first candle that filled the gap.
        meta:         Opaque caller-owned payload (indicator id, colour, ...).
                      Never read by detection and ignored in comparisons.
    """

    id: str
    type: GapType
    origin_index: int
    origin_date: DateKey
    upper_bound: float
    lower_bound: float
    filled: bool = False
    filled_date: DateKey | None = None
    meta: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def size(self) -> float:
        return self.upper_bound - self.lower_bound

    def mark_filled(self, date: DateKey) -> None:
        """Record the first fill. A filled gap stays filled with its first date."""
        if self.filled:
            return
        self.filled = True
        self.filled_date = date
