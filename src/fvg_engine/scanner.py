"""Gap scanner — finds three-candle fair value gaps in a candle series."""

from __future__ import annotations

import math
from collections.abc import Sequence

import structlog

from fvg_engine.models import Candle, CandleOrder, Gap, GapType, resolve_order
from fvg_engine.observability import EventHook, resolve_hook

log = structlog.get_logger(__name__)

DEFAULT_MIN_GAP_SIZE_PCT = 0.1
DEFAULT_MIN_CANDLE_SIZE_PCT = 0.2


def _pct_of(size: float, base: float) -> float:
    """*size* as a percentage of *base*; a zero base lets any positive size through."""
    if base == 0:
        return math.inf
    return size / base * 100


def detect_gaps(
    candles: Sequence[Candle],
    min_gap_size_pct: float = DEFAULT_MIN_GAP_SIZE_PCT,
    min_candle_size_pct: float = DEFAULT_MIN_CANDLE_SIZE_PCT,
    *,
    order: CandleOrder | str = CandleOrder.DESCENDING,
    hook: EventHook | None = None,
) -> list[Gap]:
    """Scan *candles* for bullish and bearish fair value gaps.

    A window of three consecutive candles ``(c1, c2, c3)`` forms a bullish
    gap when ``c1.high < c3.low`` and a bearish gap when ``c1.low > c3.high``.
    Both the middle candle's size and the gap size are measured against the
    average close of ``c1`` and ``c3``.

    Args:
        candles:             Candle series in a single consistent order.
        min_gap_size_pct:    Minimum gap size, percent of the average price.
        min_candle_size_pct: Minimum range *or* body of the middle candle,
                             percent of the average price.
        order:               How *candles* are ordered. ``descending`` (newest
                             first) is what the candle sources return.
        hook:                Event callback; defaults to debug logging.

    Returns:
        Unfilled gaps in chronological order. ``origin_index`` always refers
        to the as-supplied sequence, not the internal chronological copy.
    """
    if len(candles) < 3:
        return []

    emit = resolve_hook(hook, log)
    order = resolve_order(candles, order)
    emit(
        "fvg_scan_started",
        candles=len(candles),
        min_gap_size_pct=min_gap_size_pct,
        min_candle_size_pct=min_candle_size_pct,
        order=order.value,
    )

    reversed_input = order is CandleOrder.DESCENDING
    data = list(reversed(candles)) if reversed_input else list(candles)
    last = len(data) - 1
    gaps: list[Gap] = []

    for i in range(1, last):
        c1, c2, c3 = data[i - 1], data[i], data[i + 1]
        avg_price = (c1.close + c3.close) / 2

        # Near-doji middle candles don't create an imbalance
        min_candle_size = avg_price * min_candle_size_pct / 100
        if not (
            c2.high - c2.low >= min_candle_size
            or abs(c2.close - c2.open) >= min_candle_size
        ):
            continue

        origin_index = last - i if reversed_input else i

        if c1.high < c3.low:
            if _pct_of(c3.low - c1.high, avg_price) >= min_gap_size_pct:
                gaps.append(
                    Gap(
                        id=f"{GapType.BULLISH.value}-{origin_index}",
                        type=GapType.BULLISH,
                        origin_index=origin_index,
                        origin_date=c2.date,
                        upper_bound=c3.low,
                        lower_bound=c1.high,
                    )
                )

        if c1.low > c3.high:
            if _pct_of(c1.low - c3.high, avg_price) >= min_gap_size_pct:
                gaps.append(
                    Gap(
                        id=f"{GapType.BEARISH.value}-{origin_index}",
                        type=GapType.BEARISH,
                        origin_index=origin_index,
                        origin_date=c2.date,
                        upper_bound=c1.low,
                        lower_bound=c3.high,
                    )
                )

    bullish = sum(1 for g in gaps if g.type is GapType.BULLISH)
    emit("fvg_scan_complete", gaps=len(gaps), bullish=bullish, bearish=len(gaps) - bullish)
    return gaps
