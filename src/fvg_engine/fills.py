"""Fill tracker — marks gaps that later price action traded back into."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from fvg_engine.models import Candle, CandleOrder, Gap, GapType, resolve_order
from fvg_engine.observability import EventHook, resolve_hook

log = structlog.get_logger(__name__)


def _later_indices(origin_index: int, count: int, order: CandleOrder) -> range:
    """Indices of candles after *origin_index* in time, nearest first."""
    if order is CandleOrder.DESCENDING:
        # Newest-first input: later candles sit at lower indices
        return range(origin_index - 1, -1, -1)
    return range(origin_index + 1, count)


def _fills(gap: Gap, candle: Candle) -> bool:
    if gap.type is GapType.BULLISH:
        return candle.low <= gap.lower_bound
    return candle.high >= gap.upper_bound


def track_fills(
    gaps: list[Gap],
    candles: Sequence[Candle],
    *,
    order: CandleOrder | str = CandleOrder.DESCENDING,
    hook: EventHook | None = None,
) -> list[Gap]:
    """Mark each gap filled by the first later candle that crosses its bound.

    A bullish gap is filled by a candle whose low reaches its lower bound, a
    bearish gap by a candle whose high reaches its upper bound. *candles* must
    be the same as-supplied sequence the gaps' ``origin_index`` refers to.

    Gaps are updated in place and the same list is returned. Gaps that are
    already filled keep their original fill date.
    """
    emit = resolve_hook(hook, log)
    order = resolve_order(candles, order)
    count = len(candles)

    for gap in gaps:
        if gap.filled or not 0 <= gap.origin_index < count:
            continue
        for i in _later_indices(gap.origin_index, count, order):
            candle = candles[i]
            if _fills(gap, candle):
                gap.mark_filled(candle.date)
                break

    emit("fvg_fill_complete", gaps=len(gaps), filled=sum(1 for g in gaps if g.filled))
    return gaps
