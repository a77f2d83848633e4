"""Full detection run: scan a candle series for gaps, then track their fills."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from fvg_engine.fills import track_fills
from fvg_engine.models import Candle, CandleOrder, Gap, GapType, resolve_order
from fvg_engine.observability import EventHook
from fvg_engine.scanner import (
    DEFAULT_MIN_CANDLE_SIZE_PCT,
    DEFAULT_MIN_GAP_SIZE_PCT,
    detect_gaps,
)


def detect_fair_value_gaps(
    candles: Sequence[Candle],
    min_gap_size_pct: float = DEFAULT_MIN_GAP_SIZE_PCT,
    min_candle_size_pct: float = DEFAULT_MIN_CANDLE_SIZE_PCT,
    *,
    order: CandleOrder | str = CandleOrder.DESCENDING,
    hook: EventHook | None = None,
) -> list[Gap]:
    """Detect fair value gaps in *candles* and mark the ones already filled.

    Stateless and re-entrant: every call builds fresh gap objects that belong
    to the caller.
    """
    order = resolve_order(candles, order)
    gaps = detect_gaps(
        candles,
        min_gap_size_pct,
        min_candle_size_pct,
        order=order,
        hook=hook,
    )
    if not gaps:
        return gaps
    return track_fills(gaps, candles, order=order, hook=hook)


def summarize(gaps: Iterable[Gap]) -> dict[str, int]:
    """Count gaps by type and fill state."""
    counts = {"total": 0, "bullish": 0, "bearish": 0, "filled": 0, "unfilled": 0}
    for gap in gaps:
        counts["total"] += 1
        counts["bullish" if gap.type is GapType.BULLISH else "bearish"] += 1
        counts["filled" if gap.filled else "unfilled"] += 1
    return counts
