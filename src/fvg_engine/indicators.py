"""FVG indicator settings and per-indicator gap detection.

A chart can carry several FVG indicators at once, each with its own
thresholds, bullish/bearish toggles and display colour. Detection runs once
per enabled indicator and every resulting gap is tagged with the indicator's
id and colour through :attr:`Gap.meta`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from fvg_engine.engine import detect_fair_value_gaps
from fvg_engine.models import Candle, CandleOrder, Gap, GapType, resolve_order
from fvg_engine.observability import EventHook, resolve_hook
from fvg_engine.scanner import DEFAULT_MIN_CANDLE_SIZE_PCT, DEFAULT_MIN_GAP_SIZE_PCT

log = structlog.get_logger(__name__)

DEFAULT_COLOR = "#9b87f5"


@dataclass(slots=True, frozen=True)
class FvgIndicator:
    """One FVG indicator as configured on a chart."""

    id: str
    name: str = "Fair Value Gap"
    enabled: bool = True
    color: str = DEFAULT_COLOR
    min_gap_size: float = DEFAULT_MIN_GAP_SIZE_PCT
    min_candle_size: float = DEFAULT_MIN_CANDLE_SIZE_PCT
    show_bullish: bool = True
    show_bearish: bool = True

    @classmethod
    def from_params(
        cls,
        id: str,
        params: Mapping[str, Any],
        *,
        name: str = "Fair Value Gap",
        enabled: bool = True,
        color: str = DEFAULT_COLOR,
    ) -> FvgIndicator:
        """Build an indicator from the chart's loose params dict.

        Recognised keys: ``minGapSize``, ``minCandleSize``, ``showBullish``,
        ``showBearish``. Missing or ``None`` values fall back to defaults.
        """

        def _get(key: str, default: Any) -> Any:
            value = params.get(key)
            return default if value is None else value

        return cls(
            id=id,
            name=name,
            enabled=enabled,
            color=color,
            min_gap_size=float(_get("minGapSize", DEFAULT_MIN_GAP_SIZE_PCT)),
            min_candle_size=float(_get("minCandleSize", DEFAULT_MIN_CANDLE_SIZE_PCT)),
            show_bullish=bool(_get("showBullish", True)),
            show_bearish=bool(_get("showBearish", True)),
        )

    def accepts(self, gap: Gap) -> bool:
        if gap.type is GapType.BULLISH:
            return self.show_bullish
        return self.show_bearish


def detect_for_indicators(
    candles: Sequence[Candle],
    indicators: Sequence[FvgIndicator],
    *,
    order: CandleOrder | str = CandleOrder.DESCENDING,
    hook: EventHook | None = None,
) -> list[Gap]:
    """Run gap detection once per enabled indicator.

    Gaps are returned grouped by indicator, in indicator order. Two indicators
    can report the same gap (same ``id``); ``gap.meta["indicator_id"]`` tells
    them apart.
    """
    enabled = [ind for ind in indicators if ind.enabled]
    if not candles or not enabled:
        return []

    emit = resolve_hook(hook, log)
    order = resolve_order(candles, order)
    result: list[Gap] = []

    for indicator in enabled:
        gaps = detect_fair_value_gaps(
            candles,
            indicator.min_gap_size,
            indicator.min_candle_size,
            order=order,
            hook=hook,
        )
        kept = [gap for gap in gaps if indicator.accepts(gap)]
        for gap in kept:
            gap.meta.update(indicator_id=indicator.id, color=indicator.color)
        emit("fvg_indicator_scan", indicator_id=indicator.id, gaps=len(gaps), kept=len(kept))
        result.extend(kept)

    return result
