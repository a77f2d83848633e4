from fvg_engine.indicators import DEFAULT_COLOR, FvgIndicator, detect_for_indicators
from fvg_engine.models import GapType


class TestFvgIndicator:

    def test_defaults(self):
        ind = FvgIndicator(id="fvg-1")
        assert ind.enabled is True
        assert ind.color == DEFAULT_COLOR
        assert (ind.min_gap_size, ind.min_candle_size) == (0.1, 0.2)
        assert ind.show_bullish and ind.show_bearish

    def test_from_params(self):
        ind = FvgIndicator.from_params(
            "fvg-2",
            {"minGapSize": 0.5, "minCandleSize": "1", "showBearish": False},
            color="#22c55e",
        )
        assert ind.min_gap_size == 0.5
        assert ind.min_candle_size == 1.0
        assert ind.show_bullish is True
        assert ind.show_bearish is False
        assert ind.color == "#22c55e"

    def test_from_params_none_values_fall_back(self):
        ind = FvgIndicator.from_params("fvg-3", {"minGapSize": None, "showBullish": None})
        assert ind.min_gap_size == 0.1
        assert ind.show_bullish is True


class TestDetectForIndicators:

    def test_runs_each_enabled_indicator(self, descending_candles):
        indicators = [
            FvgIndicator(id="bulls", color="#00ff00", show_bearish=False),
            FvgIndicator(id="off", enabled=False),
            FvgIndicator(id="all", color="#0000ff"),
        ]
        gaps = detect_for_indicators(descending_candles, indicators)

        assert [(g.meta["indicator_id"], g.id) for g in gaps] == [
            ("bulls", "bullish-4"),
            ("all", "bullish-4"),
            ("all", "bearish-1"),
        ]
        assert gaps[0].meta["color"] == "#00ff00"
        assert gaps[0] is not gaps[1]
        assert gaps[0].filled_date == "2024-01-06"

    def test_indicator_thresholds_apply(self, descending_candles):
        gaps = detect_for_indicators(descending_candles, [FvgIndicator(id="big", min_gap_size=1.0)])
        assert [g.type for g in gaps] == [GapType.BULLISH]

    def test_no_enabled_indicators(self, descending_candles):
        assert detect_for_indicators(descending_candles, [FvgIndicator(id="x", enabled=False)]) == []
        assert detect_for_indicators(descending_candles, []) == []

    def test_no_candles(self):
        assert detect_for_indicators([], [FvgIndicator(id="x")]) == []

    def test_indicator_event(self, descending_candles, events):
        detect_for_indicators(
            descending_candles, [FvgIndicator(id="bulls", show_bearish=False)], hook=events
        )
        assert ("fvg_indicator_scan", {"indicator_id": "bulls", "gaps": 2, "kept": 1}) in events.collected
