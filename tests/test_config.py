import logging

import pytest
import structlog
from structlog.testing import capture_logs

from fvg_engine.config import Settings, get_settings
from fvg_engine.observability import configure_logging, resolve_hook


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("FVG_MIN_GAP_SIZE_PCT", "FVG_MIN_CANDLE_SIZE_PCT", "FVG_ALLOW_MOCK_DATA"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.min_gap_size_pct == 0.1
        assert settings.min_candle_size_pct == 0.2
        assert settings.allow_mock_data is False

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FVG_MIN_GAP_SIZE_PCT", "0.5")
        monkeypatch.setenv("FVG_ALLOW_MOCK_DATA", "true")
        settings = Settings(_env_file=None)
        assert settings.min_gap_size_pct == 0.5
        assert settings.allow_mock_data is True

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogging:

    @pytest.fixture(autouse=True)
    def _reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_configure_console(self):
        configure_logging("debug")
        assert structlog.is_configured()

    def test_configure_json_filters_below_level(self):
        configure_logging("WARNING", json=True)
        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(logging.WARNING)

    def test_configure_from_settings(self, monkeypatch):
        from fvg_engine import observability

        monkeypatch.setattr(
            observability, "get_settings", lambda: Settings(log_level="ERROR", log_json=True)
        )
        configure_logging()
        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(logging.ERROR)

    def test_info_level_silences_detection_events(self, descending_candles):
        from fvg_engine.scanner import detect_gaps

        configure_logging("INFO")
        with capture_logs() as logs:
            detect_gaps(descending_candles)
        assert logs == []

    def test_resolve_hook_prefers_injected(self):
        def hook(event, **fields):
            return None

        assert resolve_hook(hook, structlog.get_logger()) is hook

    def test_resolve_hook_defaults_to_debug_logging(self):
        with capture_logs() as logs:
            emit = resolve_hook(None, structlog.get_logger("fvg_engine.test"))
            emit("fvg_scan_complete", gaps=0)
        assert logs == [{"event": "fvg_scan_complete", "gaps": 0, "log_level": "debug"}]
