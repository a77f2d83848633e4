"""Configuration loaded from ``FVG_*`` environment variables or a ``.env`` file."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """fvg-engine settings.

    Examples:
        ``FVG_ALPHA_VANTAGE_API_KEY=...``, ``FVG_MIN_GAP_SIZE_PCT=0.25``,
        ``FVG_ALLOW_MOCK_DATA=true``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FVG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Detection defaults ──
    min_gap_size_pct: float = 0.1
    min_candle_size_pct: float = 0.2

    # ── Candle sources ──
    alpha_vantage_api_key: str = ""
    seeking_alpha_api_key: str = ""
    http_timeout: float = 10.0
    allow_mock_data: bool = False

    # ── Logging ──
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
