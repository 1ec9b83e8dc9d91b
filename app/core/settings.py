from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Comma separated, e.g. "http://localhost:3000,https://alerts.example.org"
    cors_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
        alias="CORS_ORIGINS",
    )

    # ──────────────────────────────────────────────────────────────
    # Event store
    # ──────────────────────────────────────────────────────────────

    tracking_id_prefix: str = Field(default="HR-", alias="TRACKING_ID_PREFIX")
    tracking_id_start: int = Field(default=1234, alias="TRACKING_ID_START")

    # Load the five sample reports on startup (local dev / demos)
    seed_demo_data: bool = Field(default=False, alias="SEED_DEMO_DATA")

    # ──────────────────────────────────────────────────────────────
    # Synthetic feed (stand-in for crowdsourced ingestion)
    # ──────────────────────────────────────────────────────────────

    feed_autostart: bool = Field(default=False, alias="FEED_AUTOSTART")
    feed_interval_s: float = Field(default=30.0, alias="FEED_INTERVAL_S")
    feed_probability: float = Field(default=0.10, alias="FEED_PROBABILITY")
    # Fixed RNG seed for reproducible demo runs; unset = system entropy
    feed_seed: int | None = Field(default=None, alias="FEED_SEED")

    # ──────────────────────────────────────────────────────────────
    # Queries
    # ──────────────────────────────────────────────────────────────

    query_max_limit: int = Field(default=2000, alias="QUERY_MAX_LIMIT")

    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
