"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    bloomchart_env: str = "development"
    bloomchart_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Rendering
    display_size: int = 500
    export_scale: float = 3.0
    overlay_path: str = ""
    overlay_offset_x: float = 0.0
    overlay_offset_y: float = 0.0

    # Animation
    animation_duration_ms: float = 1200.0
    stagger_delay_ms: float = 80.0
    frame_interval_ms: float = 1000.0 / 60.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
