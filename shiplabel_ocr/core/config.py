from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    # Base URL of the OCR backend (GET /api/health, POST /api/ocr)
    ocr_api_url: str = "http://localhost:8000"

    # Seconds; the probe is a single bounded check
    probe_timeout_s: float = 5.0
    submit_timeout_s: float = 30.0

    # Serve simulated results when the backend cannot be reached
    demo_fallback_enabled: bool = True


settings = Settings()
