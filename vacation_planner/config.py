from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Vacation Planner"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    database_url: str = "postgresql+asyncpg://vacation_planner:vacation_planner@db:5432/vacation_planner"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:8000"]

    # Holiday source
    holiday_api_url: str = "https://brasilapi.com.br/api/feriados/v1"
    holiday_api_timeout_seconds: float = 10.0
    holiday_cache_ttl_seconds: float = 86400.0

    # Scheduling rules
    exception_conventions: list[str] = ["SEEACEPI", "SECAPI Interior"]
    notice_status_marker: str = "aviso prévio"
    occupancy_capacity: int = 5
    occupancy_key: Literal["month", "year_month"] = "month"

    # Conflict reconciliation
    reconcile_window_days: int = 30
    reconcile_interval_seconds: int = 86400


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
