"""Application settings, read from ``MEDSCAN_*`` environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="MEDSCAN_", env_file=".env", extra="ignore"
    )

    # Backend
    api_base_url: str = "http://localhost:8000"
    request_timeout: float = 60.0

    # Display
    container_width: int = 600

    # Export
    supersample_scale: int = 2
    header_height_mm: float = 30.0
    report_locale: str = "tr-TR"
    pdf_font_path: str | None = None

    # Logging
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_max_bytes: int = 5 * 1024 * 1024
    log_backup_count: int = 3


@lru_cache
def get_settings() -> Settings:
    return Settings()
