"""
Application Configuration
Loads settings from environment variables with validation
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.
    Uses pydantic-settings for validation and type coercion.

    Scoring bands and RAG/heatmap thresholds are NOT settings; they live in
    scorecard.scoring.rules so every consumer reads the same table.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORECARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ============================================
    # Application Settings
    # ============================================
    app_name: str = "BusinessScorecard"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # ============================================
    # Logging
    # ============================================
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_datefmt: str = "%Y-%m-%d %H:%M:%S"

    # ============================================
    # Portfolio Analysis
    # ============================================
    anomaly_drop_points: int = Field(default=10, ge=1, le=100)
    weak_section_pct: float = Field(default=50.0, ge=0, le=100)

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.log_level.upper()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid loading .env file on every call.
    """
    return Settings()

