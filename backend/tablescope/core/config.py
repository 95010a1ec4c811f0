from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application configuration settings."""

    # Application
    APP_NAME: str = "TableScope - Tabular Dataset Profiler"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api/v1"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Analysis limits
    MAX_ROWS: int = 500_000  # Rows accepted per analysis request
    ANALYSIS_CACHE_SIZE: int = 32  # Analyses kept in memory before eviction

    # Profiling policies
    HISTOGRAM_BINS: int = 8
    DATE_SAMPLE_SIZE: int = 15  # Non-null values inspected per column
    DATE_MIN_MATCHES: int = 5  # Parsed dates needed to flag a date column
    MAX_SCATTER_PAIRS: int = 4
    CORRELATION_PAIRING: str = "row_aligned"  # "row_aligned" or "positional"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins(self) -> list:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
