"""
Application configuration management
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Productive Space"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api/v1"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Booking backend
    BACKEND_BASE_URL: str = "https://productive-space-backend.vercel.app"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    @field_validator('BACKEND_BASE_URL')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Payment fees
    PAYMENT_SETTINGS_CACHE_SECONDS: int = 300
    DEFAULT_PAYNOW_FEE: float = 0.20
    DEFAULT_CREDIT_CARD_FEE_PERCENTAGE: float = 5.0
    PAYNOW_FEE_THRESHOLD: float = 10.0

    # Booking
    DEFAULT_LOCATION: str = "Kovan"
    MAX_PEOPLE_PER_BOOKING: int = 15

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Monitoring
    PROMETHEUS_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @field_validator("CORS_ORIGINS", mode="before")
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @property
    def is_testing(self) -> bool:
        return self.APP_ENV == "testing"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Create global settings instance
settings = Settings()
