from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    APP_NAME: str = "VAULTSCORE"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Validation thresholds
    MIN_CONFIDENCE: float = 50
    STRICT_MIN_CONFIDENCE: float = 70
    FORUM_MULTIPLIER: float = 1.3

    # Collaborators
    SEARCH_API_URL: Optional[str] = None
    SEARCH_API_KEY: Optional[str] = None
    CORRELATION_API_URL: Optional[str] = None
    CORRELATION_API_KEY: Optional[str] = None
    ALERT_WEBHOOK_URL: Optional[str] = None
    PROVIDER_TIMEOUT_SECONDS: float = 30.0

    RATE_LIMIT_SCAN_PER_HOUR: int = 6
    RATE_LIMIT_RECOMPUTE_PER_HOUR: int = 30

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
