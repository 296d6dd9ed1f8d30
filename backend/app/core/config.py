from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./cartrack.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    # Media
    MEDIA_PATH: str = "./media"
    MEDIA_URL_PREFIX: str = "/media"
    # Uploads wait here until their row is committed; defaults to a sibling of MEDIA_PATH
    MEDIA_STAGING_PATH: Optional[str] = None
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024

    # Security
    SESSION_DURATION_MINUTES: int = 60
    SESSION_SWEEP_INTERVAL_SECONDS: int = 300
    PIN_HASH_ROUNDS: int = 10

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 120
    RATE_LIMIT_PER_HOUR: int = 3000

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
