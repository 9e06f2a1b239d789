"""
Configuration management for CarePair
"""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    # Application
    APP_NAME: str = "CarePair"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENV: str = "development"
    
    # API
    API_PREFIX: str = ""
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    
    # Database
    DATABASE_URL: str = "sqlite:///./carepair.db"
    DATABASE_ECHO: bool = False
    
    # Security
    SECRET_KEY: str = "your-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 120  # 2 hours
    
    # Adherence accounting
    TIMEZONE: str = "UTC"  # calendar used to decide what "today" is
    BACKFILL_WINDOW_DAYS: int = 29
    DASHBOARD_WINDOW_DAYS: int = 30
    WEEK_WINDOW_ENTRIES: int = 7
    
    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    @field_validator("TIMEZONE")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject unknown IANA zone names at startup"""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {value}")
        return value
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Database table names
class TableNames:
    USERS = "users"
    ASSIGNMENTS = "assignments"
    MEDICATIONS = "medications"
    MEDICATION_LOGS = "medication_logs"


settings = get_settings()
