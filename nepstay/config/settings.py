"""
Environment configuration for the hostel marketplace API.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from typing import Annotated, List, Union
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import Field, field_validator
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    @staticmethod
    def get_secret_key_default() -> str:
        """Generate a default secret key if not provided"""
        import secrets
        import string
        alphabet = string.ascii_letters + string.digits
        return ''.join(secrets.choice(alphabet) for _ in range(32))

    # Application configuration
    APP_NAME: str = "NepStay Hostels API"
    API_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", alias="NODE_ENV")

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CLIENT_URL: str = "http://localhost:3000"
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["https://nep-stay.vercel.app", "http://localhost:3000"],
        alias="ALLOWED_ORIGINS",
    )
    MAX_REQUEST_BODY_SIZE: int = 10 * 1024 * 1024

    # Document store
    MONGODB_URI: str = "mongodb://localhost:27017/nepstay"
    MONGODB_DB_NAME: str = "nepstay"
    MONGODB_MAX_POOL_SIZE: int = 10
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 30000
    MONGODB_SOCKET_TIMEOUT_MS: int = 45000

    # Security configuration
    JWT_SECRET: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 7 * 24 * 60
    JWT_COOKIE_EXPIRES_DAYS: int = 7
    JWT_COOKIE_NAME: str = "jwt"
    BCRYPT_ROUNDS: int = 12
    MAX_LOGIN_ATTEMPTS: int = 5
    LOCK_TIME_MINUTES: int = 30

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_MINUTES: int = 15
    RATE_LIMIT_MAX_REQUESTS: int = 100
    LOGIN_RATE_LIMIT: str = "5/15minutes"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    ENABLE_STRUCTURED_LOGGING: bool = True

    # Seed defaults
    ADMIN_EMAIL: str = "admin@kathmanduhostels.com"
    ADMIN_PASSWORD: str = "SecurePassword123!"

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS_ORIGINS from string to list"""
        if isinstance(v, str):
            # Handle JSON string format from .env
            if v.startswith('[') and v.endswith(']'):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    def get_allowed_origins(self) -> List[str]:
        """CORS origins including the configured client URL"""
        origins = list(self.CORS_ORIGINS)
        if self.CLIENT_URL and self.CLIENT_URL not in origins:
            origins.append(self.CLIENT_URL)
        return origins

    def get_default_rate_limit(self) -> str:
        """Global per-IP limit in slowapi notation"""
        return f"{self.RATE_LIMIT_MAX_REQUESTS}/{self.RATE_LIMIT_WINDOW_MINUTES}minutes"

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
