# launchboard/core/config.py - Launch Board API configuration
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, SecretStr
from typing import List

class Settings(BaseSettings):
    """
    Settings for the Launch Board API, read from the environment and .env
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database Settings
    DATABASE_URL: str = Field(..., description="Async SQLAlchemy URL of the backing Postgres database")

    # Auth provider token verification
    JWT_SECRET_KEY: SecretStr = Field(..., description="Shared secret the auth provider signs access tokens with")
    ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = Field("authenticated", description="Expected 'aud' claim of access tokens")

    # Application Settings
    ENVIRONMENT: str = Field("development", description="Environment name")
    LOG_LEVEL: str = Field("INFO", description="Log level")

    # Logging Configuration
    ENABLE_JSON_LOGGING: bool = Field(True, description="Enable JSON structured logging")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        "http://localhost:5173,http://127.0.0.1:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # Performance Settings
    DB_POOL_SIZE: int = Field(20, description="Database connection pool size")
    DB_MAX_OVERFLOW: int = Field(0, description="Database max overflow connections")

    # Board behaviour
    BOARD_ROLLBACK_ON_FAILURE: bool = Field(
        False,
        description="Restore the pre-move board locally when any drag commit write fails"
    )
    ACTIVITY_LOG_LIMIT: int = Field(50, ge=1, description="Max activity entries returned per task")
    COMMENT_PREVIEW_LENGTH: int = Field(100, ge=1, description="Comment characters copied into the activity log")

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert CORS_ORIGINS string to list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def should_use_json_logging(self) -> bool:
        """Use JSON logging in production or when explicitly enabled"""
        return self.ENVIRONMENT == "production" or self.ENABLE_JSON_LOGGING

# Create settings instance
settings = Settings()
