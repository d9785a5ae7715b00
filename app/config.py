"""Application configuration."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from app.core.exceptions import DatabaseConfigurationError

ASYNC_DRIVER_SCHEME = "postgresql+asyncpg"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    # Application
    app_name: str = Field(default="Auth Starter API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )
    debug: bool = Field(default=False, alias="DEBUG")
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    # Database
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    database_host: str | None = Field(default=None, alias="DATABASE_HOST")
    database_port: int | None = Field(default=None, alias="DATABASE_PORT")
    database_user: str | None = Field(default=None, alias="DATABASE_USER")
    database_password: str | None = Field(default=None, alias="DATABASE_PASSWORD")
    database_name: str | None = Field(default=None, alias="DATABASE_NAME")

    database_pool_size: int = Field(default=10, alias="DATABASE_POOL_SIZE")
    database_max_overflow: int = Field(default=20, alias="DATABASE_MAX_OVERFLOW")
    database_pool_recycle: int = Field(default=3600, alias="DATABASE_POOL_RECYCLE")
    database_warmup_timeout_ms: int = Field(default=2000, alias="DATABASE_WARMUP_TIMEOUT_MS")

    # Refresh tokens
    refresh_token_expire_days: int = Field(default=30, alias="REFRESH_TOKEN_EXPIRE_DAYS")

    # CORS
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def database_warmup_timeout(self) -> float:
        """Warm-up connection timeout in seconds."""
        return self.database_warmup_timeout_ms / 1000

    @property
    def sqlalchemy_database_url(self) -> str | URL:
        """
        Resolve the async connection URL.

        DATABASE_URL wins when set; otherwise the URL is assembled from the
        individual DATABASE_* fields.

        Raises:
            DatabaseConfigurationError: If neither form is configured
        """
        if self.database_url:
            return to_async_url(self.database_url)

        if not (self.database_host and self.database_name):
            raise DatabaseConfigurationError(
                "DATABASE_URL or DATABASE_HOST/DATABASE_NAME must be configured"
            )

        return URL.create(
            ASYNC_DRIVER_SCHEME,
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        )


def to_async_url(url: str) -> str:
    """Rewrite a plain PostgreSQL URL to use the asyncpg driver."""
    for prefix in ("postgresql://", "postgres://"):
        if url.startswith(prefix):
            return f"{ASYNC_DRIVER_SCHEME}://{url[len(prefix):]}"
    return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]


# Global settings instance
settings = get_settings()
