"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Profiles API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    forwarded_allow_ips: str = Field(
        default="127.0.0.1",
        description="Proxies trusted to set X-Forwarded-For (comma-separated, or *)",
    )

    # Logging
    log_level: str = Field(default="info")
    log_format: str = Field(
        default="console",
        description="'console' for human-readable output, 'json' for log shippers",
    )

    # Database
    database_url: str = Field(
        default="",
        description="Full connection URL; overrides the individual db_* fields when set",
    )
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432)
    db_user: str = Field(default="postgres")
    db_password: str = Field(default="")
    db_name: str = Field(default="profiles")
    db_pool_size: int = Field(default=10)
    db_max_overflow: int = Field(default=0)
    db_pool_timeout: float = Field(
        default=30.0,
        description="Seconds to wait for a pooled connection",
    )
    db_connect_timeout: float = Field(
        default=10.0,
        description="Seconds to wait when opening a new connection",
    )
    db_ssl: bool = Field(default=False, description="Require TLS for database connections")
    auto_create_tables: bool = Field(
        default=False,
        description="Create missing tables at startup instead of relying on migrations",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Database URL using the asyncpg driver scheme.

        Hosting providers supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if not url:
            return URL.create(
                "postgresql+asyncpg",
                username=self.db_user,
                password=self.db_password or None,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            ).render_as_string(hide_password=False)
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Email verification (MailboxLayer / apilayer)
    mailboxlayer_api_key: str = Field(
        default="",
        description="Access key for the email deliverability service (server-side only)",
    )
    email_verification_url: str = Field(default="http://apilayer.net/api/check")
    email_verification_timeout: float = Field(
        default=5.0,
        description="Seconds before an email verification call counts as unavailable",
    )
    verify_unchanged_email_on_update: bool = Field(
        default=True,
        description="Re-verify the email on update even when it did not change",
    )

    # Pagination
    default_page_size: int = Field(default=10)
    max_page_size: int = Field(default=100)

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
