"""Application settings and configuration.

This module defines all configuration options for the VibeShift counter.
Settings are loaded from environment variables (or a `.env` file) with sensible
defaults, except for the database URL which must always be provided.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    A missing ``DATABASE_URL`` makes instantiation fail, which aborts startup.
    """

    # Application metadata
    app_name: str = Field(default="VibeShift", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Identity store
    database_url: str = Field(alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    create_tables_on_startup: bool = Field(default=False, alias="CREATE_TABLES_ON_STARTUP")

    # Fingerprints are untrusted client input
    fingerprint_max_length: int = Field(default=512, alias="FINGERPRINT_MAX_LENGTH", gt=0)

    # CORS configuration for the landing page
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("database_url")
    @classmethod
    def _require_database_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("DATABASE_URL must not be empty")
        return value

    @property
    def sqlalchemy_database_url(self) -> str:
        """Return the database URL with a driver SQLAlchemy understands.

        Hosted Postgres providers hand out ``postgres://`` or bare
        ``postgresql://`` URLs; both are mapped onto the psycopg 3 driver.
        """
        url = self.database_url
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+psycopg://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+psycopg://", 1)
        return url


settings = Settings()  # type: ignore[call-arg]
