"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logger import setup_logger

load_dotenv()


logger = setup_logger("core_config")


class AuthAccount(BaseModel):
    """One entry of the login table: password (plain or bcrypt hash) and role."""

    senha: str
    role: str = "user"


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        # Allow override from environment variables
        env_prefix="",
    )

    # ===== Database Configuration =====
    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description="Application database URL (postgresql or sqlite+aiosqlite)",
    )

    # ===== Authentication Configuration =====
    jwt_secret: str | None = Field(
        default=None,
        alias="JWT_SECRET",
        description="Shared secret used to sign and verify access tokens",
    )

    jwt_algorithm: str = Field(
        default="HS256",
        alias="JWT_ALGORITHM",
        description="JWT signing algorithm",
    )

    jwt_expire_minutes: int = Field(
        default=60,
        alias="JWT_EXPIRE_MINUTES",
        description="Access token lifetime in minutes",
    )

    usuarios_autenticacao: dict[str, AuthAccount] = Field(
        default_factory=dict,
        alias="USUARIOS_AUTENTICACAO",
        description='Login table as JSON: {"login": {"senha": "...", "role": "..."}}',
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=5000, alias="PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=False,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    # User-facing hint for database connection errors
    db_unavailable_hint: str = Field(
        default="Database connection failed. The server may be offline or network connectivity is down.",
        alias="DB_UNAVAILABLE_HINT",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for missing critical configurations."""

        if not self.database_url:
            logger.warning("DATABASE_URL environment variable not set.")

        if not self.jwt_secret:
            logger.warning(
                "JWT_SECRET environment variable not set. Login and token checks will fail."
            )

        if not self.usuarios_autenticacao:
            logger.warning(
                "USUARIOS_AUTENTICACAO environment variable not set. No account can log in."
            )

        logger.debug(f"Configured login accounts: {list(self.usuarios_autenticacao)}")

        return self


# Global settings instance
settings = Settings()
