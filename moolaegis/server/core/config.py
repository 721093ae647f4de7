"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class JWTConfig(BaseModel):
    """Token signing configuration."""

    secret: str = Field(
        default="change-me-in-production", alias="JWT_SECRET", description="Secret key used to sign JWT tokens"
    )
    algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=30, alias="ACCESS_TOKEN_EXPIRE_MINUTES", description="Lifetime of access tokens in minutes"
    )
    refresh_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="REFRESH_TOKEN_EXPIRE_MINUTES",
        description="Lifetime of refresh tokens in minutes",
    )

    model_config = {"populate_by_name": True}


class AIModelConfig(BaseModel):
    """Model configuration for the chat assistant and receipt OCR."""

    chat_model: str = Field(
        default="openai:gpt-4o-mini", alias="CHAT_MODEL", description="pydantic-ai model name for the chat assistant"
    )
    ocr_model: str = Field(
        default="openai:gpt-4o", alias="OCR_MODEL", description="pydantic-ai vision model name for receipt OCR"
    )
    openai_api_key: Optional[str] = Field(
        default=None, alias="OPENAI_API_KEY", description="OpenAI API key for authentication"
    )
    timeout: float = Field(default=60.0, alias="AI_TIMEOUT", description="Model request timeout in seconds")

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Moolaegis Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Moolaegis server host address to bind to",
        alias="MOOLAEGIS_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Moolaegis server port number",
        alias="MOOLAEGIS_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Moolaegis server logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="MOOLAEGIS_LOG_LEVEL",
    )
    default_language: str = Field(
        default="en",
        description="Language used for server-rendered labels when the client sends none",
        alias="MOOLAEGIS_DEFAULT_LANGUAGE",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./moolaegis.db",
        description="Async SQLAlchemy connection URL for application database",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Report Storage
    # =====================================================================
    report_max_bytes: int = Field(
        default=20 * 1024 * 1024,
        description="Maximum accepted size of an uploaded report PDF",
        alias="REPORT_MAX_BYTES",
    )

    # =====================================================================
    # Token / AI / CORS (flat fields, grouped via properties below)
    # =====================================================================
    jwt_secret: str = Field(default="change-me-in-production", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=30, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    refresh_token_expire_minutes: int = Field(default=60 * 24 * 7, alias="REFRESH_TOKEN_EXPIRE_MINUTES")

    chat_model: str = Field(default="openai:gpt-4o-mini", alias="CHAT_MODEL")
    ocr_model: str = Field(default="openai:gpt-4o", alias="OCR_MODEL")
    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    ai_timeout: float = Field(default=60.0, alias="AI_TIMEOUT")

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def jwt(self) -> JWTConfig:
        """Get token signing configuration from environment variables."""
        return JWTConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def ai(self) -> AIModelConfig:
        """Get chat/OCR model configuration from environment variables."""
        return AIModelConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
