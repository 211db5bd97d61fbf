"""Configuration management for choretally."""

import re
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Document store
    data_file: Path = Field(default=Path("data.enc"), description="Path of the encrypted document file")
    encryption_key: str | None = Field(default=None, description="AES-256 key as 64 hex characters")
    reset_on_corrupt_store: bool = Field(
        default=False,
        description="Start from an empty document when the data file cannot be decrypted or parsed",
    )

    # HTTP server
    host: str = Field(default="0.0.0.0", description="Interface the HTTP server binds to")  # noqa: S104
    port: int = Field(default=3000, description="Port the HTTP server listens on")
    cors_allow_origins: list[str] = Field(default=["*"], description="Origins allowed by CORS")
    static_dir: Path | None = Field(default=None, description="Directory of static assets served at /")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    @field_validator("encryption_key")
    @classmethod
    def validate_encryption_key(cls, v: str | None) -> str | None:
        """Validate the key is 32 bytes of hex when provided."""
        if v is None or v == "":
            return v
        if not re.fullmatch(r"[0-9a-fA-F]{64}", v):
            msg = "ENCRYPTION_KEY must be a 32-byte hex string (64 hex characters)"
            raise ValueError(msg)
        return v.lower()

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # Share codes
    SHARE_CODE_ALPHABET: str = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no I, O, 0, 1
    SHARE_CODE_LENGTH: int = 6
    SHARE_CODE_MAX_ATTEMPTS: int = 100

    # History
    HISTORY_LIMIT: int = 20

    # AES-256-GCM
    KEY_BYTES: int = 32
    IV_BYTES: int = 12
    TAG_BYTES: int = 16

    # Input validation
    MAX_NAME_LENGTH: int = 50
    DEFAULT_CATEGORY_WEIGHT: int = 1

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_SERVER_ERROR: int = 500


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
