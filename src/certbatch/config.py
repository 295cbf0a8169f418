"""Service settings loaded from CERTBATCH_* environment variables and an optional .env file."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the certificate batch service."""

    log_level: str = Field(default="INFO", description="Root log level")

    key_size: int = Field(default=2048, ge=1024, le=16384, description="RSA key size for issued certificates")
    pfx_password: SecretStr = Field(default=SecretStr(""), description="Password for exported PFX bundles")
    issuer_pfx_password: SecretStr = Field(default=SecretStr(""), description="Password for the issuer PFX material")

    secret_store_backend: Literal["keyvault", "memory"] = Field(default="keyvault")
    keyvault_api_version: str = Field(default="7.4")
    keyvault_access_token: SecretStr = Field(default=SecretStr(""), description="Bearer token for the vault")
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    item_timeout_seconds: Optional[float] = Field(default=None, gt=0, description="Per-certificate timeout")
    isolate_item_failures: bool = Field(
        default=False,
        description="Report failed items individually instead of failing the whole batch",
    )

    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_prefix="CERTBATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("item_timeout_seconds", mode="before")
    @classmethod
    def empty_timeout_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def pfx_password_bytes(self) -> Optional[bytes]:
        value = self.pfx_password.get_secret_value()
        return value.encode() if value else None

    def issuer_pfx_password_bytes(self) -> Optional[bytes]:
        value = self.issuer_pfx_password.get_secret_value()
        return value.encode() if value else None


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
