"""
Centralized configuration using Pydantic Settings.

All environment variables are loaded and validated here. Components never
read the environment themselves; they receive an explicit config value.
"""

from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SMTP_PORT = 587
IMPLICIT_TLS_PORT = 465
DEFAULT_ASSET_FOLDER = "email-assets"
DEFAULT_ASSET_FILENAME = "email-asset"
DEFAULT_CONTENT_TYPE = "image/jpeg"


@dataclass(frozen=True)
class SMTPConfig:
    """Connection settings for the outbound SMTP relay."""

    host: str = ""
    port: int = DEFAULT_SMTP_PORT
    username: str | None = None
    password: str | None = None
    default_from: str | None = None
    timeout: float = 60.0

    @property
    def implicit_tls(self) -> bool:
        """Port 465 means TLS from the first byte, anything else uses STARTTLS."""
        return self.port == IMPLICIT_TLS_PORT

    @property
    def sender(self) -> str | None:
        return self.default_from or self.username


@dataclass(frozen=True)
class AssetHostConfig:
    """Cloudinary upload settings. Uploads only happen when both ids are set."""

    cloud_name: str | None = None
    upload_preset: str | None = None
    api_base: str = "https://api.cloudinary.com/v1_1"
    folder: str = DEFAULT_ASSET_FOLDER

    @property
    def enabled(self) -> bool:
        return bool(self.cloud_name and self.upload_preset)

    @property
    def upload_url(self) -> str:
        return f"{self.api_base.rstrip('/')}/{self.cloud_name}/image/upload"

    def folder_for(self, usage: str | None) -> str:
        """email-assets/<usage>, or just email-assets without a hint."""
        return f"{self.folder}/{usage}" if usage else self.folder


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # SMTP relay
    smtp_host: str = ""
    smtp_port: int = DEFAULT_SMTP_PORT
    smtp_user: str | None = None
    smtp_pass: str | None = None
    default_from: str | None = None
    smtp_timeout: float = 60.0

    # Cloudinary (optional)
    cloudinary_cloud_name: str | None = None
    cloudinary_upload_preset: str | None = None
    cloudinary_api_base: str = "https://api.cloudinary.com/v1_1"

    # Outbound HTTP (source fetch + upload)
    http_timeout: float = 5.0

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    max_body_bytes: int = 10 * 1024 * 1024  # 10mb

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True  # False for colored dev output

    def smtp_config(self) -> SMTPConfig:
        """Build the mailer's SMTP config."""
        return SMTPConfig(
            host=self.smtp_host,
            port=self.smtp_port,
            username=self.smtp_user or None,
            password=self.smtp_pass or None,
            default_from=self.default_from or None,
            timeout=self.smtp_timeout,
        )

    def asset_host_config(self) -> AssetHostConfig:
        """Build the rehoster's asset host config."""
        return AssetHostConfig(
            cloud_name=self.cloudinary_cloud_name or None,
            upload_preset=self.cloudinary_upload_preset or None,
            api_base=self.cloudinary_api_base,
        )


def get_settings() -> Settings:
    """Load settings fresh, so environment changes apply to the next request."""
    return Settings()


# Global settings instance (server bind + logging)
settings = Settings()
