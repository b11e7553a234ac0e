"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from typing import List, Optional

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service
    service_name: str = "r2-gateway"
    log_level: str = "INFO"

    # Cloudflare R2 / S3-compatible storage
    # The endpoint is derived from the account ID when not given explicitly
    r2_account_id: Optional[str] = None
    r2_endpoint: Optional[str] = None  # e.g., https://<account_id>.r2.cloudflarestorage.com
    r2_access_key: Optional[str] = None  # R2 access key ID
    r2_secret_key: Optional[str] = None  # R2 secret access key
    r2_region: str = "auto"  # R2 uses "auto" for region
    r2_bucket: str = Field(
        default="public-bucket",
        validation_alias=AliasChoices("PUBLIC_S3_BUCKET_NAME", "R2_BUCKET", "r2_bucket"),
    )
    r2_connect_timeout: int = 10  # Seconds
    r2_read_timeout: int = 30  # Seconds

    # Presigned upload URLs for POST/PUT expire after 5 minutes
    upload_presign_expiration: int = 300

    # HTTP surface
    cors_allow_origins: List[str] = ["*"]

    # Side port for /metrics and /health; disabled when unset
    metrics_port: Optional[int] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore"
    )

    @model_validator(mode="after")
    def derive_r2_endpoint(self) -> "Settings":
        if not self.r2_endpoint and self.r2_account_id:
            self.r2_endpoint = f"https://{self.r2_account_id}.r2.cloudflarestorage.com"
        return self


# Global settings instance
settings = Settings()
