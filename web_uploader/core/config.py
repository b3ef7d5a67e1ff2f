"""Uploader settings."""
from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Uploader config from env (UPLOADER_ prefix)."""

    app_name: str = "web-uploader"
    # Structured logging: set UPLOADER_LOG_JSON=1 for one-JSON-object-per-line
    log_json: bool = False
    log_level: str = "INFO"

    # HEAD lookups and HTTP PUT transfers. No retries; a timeout is the only bound.
    http_timeout_seconds: float = 30.0
    http_follow_redirects: bool = True

    # Transfer strategy used when none is passed explicitly: local | http | s3
    transfer_backend: str = "local"

    # S3 (only used when transfer_backend=s3 or an S3 inspector is requested)
    s3_bucket: str | None = None
    aws_region: str = "us-east-1"
    s3_endpoint_url: str | None = None  # R2 / MinIO / other S3-compatible endpoints

    # Upload settings served by AppSettingsProvider. Keys match the names an
    # UploadSession asks for (destination_dir, allowed_upload_types, allowed_upload_size).
    destination_dir: str | None = None
    allowed_upload_types: str | None = None  # comma-separated MIME types
    allowed_upload_size: int = 0  # bytes; 0 = no limit
    # Additional named settings, e.g. UPLOADER_EXTRA_SETTINGS='{"avatar_dir": "https://cdn/avatars"}'
    extra_settings: dict[str, Any] = {}

    class Config:
        env_prefix = "UPLOADER_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
