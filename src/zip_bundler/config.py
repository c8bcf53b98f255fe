# src/zip_bundler/config.py
from __future__ import annotations
import os
from pydantic import BaseModel


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default) in ("1", "true", "True", "yes")


class Settings(BaseModel):
    # App
    app_name: str = os.getenv("APP_NAME", "Zip Bundler Service")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8015"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Service identity (optional, useful in logs)
    service_name: str = os.getenv("SERVICE_NAME", "zip-bundler")

    # Remote fetches
    fetch_timeout_seconds: float = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))
    fetch_max_concurrency: int = int(os.getenv("FETCH_MAX_CONCURRENCY", "8"))
    # retries after the first attempt; 0 disables retrying
    fetch_retry_max_retries: int = int(os.getenv("FETCH_RETRY_MAX_RETRIES", "1"))
    fetch_retry_backoff_ms: int = int(os.getenv("FETCH_RETRY_BACKOFF_MS", "250"))
    fetch_follow_redirects: bool = _env_bool("FETCH_FOLLOW_REDIRECTS", "1")
    fetch_user_agent: str = os.getenv("FETCH_USER_AGENT", "zip-bundler/0.1")

    # Archive
    # 1 = fastest deflate; content was already paid for over the network.
    zip_compression_level: int = int(os.getenv("ZIP_COMPRESSION_LEVEL", "1"))
    default_archive_name: str = os.getenv("DEFAULT_ARCHIVE_NAME", "Files")


settings = Settings()
