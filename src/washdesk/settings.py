from __future__ import annotations

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WASHDESK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    database_url: str = "sqlite+aiosqlite:///./washdesk.db"

    # For local development
    auto_create_db: bool = False

    # Session cookie auth. In production, override via env.
    session_secret: SecretStr = SecretStr("dev-insecure-change-me")
    session_cookie_name: str = "washdesk_session"
    session_cookie_same_site: Literal["lax", "strict", "none"] = "lax"
    session_cookie_https_only: bool = False
    session_cookie_max_age_seconds: int = 60 * 60 * 24 * 14

    log_level: str = "INFO"
    log_json: bool = False
    log_http_requests: bool = True

    # Gallery uploads live in a local bucket directory served under /storage.
    storage_dir: str = "./storage"
    storage_public_base_url: str = "/storage"
    gallery_bucket: str = "gallery"

    audit_log_view_limit: int = 100

    # If set, this email is granted the superadmin role on signup/login.
    bootstrap_superadmin_email: str | None = None


def get_settings() -> Settings:
    return Settings()
