"""Configuration management for pagehook."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


def _load_env_file() -> None:
    """Load .env from root directory if present."""
    env_path = Path(__file__).parent.parent / ".env"
    if not env_path.is_file():
        return
    try:
        lines = env_path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return
    for line in lines:
        stripped = line.strip()
        if stripped and not stripped.startswith("#") and "=" in stripped:
            key, value = stripped.split("=", 1)
            key, value = key.strip(), value.strip().strip("'\"")
            if key and value and key not in os.environ:
                os.environ[key] = value


_load_env_file()


DEFAULT_APP_NAME = "pagehook"
DEFAULT_APP_VERSION = "0.1.0"


def _env_int(name: str, fallback: int) -> int:
    try:
        return int(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _env_float(name: str, fallback: float) -> float:
    try:
        return float(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Application settings, read from the environment at import time."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)

    # Server runtime
    server_host: str = Field(default=os.getenv("PAGEHOOK_HOST", "0.0.0.0"))
    server_port: int = Field(default=_env_int("PAGEHOOK_PORT", 8000))

    # Environment
    env: str = Field(default=os.getenv("ENV", "dev"))
    log_level: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    # HTTP behaviour
    cors_allow_origins_raw: str = Field(default=os.getenv("CORS_ORIGINS", "*"))
    enable_docs: bool = Field(default=os.getenv("PAGEHOOK_ENABLE_DOCS", "1") != "0")
    docs_url: Optional[str] = Field(default=os.getenv("DOCS_URL", "/docs"))

    # Messenger webhook
    verify_token: str = Field(default=os.getenv("MESSENGER_VERIFY_TOKEN", ""))
    app_secret: Optional[str] = Field(default=os.getenv("MESSENGER_APP_SECRET"))
    page_access_token: str = Field(default=os.getenv("MESSENGER_PAGE_TOKEN", ""))
    should_verify: bool = Field(default=_env_flag("MESSENGER_SHOULD_VERIFY", False))
    webhook_path: str = Field(default=os.getenv("MESSENGER_WEBHOOK_PATH", "/webhook"))

    # Send API
    graph_api_url: str = Field(default=os.getenv("GRAPH_API_URL", "https://graph.facebook.com/v11.0"))
    graph_timeout_seconds: float = Field(default=_env_float("GRAPH_TIMEOUT_SECONDS", 15.0))

    @property
    def cors_allow_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_allow_origins_raw.strip() in {"", "*"}:
            return ["*"]
        return [origin.strip() for origin in self.cors_allow_origins_raw.split(",") if origin.strip()]

    @property
    def resolved_docs_url(self) -> Optional[str]:
        """Return documentation URL when docs are enabled."""
        return (self.docs_url or "/docs") if self.enable_docs else None

    @property
    def resolved_webhook_path(self) -> str:
        path = self.webhook_path.strip() or "/"
        return path if path.startswith("/") else f"/{path}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
