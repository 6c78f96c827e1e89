"""REPLYDESK — Central Configuration via Pydantic Settings."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── AI Providers ──
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    sarvam_api_key: Optional[str] = None
    default_ai_provider: str = "openai"  # openai | claude | sarvam
    openai_model: str = "gpt-4o"
    claude_model: str = "claude-sonnet-4-20250514"
    vision_model: str = "gpt-4o"
    ai_timeout_seconds: float = 60.0

    # ── Storage ──
    storage_backend: str = "file"  # file | memory | database
    data_dir: str = "./data"
    database_url: str = ""

    # ── App ──
    log_level: str = "INFO"
    cors_origins: str = "*"

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def effective_database_url(self) -> str:
        """Return the configured database URL, otherwise a SQLite file in data_dir."""
        if self.database_url:
            return self.database_url
        # Vercel has a read-only filesystem; use /tmp for SQLite
        if os.environ.get("VERCEL"):
            return "sqlite:////tmp/replydesk.db"
        return f"sqlite:///{self.data_path / 'replydesk.db'}"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
