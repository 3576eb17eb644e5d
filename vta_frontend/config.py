"""Application configuration objects based on Pydantic settings."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseModel):
    """Connection settings for the external chat backend."""

    base_url: str = "http://localhost:8000"
    request_timeout: float = 60.0


class StorageSettings(BaseModel):
    """Keys used for the persisted session tokens."""

    user_token_key: str = "sessionId"
    admin_token_key: str = "adminToken"
    browser_storage_key: str = "vta_frontend_tokens"


class RecordingSettings(BaseModel):
    """Limits for captured voice questions."""

    max_seconds: int = 60
    filename: str = "recording.wav"
    content_type: str = "audio/wav"


class FrontendSettings(BaseModel):
    """Settings that control the Gradio workspace and its ASGI host."""

    title: str = "Bosch VTA Chatbot"
    admin_title: str = "Bosch VTA Admin Dashboard"
    host: str = "0.0.0.0"
    port: int = 7860
    mount_path: str = "/"
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: list[str] = Field(default_factory=lambda: ["*"])
    gzip_minimum_size: int = 1024


class LoggingSettings(BaseModel):
    """Logging destinations and verbosity."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_dir: Path = Path("logs")
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3


class Settings(BaseSettings):
    """Aggregate settings for the application."""

    backend: BackendSettings = Field(default_factory=BackendSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    recording: RecordingSettings = Field(default_factory=RecordingSettings)
    frontend: FrontendSettings = Field(default_factory=FrontendSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(env_file=".env", env_nested_delimiter="__", case_sensitive=False)


@lru_cache()
def load_settings() -> Settings:
    """Load application settings with caching."""

    return Settings()


__all__ = [
    "Settings",
    "BackendSettings",
    "StorageSettings",
    "RecordingSettings",
    "FrontendSettings",
    "LoggingSettings",
    "load_settings",
]
