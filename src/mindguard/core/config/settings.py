"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """MindGuard wellness server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default: the session holds voice, face, and chat data for a
    # single user and there is no auth layer.
    mindguard_host: str = "127.0.0.1"
    mindguard_port: int = 8001
    mindguard_log_level: str = "info"
    mindguard_allow_insecure_bind: bool = False

    # Model oracle
    llm_provider: Literal["gemini", "anthropic", "openai", "mock"] = "gemini"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    llm_max_tokens: int = 2048
    llm_temperature: float = 0.3

    # Media inputs
    default_audio_mime_type: str = "audio/webm"
    default_image_mime_type: str = "image/jpeg"
    max_media_bytes: int = 20 * 1024 * 1024

    # Instruction templates (YAML); empty means the bundled wellness set.
    instructions_dir: str = ""


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
