"""Configuration management using pydantic-settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MDTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Data storage
    data_path: Path = Path("data")
    db_name: str = "mdtree.db"

    # Upload settings
    max_upload_bytes: int = 5 * 1024 * 1024  # 5MB
    allowed_extensions: tuple[str, ...] = (".md", ".markdown", ".txt")
    allowed_content_types: tuple[str, ...] = ("text/markdown", "text/plain")

    # History
    recent_conversions_limit: int = 10