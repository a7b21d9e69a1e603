"""Configuration management for charforge using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="CHARFORGE_",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    # Catalogs
    data_dir: Path = Field(
        default=PACKAGE_DATA_DIR,
        description="Directory holding the catalog YAML files",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/charforge.db",
        description="Database connection URL for character snapshots",
    )

    # Character creation
    starting_characteristic_points: int = Field(
        default=18, ge=0, description="Characteristic points of a new character"
    )
    starting_skill_points: int = Field(
        default=10, ge=0, description="Skill points of a new character before Intellect"
    )
    starting_trait_count: int = Field(
        default=3, ge=0, description="Traits a new character must choose"
    )
    max_name_length: int = Field(default=100, ge=1, description="Longest allowed name")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (console or json)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
