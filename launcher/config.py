"""
Spark Launcher Configuration
============================
Process-level settings and path management.

Settings are read from the environment (``LAUNCHER_`` prefix) and an
optional ``.env`` file. The user configuration document (categories,
hotkey, per-category parameters) lives in ``launcher.user_config``.
"""
from __future__ import annotations

import platform
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "SparkLauncher"


# -----------------------------------------------------------------------------
# Path Management
# -----------------------------------------------------------------------------

def default_user_data_dir(system: Optional[str] = None) -> Path:
    """Determine OS-specific writable user data directory (Local)."""
    system = system or platform.system()
    if system == "Windows":
        return Path.home() / "AppData" / "Local" / APP_DIR_NAME
    elif system == "Darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    else:
        # Linux / Unix
        return Path.home() / ".local" / "share" / APP_DIR_NAME


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------

class Settings(BaseSettings):
    """Process settings with defaults suitable for a desktop install."""

    model_config = SettingsConfigDict(
        env_prefix="LAUNCHER_",
        env_file=".env",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "INFO"

    # Storage
    data_dir: Path = default_user_data_dir()
    user_config_file: Optional[Path] = None
    count_db_file: Optional[Path] = None

    def get_data_dir(self) -> Path:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir

    def get_user_config_file(self) -> Path:
        return self.user_config_file or self.get_data_dir() / "config.json"

    def get_count_db_file(self) -> Path:
        return self.count_db_file or self.get_data_dir() / "db" / "usage_counts.db"


# Singleton settings instance
settings = Settings()
