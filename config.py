"""Configuration management using Pydantic settings"""

import platform
import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


def get_default_storage_path() -> str:
    """
    Get OS-specific default storage path for PDFflow.

    Returns:
        - macOS: ~/Library/Application Support/PDFflow
        - Linux: ~/.local/share/pdfflow
        - Windows: %APPDATA%/PDFflow
    """
    system = platform.system()
    home = Path.home()

    if system == "Darwin":  # macOS
        return str(home / "Library" / "Application Support" / "PDFflow")
    elif system == "Windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return str(Path(appdata) / "PDFflow")
        return str(home / "AppData" / "Roaming" / "PDFflow")
    else:  # Linux and others
        # Follow XDG Base Directory specification
        xdg_data = os.environ.get("XDG_DATA_HOME")
        if xdg_data:
            return str(Path(xdg_data) / "pdfflow")
        return str(home / ".local" / "share" / "pdfflow")


class Settings(BaseSettings):
    """Application settings"""

    # Storage - one JSON file holds the flat key-value namespace
    STORAGE_DIR: str = get_default_storage_path()
    STORAGE_FILE: str = "storage.json"
    STORAGE_BACKEND: str = "file"  # "file" or "memory"

    # Gate basic tools by the daily free quota (premium tools are always gated)
    ENFORCE_DAILY_LIMIT: bool = False

    # Supabase (optional) - used to refresh the cached Pro flag
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    @property
    def storage_path(self) -> Path:
        """Full path of the storage namespace file"""
        return Path(self.STORAGE_DIR) / self.STORAGE_FILE

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)

    def create_directories(self):
        """Create the storage directory"""
        Path(self.STORAGE_DIR).mkdir(parents=True, exist_ok=True)

    def get_storage_info(self) -> dict:
        """Get storage path information"""
        return {
            "storage_path": self.STORAGE_DIR,
            "storage_file": str(self.storage_path),
            "backend": self.STORAGE_BACKEND,
            "default_path": get_default_storage_path(),
            "is_default": self.STORAGE_DIR == get_default_storage_path(),
            "platform": platform.system(),
        }


# Global settings instance
settings = Settings()
