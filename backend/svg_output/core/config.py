"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/svg_output/core/config.py
_current_file = Path(__file__).resolve()
BACKEND_DIR = _current_file.parent.parent.parent
PROJECT_ROOT = BACKEND_DIR.parent
ENV_FILE = PROJECT_ROOT / ".env"
# Fallback: try in backend/ directory if not found in project root
if not ENV_FILE.exists():
    ENV_FILE = BACKEND_DIR / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=True)


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "SVG Output"
    app_env: str = Field(default="development", description="Application environment")
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API port")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_uvicorn_access: bool = Field(default=False, description="Enable Uvicorn access logging")
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"svg_output.services": "DEBUG"})'
    )
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_file_enabled: bool = Field(default=False, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/svg_output.log",
        description="Path to log file (relative to project root)"
    )
    log_file_retention: int = Field(
        default=30,
        ge=1,
        description="Number of days to keep log files"
    )

    # Rendering
    templates_dir: str = Field(
        default=str(BACKEND_DIR / "templates" / "svg"),
        description="Directory holding <name>.svg Jinja2 templates"
    )
    config_snapshot_path: str = Field(
        default=str(BACKEND_DIR / "config" / "styles.json"),
        description="JSON snapshot of the style and language tables"
    )
    default_style_id: Optional[int] = Field(
        default=None,
        ge=1,
        description="Style used when the request names none or an unknown one (lowest id if unset)"
    )
    default_language_id: Optional[int] = Field(
        default=None,
        ge=1,
        description="Language used when the request names none or an unknown one (lowest id if unset)"
    )

    # Cache
    cache_backend: Literal["memory", "file", "none"] = Field(
        default="memory",
        description="Rendered SVG cache backend: 'memory', 'file' or 'none'"
    )
    cache_dir: str = Field(default="cache/svg", description="Directory for the file cache backend")
    cache_max_items: int = Field(default=512, ge=1, description="Entry limit for the memory cache backend")

    # Response
    expires_days: int = Field(default=365, ge=0, description="Lifetime advertised in the Expires header")
    enable_content_length: bool = Field(default=True, description="Send Content-Length with SVG bodies")
    enable_gzip: bool = Field(default=False, description="Compress responses when the client accepts gzip")
    gzip_minimum_size: int = Field(default=500, ge=0, description="Smallest body worth compressing (bytes)")

    @field_validator("cache_backend", mode="before")
    @classmethod
    def normalize_cache_backend(cls, v):
        """Accept any casing for the backend name"""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def cache_path(self) -> Path:
        """Cache directory resolved against the project root"""
        path = Path(self.cache_dir)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
