"""Application settings and configuration management."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    # Application
    app_name: str = Field(default="Station Search")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    
    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)
    
    # Station data; the built-in list is used when unset
    stations_file: Optional[str] = Field(default=None)
    
    # Sessions
    history_limit: int = Field(default=100, ge=1)  # undo steps per session
    max_sessions: int = Field(default=1000, ge=1)
    max_query_length: int = Field(default=100, ge=1)
    
    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # "json" or "console"
    
    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )
    
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
