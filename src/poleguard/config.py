"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="POLEGUARD_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Pole Guard API"
    api_prefix: str = "/api"
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    # Elevation provider
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps API key with the Elevation API enabled.",
    )
    elevation_api_url: str = Field(
        default="https://maps.googleapis.com/maps/api/elevation/json",
        description="Endpoint of the elevation lookup service.",
    )
    elevation_timeout_seconds: float = Field(default=10.0, gt=0.0)
    elevation_max_retries: int = Field(default=2, ge=0)
    elevation_backoff_seconds: float = Field(default=0.5, ge=0.0)

    # Zone/pole snapshot cache
    zone_cache_ttl_seconds: float = Field(
        default=3600.0, gt=0.0, description="Zone records rarely change; cache them for an hour."
    )
    pole_cache_ttl_seconds: float = Field(
        default=300.0, gt=0.0, description="Active pole lists are cached for five minutes."
    )

    nearby_pole_limit: int = Field(default=10, ge=1)
    min_restricted_radius: float = Field(default=50.0, gt=0.0)
    max_restricted_radius: float = Field(default=5000.0, gt=0.0)
    line_of_sight_page_size: int = Field(default=20, ge=1)

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
