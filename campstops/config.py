"""Configuration management."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field


# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


class Settings(BaseModel):
    """Application settings."""
    
    # Mapbox (directions, geocoding and live places lookups)
    mapbox_token: str | None = Field(
        default_factory=lambda: os.getenv("MAPBOX_TOKEN")
    )
    mapbox_base_url: str = Field(
        default_factory=lambda: os.getenv("MAPBOX_BASE_URL", "https://api.mapbox.com")
    )
    
    # Persisted campsite store (Supabase / PostgREST)
    supabase_url: str | None = Field(
        default_factory=lambda: os.getenv("SUPABASE_URL")
    )
    supabase_key: str | None = Field(
        default_factory=lambda: os.getenv("SUPABASE_KEY")
    )
    supabase_table: str = Field(
        default_factory=lambda: os.getenv("SUPABASE_TABLE", "campsites")
    )
    store_query_limit: int = Field(
        default_factory=lambda: int(os.getenv("STORE_QUERY_LIMIT", "500"))
    )
    
    # Source behaviour
    source_timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("SOURCE_TIMEOUT_SECONDS", "10"))
    )
    live_lookup_concurrency: int = Field(
        default_factory=lambda: int(os.getenv("LIVE_LOOKUP_CONCURRENCY", "4"))
    )
    
    # Matching defaults
    average_speed_mph: float = Field(
        default_factory=lambda: float(os.getenv("AVERAGE_SPEED_MPH", "55"))
    )
    dedup_decimals: int = Field(
        default_factory=lambda: int(os.getenv("DEDUP_DECIMALS", "5"))
    )
    densify_spacing_m: float | None = Field(
        default_factory=lambda: float(os.getenv("DENSIFY_SPACING_M", "1000")) or None
    )
    default_buffer_distance_miles: float = 20.0
    default_max_poi_samples: int = 10
    
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO")
    )
    
    def validate_required(self) -> list[str]:
        """Check for missing required configuration."""
        missing = []
        
        if not self.mapbox_token:
            missing.append("MAPBOX_TOKEN")
        
        # The store is optional - without it only live and synthetic stops are found
        
        return missing
    
    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


# Global settings instance
settings = Settings()
