"""
Core configuration settings for the application.
"""
import json
from typing import List, Union
from pydantic import Field, ConfigDict, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase Configuration
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_service_role_key: str = Field(..., description="Supabase service role key")

    # JWT Configuration (Supabase signs session tokens with the project JWT secret)
    jwt_secret_key: str = Field(..., description="Secret used to verify Supabase JWTs")
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    jwt_audience: str = Field(default="authenticated", description="Expected audience claim")

    # FastAPI Configuration
    api_v1_str: str = Field(default="/api/v1", description="API v1 prefix")
    project_name: str = Field(default="earner-rates", description="Project name")
    environment: str = Field(default="dev", description="Environment (dev, staging, production)")
    debug: bool = Field(default=False, description="Debug mode - set True only for local development")

    # CORS Configuration
    allowed_origins: List[str] = Field(
        default=["http://localhost:8080", "http://localhost:5173"],
        description="Allowed CORS origins"
    )

    @field_validator('allowed_origins', mode='before')
    @classmethod
    def parse_allowed_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse ALLOWED_ORIGINS from string (JSON) or list."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except (json.JSONDecodeError, ValueError):
                # If not JSON, split by comma as fallback
                return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    # Rate Limiting Configuration
    public_rate_card_limit: str = Field(default="30/minute", description="Rate limit for public rate cards")

    # Pricing Configuration
    # Longer calls may be at most (1 - factor) cheaper per minute than the next shorter duration
    rate_consistency_factor: float = Field(
        default=0.70,
        description="Per-minute ratio a longer call must keep relative to the shorter one"
    )
    min_per_minute_rate: float = Field(
        default=4.5,
        description="Minimum credits per minute for any call duration"
    )

    model_config = ConfigDict(
        env_file=".env.dev",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
