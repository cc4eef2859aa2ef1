"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Cineplex API
    cineplex_api_key: str = ""
    cineplex_theatrical_url: str = "https://apis.cineplex.com/prod/cpx/theatrical/api/v1"
    cineplex_ticketing_url: str = "https://apis.cineplex.com/prod/ticketing/api/v1"
    request_timeout: float = 30.0

    # Pipeline settings
    showtime_concurrency: int = 5
    seat_concurrency: int = 15
    seat_session_cap: int = 200
    sold_out_policy: str = "upstream"  # "upstream" or "live_seats"

    # Cache TTLs (seconds)
    theatre_cache_ttl: int = 5 * 60
    showtime_cache_ttl: int = 2 * 60
    seat_cache_ttl: int = 60
    cache_cleanup_interval: int = 5 * 60

    # Rate limiting (per client IP)
    rate_limit_requests: int = 500
    rate_limit_window: int = 60

    # API settings
    frontend_url: str = "http://localhost:5173"
    api_host: str = "0.0.0.0"
    api_port: int = 5174


# Global settings instance
settings = Settings()
