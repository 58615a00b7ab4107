"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Nothing is required at load time so the app can be
imported without a database or Spotify credentials; dependencies that
need them raise a domain exception when they are missing.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Validation in validate_timeouts_and_credentials only rejects values
    that can never work (non-positive TTLs/timeouts, half-configured
    Spotify client).
    """

    # App
    app_name: str = "tunetribe-backend"
    app_version: str = "1.0.0"
    debug: bool = False
    port: int = 5000

    # CORS (comma-separated; "*" allows any origin)
    allowed_origins: str = "*"

    # Record source: async SQLAlchemy URL (e.g. postgresql+asyncpg://...). Empty = not configured.
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 10
    record_source_timeout_seconds: float = 10.0

    # Redis cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 16649
    redis_username: str = "default"
    redis_password: SecretStr | None = None
    redis_db: int = 0
    redis_socket_timeout: float = 2.0
    redis_reconnect_backoff_seconds: float = 5.0
    cache_ttl_seconds: int = 3600

    # Spotify OAuth
    spotify_client_id: str = ""
    spotify_client_secret: SecretStr = SecretStr("")
    spotify_token_url: str = "https://accounts.spotify.com/api/token"
    oauth_timeout_seconds: float = 15.0

    # Lyrics search API
    lyrics_api_url: str = "https://lyricsapi-three.vercel.app/musixmatch/lyrics-search"
    lyrics_timeout_seconds: float = 10.0

    # Email (password reset OTP)
    email_user: str = ""
    email_password: SecretStr = SecretStr("")
    email_sender_name: str = "TuneTribe Support"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_timeout_seconds: float = 15.0
    otp_ttl_seconds: int = 300

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_timeouts_and_credentials(self) -> "Settings":
        """Reject non-positive TTLs/timeouts and a half-configured Spotify client."""
        positive = {
            "cache_ttl_seconds": self.cache_ttl_seconds,
            "otp_ttl_seconds": self.otp_ttl_seconds,
            "record_source_timeout_seconds": self.record_source_timeout_seconds,
            "redis_socket_timeout": self.redis_socket_timeout,
            "oauth_timeout_seconds": self.oauth_timeout_seconds,
            "lyrics_timeout_seconds": self.lyrics_timeout_seconds,
            "request_timeout_seconds": self.request_timeout_seconds,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value!r}")
        has_id = bool(self.spotify_client_id)
        has_secret = bool(self.spotify_client_secret.get_secret_value())
        if has_id != has_secret:
            raise ValueError(
                "SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET must be set together."
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Allowed origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
