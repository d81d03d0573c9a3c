"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).
Sub-configs share the same env/dotenv source and are composed onto
AppSettings by a model validator.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "geopulse"


class RedisSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Optional: without Redis journey insights are recomputed on every request
    redis_uri: Optional[str] = None
    redis_ttl_seconds: int = 3600


class JWTSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    jwt_issuer: str = "geopulse"
    jwt_audience: str = "geopulse.api"
    share_token_ttl_seconds: int = 3600

    # RS256 keys (preferred)
    jwt_private_key: str = ""
    jwt_public_key: str = ""

    # HS256 fallback (used when RS256 keys are absent)
    jwt_secret: str = ""

    @property
    def use_rs256(self) -> bool:
        return bool(self.jwt_private_key and self.jwt_public_key)


class GeocodingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    geocoding_primary_provider: str = "nominatim"
    geocoding_fallback_provider: str = ""
    geocoding_timeout_seconds: float = 10.0
    # Stored results closer than this to a requested point are reused
    geocoding_tolerance_meters: float = 15.0

    geocoding_nominatim_enabled: bool = True
    geocoding_nominatim_url: str = "https://nominatim.openstreetmap.org"
    geocoding_nominatim_user_agent: str = "GeoPulse/1.0"
    geocoding_nominatim_language: str = "en"

    geocoding_googlemaps_enabled: bool = False
    geocoding_googlemaps_api_key: str = ""


class SharingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    max_shared_links: int = 10
    share_history_hours: int = 24


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production

    # Sampling rates (0.0–1.0)
    sample_rate_geocoding_cache: float = 0.05
    sample_rate_shared_view: float = 0.20


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1
    sentry_profile_sample_rate: float = 0.05


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "GeoPulse"

    cors_origins: list[str] = ["*"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    db: Optional[DatabaseSettings] = None
    redis: Optional[RedisSettings] = None
    jwt: Optional[JWTSettings] = None
    geocoding: Optional[GeocodingSettings] = None
    sharing: Optional[SharingSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.db is None:
            self.db = DatabaseSettings()
        if self.redis is None:
            self.redis = RedisSettings()
        if self.jwt is None:
            self.jwt = JWTSettings()
        if self.geocoding is None:
            self.geocoding = GeocodingSettings()
        if self.sharing is None:
            self.sharing = SharingSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self
