"""
LMS Assets Configuration Management Module

Provides type-safe configuration management using pydantic-settings.
Supports loading configuration from environment variables and .env files.

Usage:
    from config.settings import settings
    print(settings.public_dir)
    print(settings.assets.webpack_dir)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent

_TRUTHY = frozenset({"true", "1", "yes", "on"})


class AssetSettings(BaseSettings):
    """Fingerprinted asset manifest configuration"""

    model_config = SettingsConfigDict(
        env_prefix="LMS_ASSETS_",
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Compatible with the build scripts, which only know USE_OPTIMIZED_JS.
    use_optimized_js: bool = Field(
        default=False,
        description="Serve the production webpack build",
        validation_alias=AliasChoices(
            "LMS_ASSETS_USE_OPTIMIZED_JS",
            "USE_OPTIMIZED_JS",
        ),
    )
    perform_caching: bool | None = Field(
        default=None,
        description="Cache manifests for the process lifetime (default: only in production)",
    )
    cache_ttl: float = Field(default=0.0, description="Process cache window in seconds (0=never expires)")

    dist_dir: str = Field(default="dist", description="Rev pipeline output directory (relative to public_dir)")
    webpack_production_dir: str = Field(default="dist/webpack-production", description="Production webpack output")
    webpack_development_dir: str = Field(default="dist/webpack-dev", description="Development webpack output")
    rev_manifest_name: str = Field(default="rev-manifest.json", description="Rev manifest filename")
    webpack_manifest_name: str = Field(default="webpack-manifest.json", description="Webpack manifest filename")

    @property
    def webpack_dir(self) -> str:
        """Webpack output directory for the active pipeline mode"""
        return self.webpack_production_dir if self.use_optimized_js else self.webpack_development_dir

    @field_validator("use_optimized_js", mode="before")
    @classmethod
    def parse_optimized_flag(cls, v):
        """Anything other than an explicit truthy value selects the development build"""
        if isinstance(v, bool):
            return v
        if v is None:
            return False
        return str(v).strip().lower() in _TRUTHY

    @field_validator("dist_dir", "webpack_production_dir", "webpack_development_dir", mode="after")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        return v.strip().strip("/")


class WebSettings(BaseSettings):
    """Web application configuration"""

    model_config = SettingsConfigDict(
        env_prefix="LMS_WEB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret_key: str = Field(default="", description="Flask session secret key")
    access_log: bool = Field(default=False, description="Enable access logging")
    warmup_manifests: bool = Field(default=True, description="Load manifests at startup in production")
    immutable_max_age: int = Field(default=31536000, description="Cache-Control max-age for fingerprinted assets")


class SentrySettings(BaseSettings):
    """Sentry error reporting configuration"""

    model_config = SettingsConfigDict(
        env_prefix="LMS_SENTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=False, description="Enable Sentry error reporting")
    dsn: str = Field(default="", description="Sentry DSN")
    environment: str = Field(default="", description="Sentry environment (empty uses LMS_ENVIRONMENT)")
    release: str = Field(default="", description="Release identifier")
    traces_sample_rate: float = Field(default=0.0, description="Trace sampling rate")
    profiles_sample_rate: float = Field(default=0.0, description="Profile sampling rate")


class Settings(BaseSettings):
    """Main configuration class"""

    model_config = SettingsConfigDict(
        env_prefix="LMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Deployment mode: production is strict about missing build output, test tolerates it
    environment: Literal["production", "development", "test"] = "development"

    # Served asset root; manifests live below it
    public_dir: Path = PROJECT_ROOT / "public"

    # Service configuration
    serve_host: str = "127.0.0.1"
    serve_port: int = 8080

    # Log configuration
    log_level: str = "WARNING"
    log_format: Literal["text", "json"] = "text"

    # Nested configuration - default_factory so each Settings() re-reads the environment
    assets: AssetSettings = Field(default_factory=AssetSettings)
    web: WebSettings = Field(default_factory=WebSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @model_validator(mode="after")
    def set_defaults(self) -> Settings:
        """Set dependent default values"""
        if self.assets.perform_caching is None:
            self.assets.perform_caching = self.is_production
        if not self.sentry.environment:
            self.sentry.environment = self.environment
        return self

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("public_dir", mode="before")
    @classmethod
    def resolve_path(cls, v):
        """Resolve path (relative paths are anchored at the project root)"""
        if v is None:
            return v
        p = Path(v)
        if not p.is_absolute():
            p = (PROJECT_ROOT / p).resolve()
        return p


@lru_cache
def get_settings() -> Settings:
    """Get settings singleton (with cache)"""
    return Settings()


# Global settings instance - explicit type annotation ensures IDE correctly infers type
settings: Settings = get_settings()


def reload_settings() -> Settings:
    """Reload settings (clear cache)"""
    get_settings.cache_clear()
    # Note: this does not update module-level settings variable, caller should use return value
    # To update global settings, use config package's reload_settings
    return get_settings()
