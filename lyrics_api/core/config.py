from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

REPO_ROOT = Path(__file__).resolve().parents[2]
ENV_FILES = [REPO_ROOT / ".env"]

for env_path in ENV_FILES:
    if env_path.exists():
        load_dotenv(env_path, override=False)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore", populate_by_name=True)

    app_name: str = Field(default="Lyrics Catalog API", alias="APP_NAME")
    app_env: str = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    database_url: str = Field(
        default="sqlite+aiosqlite:///./lyrics.db",
        alias="DATABASE_URL",
        description="Async SQLAlchemy connection string for the catalog database",
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    backend_cors_origins_raw: str = Field(default="*", alias="BACKEND_CORS_ORIGINS")

    static_root: str = Field(
        default="public",
        alias="STATIC_ROOT",
        description="Directory holding the HTML shells and assets served for non-API paths",
    )
    static_not_found_page: str = Field(default="/404.html", alias="STATIC_NOT_FOUND_PAGE")

    client_ip_header: str = Field(
        default="CF-Connecting-IP",
        alias="CLIENT_IP_HEADER",
        description="Header set by the trusted proxy carrying the client address",
    )

    # View counting
    view_rate_window_seconds: int = Field(default=3600, ge=1, alias="VIEW_RATE_WINDOW_SECONDS")
    view_rate_max_entries: int = Field(default=5000, ge=1, alias="VIEW_RATE_MAX_ENTRIES")

    # Bot challenge (Cloudflare Turnstile)
    turnstile_secret_key: str = Field(default="", alias="TURNSTILE_SECRET_KEY")
    turnstile_verify_url: str = Field(
        default="https://challenges.cloudflare.com/turnstile/v0/siteverify",
        alias="TURNSTILE_VERIFY_URL",
    )
    turnstile_timeout_seconds: float = Field(default=10.0, gt=0, alias="TURNSTILE_TIMEOUT_SECONDS")

    # Page sizes
    default_page_size: int = Field(default=20, ge=1, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=50, ge=1, alias="MAX_PAGE_SIZE")
    search_limit: int = Field(default=30, ge=1, alias="SEARCH_LIMIT")
    popular_default_limit: int = Field(default=10, ge=1, alias="POPULAR_DEFAULT_LIMIT")
    popular_max_limit: int = Field(default=30, ge=1, alias="POPULAR_MAX_LIMIT")

    # Cache-Control max-age values, in seconds
    cache_default_max_age: int = Field(default=60, ge=0, alias="CACHE_DEFAULT_MAX_AGE")
    cache_detail_max_age: int = Field(default=300, ge=0, alias="CACHE_DETAIL_MAX_AGE")
    cache_categories_max_age: int = Field(default=600, ge=0, alias="CACHE_CATEGORIES_MAX_AGE")
    static_cache_max_age: int = Field(default=3600, ge=0, alias="STATIC_CACHE_MAX_AGE")

    enable_prometheus_metrics: bool = Field(
        default=False,
        alias="ENABLE_PROMETHEUS_METRICS",
        description="Expose Prometheus metrics endpoint when true",
    )
    prometheus_metrics_path: str = Field(
        default="/metrics/prometheus",
        alias="PROMETHEUS_METRICS_PATH",
        description="Path where scraped Prometheus metrics are served",
    )
    otel_exporter_otlp_endpoint: str | None = Field(
        default=None,
        alias="OTEL_EXPORTER_OTLP_ENDPOINT",
        description="OTLP HTTP endpoint for exporting traces",
    )
    otel_exporter_otlp_headers: str | None = Field(
        default=None,
        alias="OTEL_EXPORTER_OTLP_HEADERS",
        description="Comma separated key=value pairs added to OTLP requests",
    )
    otel_service_name: str | None = Field(default=None, alias="OTEL_SERVICE_NAME")

    @property
    def backend_cors_origins(self) -> List[str]:
        origins = [origin.strip() for origin in self.backend_cors_origins_raw.split(",") if origin.strip()]
        return origins or ["*"]


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
