"""Process-level settings read from the environment.

Follows the frozen-dataclass config pattern from ``patterns.domain_config``:
defaults work out of the box (offline mode with seeded data, no AI key),
and every value can be overridden through an environment variable.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _first_env(*names: str) -> str:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return ""


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the API process."""

    app_name: str = "SummitBase"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("http://localhost:3000", "http://localhost:5173")

    # Hosted REST backend (PostgREST-compatible)
    supabase_url: str = ""
    supabase_key: str = ""

    # SQL backend
    database_url: str = ""
    db_pool_size: int = 20
    db_max_overflow: int = 10
    db_echo: bool = False

    # AI advisor
    gemini_api_key: str = ""
    advisor_model: str = "gemini-2.5-flash"

    # Tenant routing
    selection_cookie: str = "selected_branch_id"
    selection_cookie_max_age: int = 60 * 60 * 24 * 365
    simulation_param: str = "domain"
    passthrough_paths: tuple[str, ...] = field(
        default=("/health", "/docs", "/redoc", "/openapi.json")
    )

    @property
    def rest_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def sql_configured(self) -> bool:
        return bool(self.database_url)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            debug=_env_bool("DEBUG", "false"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=tuple(origins.split(",")) if origins else cls.cors_origins,
            supabase_url=_first_env("NEXT_PUBLIC_SUPABASE_URL", "SUPABASE_URL"),
            supabase_key=_first_env("NEXT_PUBLIC_SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY"),
            database_url=os.getenv("DATABASE_URL", ""),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "20")),
            db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
            db_echo=_env_bool("DB_ECHO", "false"),
            gemini_api_key=_first_env("GEMINI_API_KEY", "API_KEY"),
            advisor_model=os.getenv("ADVISOR_MODEL", cls.advisor_model),
        )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance for dependency injection."""
    return Settings.from_env()
