from __future__ import annotations

from dataclasses import dataclass
import os

_TRUTHY = {"1", "true", "yes", "on"}

_cached_settings: "RuntimeSettings | None" = None


def _postgres_url() -> str:
    user = os.getenv("POSTGRES_USER", "scoring")
    password = os.getenv("POSTGRES_PASSWORD", "scoring")
    host = os.getenv("POSTGRES_HOST", "postgres")
    port = os.getenv("POSTGRES_PORT", "5432")
    db = os.getenv("POSTGRES_DB", "scoring")
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"


@dataclass(frozen=True)
class RuntimeSettings:
    max_formula_length: int
    clamp_negative_scores: bool
    database_url: str
    log_level: str

    @classmethod
    def from_env(cls) -> "RuntimeSettings":
        return cls(
            max_formula_length=int(os.getenv("SCORE_MAX_FORMULA_LENGTH", "2000")),
            clamp_negative_scores=os.getenv("SCORE_CLAMP_NEGATIVE", "true").strip().lower() in _TRUTHY,
            database_url=os.getenv("SCORE_DATABASE_URL", "").strip() or _postgres_url(),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        )


def get_settings() -> RuntimeSettings:
    """Load settings from the environment once and cache them."""
    global _cached_settings
    if _cached_settings is None:
        _cached_settings = RuntimeSettings.from_env()
    return _cached_settings


def reset_cache() -> None:
    """Clear the cached settings (for testing)."""
    global _cached_settings
    _cached_settings = None
