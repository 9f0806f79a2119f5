# app/core/config.py

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

STORAGE_BACKENDS = ("memory", "sql")

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


@dataclass
class Settings:
    app_title: str = "CRM API"
    env: str = "production"
    log_level: str = "INFO"
    cors_origins: List[str] = field(
        default_factory=lambda: DEFAULT_CORS_ORIGINS.split(",")
    )
    storage_backend: str = "memory"
    database_url: str = "sqlite://"
    admin_password: str = "password"
    bcrypt_rounds: int = 12
    upcoming_horizon_days: int = 7


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def load_settings() -> Settings:
    """
    Builds the settings from the environment (and a .env file if present).
    Every variable has a default; malformed values fail fast.
    """
    load_dotenv()

    backend = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(
            f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}"
        )

    horizon = _int_env("UPCOMING_HORIZON_DAYS", 7)
    if horizon < 0:
        raise RuntimeError("UPCOMING_HORIZON_DAYS must not be negative")

    origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)

    return Settings(
        app_title=os.getenv("APP_TITLE", "CRM API"),
        env=os.getenv("ENV", "production"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        storage_backend=backend,
        database_url=os.getenv("DATABASE_URL") or "sqlite://",
        admin_password=os.getenv("ADMIN_PASSWORD", "password"),
        bcrypt_rounds=_int_env("BCRYPT_ROUNDS", 12),
        upcoming_horizon_days=horizon,
    )
