"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

BACKEND_LOCAL = "local"
BACKEND_SUPABASE = "supabase"


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    """Read a non-negative float from the environment."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitBoard"
    DB_FILENAME = "habitboard.db"
    HABITS_TABLE = "habits"
    COMPLETIONS_TABLE = "habit_completions"
    DEFAULT_CACHE_TTL = 60.0

    def __init__(self) -> None:
        self.BACKEND = os.getenv("HABITBOARD_BACKEND", BACKEND_LOCAL).strip().lower()
        if self.BACKEND not in {BACKEND_LOCAL, BACKEND_SUPABASE}:
            raise ValueError(
                f"HABITBOARD_BACKEND must be '{BACKEND_LOCAL}' or '{BACKEND_SUPABASE}'"
            )
        self.SUPABASE_URL = os.getenv("SUPABASE_URL", "").strip()
        self.SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "").strip()
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITBOARD_DEV_MODE", default=True)
        self.CACHE_TTL = _env_float("HABITBOARD_CACHE_TTL", self.DEFAULT_CACHE_TTL)
        self.DATABASE_URL = os.getenv("HABITBOARD_DATABASE_URL", self._build_sqlite_url())
        if self.BACKEND == BACKEND_SUPABASE and not (self.SUPABASE_URL and self.SUPABASE_ANON_KEY):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_ANON_KEY must be set when HABITBOARD_BACKEND=supabase."
            )

    @property
    def uses_supabase(self) -> bool:
        return self.BACKEND == BACKEND_SUPABASE

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the local database and logs live."""

        data_root = os.getenv("HABITBOARD_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}
