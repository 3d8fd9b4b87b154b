# task_frontend/config.py

"""Settings loaded from environment variables (+ optional .env).

Every variable can be given with the TASK_FRONTEND_ prefix. The backend URL
also accepts the bare BACKEND_URL name.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASK_FRONTEND"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Optional[Path]

    # ---- Remote task API ----
    backend_url: str
    backend_timeout_seconds: float
    backend_retries: int

    # ---- HTTP server ----
    host: str
    port: int

    @staticmethod
    def from_env() -> "Settings":
        backend_url = _first_env(_k("BACKEND_URL"), "BACKEND_URL", default="http://localhost:8080")

        return Settings(
            app_name=_env(_k("APP_NAME"), "task-frontend"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            log_dir=_env_path(_k("LOG_DIR")),
            backend_url=(backend_url or "").rstrip("/"),
            backend_timeout_seconds=_env_float(_k("BACKEND_TIMEOUT"), 10.0),
            backend_retries=max(0, _env_int(_k("BACKEND_RETRIES"), 0)),
            host=_env(_k("HOST"), "0.0.0.0"),
            port=_env_int(_k("PORT"), 3100),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
