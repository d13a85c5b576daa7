"""Settings for taskboard, loaded from environment variables (+ optional .env)."""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()

ENV_PREFIX = "TASKBOARD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False
    log_level: str = "INFO"
    lock_timeout_sec: float = 10.0
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def load_settings() -> Settings:
    """Read settings from the environment."""
    return Settings(
        host=os.getenv(_k("HOST"), "0.0.0.0"),
        port=_env_int(_k("PORT"), 8080),
        reload=_env_bool(_k("RELOAD"), False),
        log_level=os.getenv(_k("LOG_LEVEL"), "INFO").upper(),
        lock_timeout_sec=_env_float(_k("LOCK_TIMEOUT_SEC"), 10.0),
        cors_origins=_env_list(_k("CORS_ORIGINS"), ["*"]),
    )


settings = load_settings()
