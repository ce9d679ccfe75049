"""Service settings, read from ``TASK_SERVICE_*`` environment variables."""

import os
from dataclasses import dataclass, field
from typing import List

ENV_PREFIX = "TASK_SERVICE"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 5000
    api_prefix: str = "/api"
    log_level: str = "INFO"
    seed_sample_tasks: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def load_settings() -> Settings:
    prefix = _env(_k("API_PREFIX"), "/api").rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix
    return Settings(
        host=_env(_k("HOST"), "0.0.0.0"),
        port=_env_int(_k("PORT"), 5000),
        api_prefix=prefix,
        log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
        seed_sample_tasks=_env_bool(_k("SEED_SAMPLE_TASKS"), False),
        cors_origins=_env_list(_k("CORS_ORIGINS"), ["*"]),
    )
