import json
import os
from dataclasses import dataclass


def env(key: str, default: str) -> str:
    return os.getenv(key, default)


@dataclass
class Config:
    # HTTP listener ("http.port" in a conf file)
    HTTP_HOST: str = env("HTTP_HOST", "0.0.0.0")
    HTTP_PORT: int = int(env("HTTP_PORT", "8080"))

    # Storage backend: "memory" (default) or "redis"
    STORAGE_BACKEND: str = env("STORAGE_BACKEND", "memory")

    # Redis storage (used when STORAGE_BACKEND=redis). The database is flushed
    # on DELETE /api/todos, so it must be dedicated to this service.
    REDIS_HOST: str = env("REDIS_HOST", "127.0.0.1")
    REDIS_PORT: int = int(env("REDIS_PORT", "6379"))
    REDIS_DB: int = int(env("REDIS_DB", "0"))
    REDIS_TIMEOUT: float = float(env("REDIS_TIMEOUT", "5"))

    # Static files served under /assets/
    ASSETS_DIR: str = env("ASSETS_DIR", "assets")

    SEED_MESSAGE: str = env("SEED_MESSAGE", "Start Learning Vert.x Today")

    DEBUG: bool = env("DEBUG", "0") == "1"
    LOG_LEVEL: str = env("LOG_LEVEL", "INFO")


def conf_key(key: str) -> str:
    """Map a dotted conf-file key onto its Config name (http.port -> HTTP_PORT)."""
    return key.replace(".", "_").replace("-", "_").upper()


def load_conf_file(path: str) -> dict:
    """Read a JSON conf document with dotted keys into Config-style names."""
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: configuration must be a JSON object")
    return {conf_key(k): v for k, v in raw.items()}
