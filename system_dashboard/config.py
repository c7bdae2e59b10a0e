"""Runtime configuration helpers."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _resolve_disk_path() -> str:
    root = os.getenv("SYSTEM_DASHBOARD_DISK_PATH")
    if root:
        return str(Path(root).expanduser().resolve())
    if os.name == "nt":
        return os.getenv("SystemDrive", "C:") + "\\"
    return "/"


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    disk_path: str = "/"
    cpu_interval: float = 1.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    host = os.getenv("SYSTEM_DASHBOARD_HOST", "0.0.0.0")
    port = int(os.getenv("SYSTEM_DASHBOARD_PORT", "8080"))
    log_level = os.getenv("SYSTEM_DASHBOARD_LOG_LEVEL", "info").lower()
    disk_path = _resolve_disk_path()
    cpu_interval = float(os.getenv("SYSTEM_DASHBOARD_CPU_INTERVAL", "1.0"))
    if cpu_interval < 0:
        raise ValueError(f"SYSTEM_DASHBOARD_CPU_INTERVAL must be non-negative, got {cpu_interval}")
    return Settings(
        host=host,
        port=port,
        log_level=log_level,
        disk_path=disk_path,
        cpu_interval=cpu_interval,
    )
