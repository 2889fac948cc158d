"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    fetch_timeout: float
    scan_timeout: float
    max_body_bytes: int
    verify_tls: bool
    user_agent: str
    data_dir: str
    log_level: str


def load_settings() -> Settings:
    return Settings(
        fetch_timeout=float(os.environ.get("DAWGSCAN_FETCH_TIMEOUT", "10")),
        scan_timeout=float(os.environ.get("DAWGSCAN_SCAN_TIMEOUT", "25")),
        max_body_bytes=int(os.environ.get("DAWGSCAN_MAX_BODY_BYTES", "200000")),
        verify_tls=_env_bool("DAWGSCAN_VERIFY_TLS", False),
        user_agent=os.environ.get("DAWGSCAN_USER_AGENT", "DawgScan/1.0"),
        data_dir=os.environ.get("DAWGSCAN_DATA_DIR", os.path.join(os.path.dirname(__file__), "data")),
        log_level=os.environ.get("DAWGSCAN_LOG_LEVEL", "INFO").upper(),
    )


settings = load_settings()
