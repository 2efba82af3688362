import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


class Settings:
    APP_VERSION: str = "0.4.0"
    SCORING_TABLE_VERSION: str = "v2-config-driven"

    # --- REMOTE SCORING ---
    # empty URL disables the remote call; local scoring is always available
    REMOTE_URL = os.getenv("READAPT_REMOTE_URL", "").rstrip("/")
    REMOTE_ENABLED = _env_bool("READAPT_REMOTE_ENABLED", True)
    REMOTE_TIMEOUT_SECONDS = _env_float("READAPT_REMOTE_TIMEOUT", 5.0)
    REMOTE_SCORE_PATH = "/api/assessment/score"

    @property
    def remote_available(self) -> bool:
        return bool(self.REMOTE_ENABLED and self.REMOTE_URL)


@lru_cache
def get_settings():
    return Settings()
