from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


DEFAULT_CSV_PATH = "data/Property_Assessment_Data.csv"
DEFAULT_API_URL = "https://data.edmonton.ca/resource/q7d6-ambg.json"
# Socrata's default page size; one page is fetched per call.
DEFAULT_PAGE_SIZE = 1000


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once from the environment.

    Env vars:
      MA_CSV_PATH, MA_API_URL, MA_PAGE_SIZE, MA_HTTP_TIMEOUT, MA_APP_TOKEN, MA_LOG_LEVEL

    `http_timeout` of None leaves the transport default in place.
    """

    csv_path: str = DEFAULT_CSV_PATH
    api_url: str = DEFAULT_API_URL
    page_size: int = DEFAULT_PAGE_SIZE
    http_timeout: Optional[float] = None
    app_token: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            csv_path=_env_str("MA_CSV_PATH", DEFAULT_CSV_PATH) or DEFAULT_CSV_PATH,
            api_url=_env_str("MA_API_URL", DEFAULT_API_URL) or DEFAULT_API_URL,
            page_size=_env_int("MA_PAGE_SIZE", DEFAULT_PAGE_SIZE),
            http_timeout=_env_float("MA_HTTP_TIMEOUT", None),
            app_token=_env_str("MA_APP_TOKEN", None),
            log_level=(_env_str("MA_LOG_LEVEL", "INFO") or "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def reset_settings_cache() -> None:
    """Test helper to force env re-read."""

    get_settings.cache_clear()
