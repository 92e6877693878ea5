"""Environment-driven settings for the analytics API client."""

import os
from dataclasses import dataclass

DEFAULT_API_URL = "http://localhost:3001"
INSIGHTS_PATH = "/api/brand-insights"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float | None = None  # None: no timer is ever armed
    log_level: str = "INFO"

    @property
    def insights_endpoint(self) -> str:
        return f"{self.api_url}{INSIGHTS_PATH}"


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"BRAND_INSIGHTS_TIMEOUT must be a number of seconds, got {raw!r}")
    if value <= 0:
        raise ValueError(f"BRAND_INSIGHTS_TIMEOUT must be positive, got {raw!r}")
    return value


def get_settings(api_url: str | None = None) -> Settings:
    """
    Build settings from the environment.

    Call load_dotenv() first if a .env file should be honoured.

    Args:
        api_url: Explicit base URL, overriding BRAND_INSIGHTS_API_URL
    """
    url = (
        api_url
        or os.getenv("BRAND_INSIGHTS_API_URL")
        or os.getenv("NEXT_PUBLIC_API_URL")
        or DEFAULT_API_URL
    )
    return Settings(
        api_url=url.rstrip("/"),
        timeout=_parse_timeout(os.getenv("BRAND_INSIGHTS_TIMEOUT")),
        log_level=os.getenv("BRAND_INSIGHTS_LOG_LEVEL", "INFO").upper(),
    )
