"""Configuration helpers for the hospital locator.

Environment variables are the only way to provide the registry credentials:
`DATA_GOV_API_KEY` must never be hardcoded, and `DATA_GOV_BASE_URL` lets us
point at a different data.gov.in resource.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.data.gov.in/resource/98fa254e-c5f8-4910-a19b-4828939b477d"


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    data_gov_api_key: str
    data_gov_base_url: str = DEFAULT_BASE_URL
    request_timeout: Optional[float] = None
    port: int = 5000


def _get_number(name: str, default: Optional[str], cast):
    raw = os.getenv(name) or default
    if raw is None:
        return None
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be numeric, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    data_gov_api_key = (os.getenv("DATA_GOV_API_KEY") or "").strip()
    data_gov_base_url = os.getenv("DATA_GOV_BASE_URL") or DEFAULT_BASE_URL
    request_timeout = _get_number("DATA_GOV_TIMEOUT_SECONDS", None, float)
    port = _get_number("PORT", "5000", int)

    if not data_gov_api_key:
        logger.warning("DATA_GOV_API_KEY is not configured; hospital searches will fail.")

    return Settings(
        data_gov_api_key=data_gov_api_key,
        data_gov_base_url=data_gov_base_url,
        request_timeout=request_timeout,
        port=port,
    )
