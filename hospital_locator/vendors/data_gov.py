"""Client utilities for the data.gov.in hospital directory resource."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from hospital_locator.core.config import ConfigError, Settings, get_settings

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

PAGE_LIMIT = 100
PINCODE_FILTER = "filters[_pincode]"


class DataGovError(RuntimeError):
    """Raised when the registry call fails or returns something unreadable."""


def build_params(api_key: str, pincode: Optional[str] = None) -> Dict[str, str]:
    params = {
        "api-key": api_key,
        "format": "json",
        "limit": str(PAGE_LIMIT),
        "offset": "0",
    }
    if pincode:
        params[PINCODE_FILTER] = pincode
    return params


def redact_params(params: Dict[str, str]) -> Dict[str, str]:
    return {key: ("***" if key == "api-key" else value) for key, value in params.items()}


def fetch_hospitals(pincode: Optional[str] = None, settings: Optional[Settings] = None) -> Any:
    """Fetch the first page of hospitals, optionally filtered by pincode.

    Only the first ``PAGE_LIMIT`` records are requested; anything beyond that
    is silently dropped. The decoded JSON body is returned unchanged, error
    bodies included: only transport and decoding failures raise.
    """
    settings = settings or get_settings()
    if not settings.data_gov_api_key:
        logger.error("DATA_GOV_API_KEY is not set; refusing to call the registry.")
        raise ConfigError("API key not set (DATA_GOV_API_KEY)")

    params = build_params(settings.data_gov_api_key, pincode)
    logger.info(
        "Fetching hospitals url=%s params=%s pincode=%s",
        settings.data_gov_base_url,
        redact_params(params),
        pincode,
    )

    try:
        response = _SESSION.get(settings.data_gov_base_url, params=params, timeout=settings.request_timeout)
        payload = response.json()
    except requests.RequestException as exc:
        # requests puts the full URL, key included, into its messages.
        detail = str(exc).replace(settings.data_gov_api_key, "***")
        logger.error("Registry request failed: %s", detail)
        raise DataGovError(f"registry request failed: {detail}") from exc
    except ValueError as exc:
        logger.error("Registry returned a non-JSON body: %s", exc)
        raise DataGovError("registry returned invalid JSON") from exc

    if not 200 <= response.status_code < 300:
        logger.warning("Registry answered status=%s; passing its body through", response.status_code)

    records = payload.get("records") if isinstance(payload, dict) else None
    logger.info("Total records found: %d", len(records) if isinstance(records, list) else 0)
    return payload
