"""Region lookup proxy for the wilayah.id province/regency/district API."""

import logging
import re
from typing import Any

import httpx

from intern_admin.config import settings
from intern_admin.errors import InvalidInputError, UpstreamError

logger = logging.getLogger(__name__)

_REGION_CODE_RE = re.compile(r"^[0-9]+(\.[0-9]+)*$")


def _validated_code(code: str) -> str:
    text = str(code or "").strip()
    if not _REGION_CODE_RE.match(text):
        raise InvalidInputError("Invalid region code")
    return text


def _fetch(path: str, failure_message: str) -> Any:
    url = f"{settings.WILAYAH_BASE_URL.rstrip('/')}/{path}.json"
    try:
        response = httpx.get(url, timeout=float(settings.WILAYAH_TIMEOUT_SECONDS))
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("[wilayah] request to %s failed: %s", url, exc)
        raise UpstreamError(failure_message) from exc

    if not isinstance(payload, dict) or "data" not in payload:
        logger.warning("[wilayah] unexpected payload from %s", url)
        raise UpstreamError(failure_message)
    return payload["data"]


def get_provinces() -> Any:
    return _fetch("provinces", "Failed to fetch provinces")


def get_regencies(province_code: str) -> Any:
    return _fetch(f"regencies/{_validated_code(province_code)}", "Failed to fetch regencies")


def get_districts(regency_code: str) -> Any:
    return _fetch(f"districts/{_validated_code(regency_code)}", "Failed to fetch districts")
