"""Configuration helpers for the product scraper."""
from __future__ import annotations

from dataclasses import dataclass
import math
import os
from typing import Any, Dict, Mapping, Optional

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_IMAGES = 10
DEFAULT_MAX_WORKERS = 4
DEFAULT_MAX_BATCH_SIZE = 20
DEFAULT_MAX_PAGE_BYTES = 5 * 1024 * 1024

_ENV_KEYS = {
    "user_agent": "SCRAPER_USER_AGENT",
    "timeout": "SCRAPER_TIMEOUT",
    "max_images": "SCRAPER_MAX_IMAGES",
    "max_workers": "SCRAPER_MAX_WORKERS",
    "max_batch_size": "SCRAPER_MAX_BATCH_SIZE",
    "max_page_bytes": "SCRAPER_MAX_PAGE_BYTES",
}


@dataclass
class ScraperConfig:
    """Settings shared by the fetcher, the extractors and the web service."""

    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    max_images: int = DEFAULT_MAX_IMAGES
    max_workers: int = DEFAULT_MAX_WORKERS
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE
    max_page_bytes: int = DEFAULT_MAX_PAGE_BYTES

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable version of the configuration."""

        return {
            "user_agent": self.user_agent,
            "timeout": self.timeout,
            "max_images": self.max_images,
            "max_workers": self.max_workers,
            "max_batch_size": self.max_batch_size,
            "max_page_bytes": self.max_page_bytes,
        }


def _parse_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    cleaned = str(value).replace(",", ".").strip()
    try:
        parsed = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(parsed) or parsed <= 0:
        return None
    return parsed


def _parse_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return None
    if parsed <= 0:
        return None
    return parsed


def create_config(data: Optional[Mapping[str, Any]] = None) -> ScraperConfig:
    """Create a configuration from a dict-like payload.

    Missing or unparsable values fall back to the defaults instead of
    raising, so a typo in a deployment variable never takes the service down.
    """

    if data is None:
        return ScraperConfig()
    if not isinstance(data, Mapping):
        raise TypeError("Unsupported configuration payload type: expected a mapping")

    user_agent = str(data.get("user_agent") or "").strip() or DEFAULT_USER_AGENT
    timeout = _parse_float(data.get("timeout"))
    max_images = _parse_int(data.get("max_images"))
    max_workers = _parse_int(data.get("max_workers"))
    max_batch_size = _parse_int(data.get("max_batch_size"))
    max_page_bytes = _parse_int(data.get("max_page_bytes"))

    return ScraperConfig(
        user_agent=user_agent,
        timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        max_images=max_images if max_images is not None else DEFAULT_MAX_IMAGES,
        max_workers=max_workers if max_workers is not None else DEFAULT_MAX_WORKERS,
        max_batch_size=max_batch_size if max_batch_size is not None else DEFAULT_MAX_BATCH_SIZE,
        max_page_bytes=max_page_bytes if max_page_bytes is not None else DEFAULT_MAX_PAGE_BYTES,
    )


def create_config_from_env(environ: Optional[Mapping[str, str]] = None) -> ScraperConfig:
    """Build the configuration from ``SCRAPER_*`` environment variables."""

    env = os.environ if environ is None else environ
    return create_config({field: env.get(key) for field, key in _ENV_KEYS.items()})
