"""Async client for the scrape endpoint of the backend."""
from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, Final, Optional

import aiohttp

from product_scraper import ScrapedProduct, ValidationError, validate_url

logging.basicConfig(level=logging.INFO)
LOGGER = logging.getLogger(__name__)

BACKEND_URL: Final[str] = os.getenv("SCRAPER_BACKEND_URL", "http://localhost:5000")
API_TOKEN: Final[str | None] = os.getenv("SCRAPER_API_TOKEN")


class ScrapeClient:
    """Calls ``/api/scrape-url`` and keeps track of the last request state."""

    def __init__(self, backend_url: str = BACKEND_URL, token: Optional[str] = None, timeout: float = 30.0) -> None:
        self.backend_url = backend_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.loading = False
        self.error: Optional[str] = None

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def scrape_url(self, url: str) -> Optional[ScrapedProduct]:
        """Return the scraped product, or ``None`` with :attr:`error` set."""

        self.loading = True
        self.error = None
        try:
            try:
                validate_url(url)
            except ValidationError as exc:
                raise ValueError("Invalid URL") from exc

            payload = await self._post({"url": url})
            if not payload.get("success") or not isinstance(payload.get("data"), dict):
                raise ValueError(payload.get("statusMessage") or "Unable to scrape the page")
            return ScrapedProduct.from_dict(payload["data"])
        except (ValueError, aiohttp.ClientError, asyncio.TimeoutError) as exc:
            message = str(exc) or "An error occurred"
            LOGGER.error("Scrape request for %s failed: %s", url, message)
            self.error = message
            return None
        finally:
            self.loading = False

    async def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json", **self.auth_headers()}
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(
                f"{self.backend_url}/api/scrape-url",
                json=body,
                headers=headers,
            ) as response:
                try:
                    data = await response.json(content_type=None)
                except (aiohttp.ContentTypeError, json.JSONDecodeError):
                    data = None
                if not isinstance(data, dict):
                    raise ValueError(f"Unexpected response from backend (HTTP {response.status})")
                return data

    def reset(self) -> None:
        self.loading = False
        self.error = None


async def main() -> None:
    if len(sys.argv) < 2:
        raise SystemExit("usage: python scrape_client.py <url>")
    client = ScrapeClient(BACKEND_URL, token=API_TOKEN)
    product = await client.scrape_url(sys.argv[1])
    if product is None:
        raise SystemExit(client.error)
    print(json.dumps(product.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(main())
