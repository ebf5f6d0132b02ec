"""High level orchestration for scraping product pages."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging
from typing import Any, Iterable, List, Optional
from urllib.parse import urlparse

from .config import ScraperConfig
from .errors import ScrapeError, ValidationError
from .extractors import extract_description, extract_price, extract_title
from .fetcher import fetch_page
from .images import collect_images
from .models import ScrapedProduct, ScrapeOutcome

LOGGER = logging.getLogger(__name__)

# schemes whose URLs are meaningless without a host
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def extract_product(markup: str, source_url: str, max_images: int = 10) -> ScrapedProduct:
    """Build a :class:`ScrapedProduct` from already fetched markup.

    Every field is optional, so a page without recognisable metadata yields
    an empty record rather than an error.
    """

    return ScrapedProduct(
        name=extract_title(markup),
        description=extract_description(markup),
        price=extract_price(markup),
        images=tuple(collect_images(markup, source_url, limit=max_images)),
    )


def validate_url(url: Any) -> str:
    """Return ``url`` if it parses as an absolute URL, raise otherwise.

    Any scheme passes here; one the fetcher cannot speak fails later as a
    :class:`FetchError`.
    """

    if not url or not isinstance(url, str):
        raise ValidationError("URL is required")
    try:
        parsed = urlparse(url)
        parsed.port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise ValidationError("Invalid URL format") from exc
    if not parsed.scheme:
        raise ValidationError("Invalid URL format")
    if parsed.scheme.lower() in _HOST_SCHEMES and not parsed.hostname:
        raise ValidationError("Invalid URL format")
    return url


def scrape_url(url: Any, config: Optional[ScraperConfig] = None) -> ScrapedProduct:
    """Validate, fetch and extract a single product page."""

    config = config or ScraperConfig()
    url = validate_url(url)
    markup = fetch_page(url, config)
    product = extract_product(markup, url, max_images=config.max_images)
    LOGGER.info(
        "Scraped %s: name=%s price=%s images=%d",
        url,
        "yes" if product.name else "no",
        product.price,
        len(product.images),
    )
    return product


def _scrape_outcome(url: Any, config: ScraperConfig) -> ScrapeOutcome:
    try:
        product = scrape_url(url, config)
    except ScrapeError as exc:
        return ScrapeOutcome(url=url, error=exc.public_message, status_code=exc.status_code)
    except Exception as exc:  # pragma: no cover - runtime safeguard
        LOGGER.exception("Scraping %s failed unexpectedly", url)
        return ScrapeOutcome(url=url, error=f"Failed to scrape URL: {exc}", status_code=500)
    return ScrapeOutcome(url=url, product=product, status_code=200)


def scrape_many(urls: Iterable[Any], config: Optional[ScraperConfig] = None) -> List[ScrapeOutcome]:
    """Scrape several URLs concurrently, returning outcomes in input order.

    A failing URL is reported in its own outcome and never affects the others.
    """

    config = config or ScraperConfig()
    url_list = list(urls)
    if not url_list:
        return []
    workers = min(config.max_workers, len(url_list))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(lambda url: _scrape_outcome(url, config), url_list))
