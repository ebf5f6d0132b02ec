"""Image discovery and URL normalisation."""
from __future__ import annotations

import logging
import re
from typing import List
from urllib.parse import urljoin, urlparse

from .extractors import extract_from_meta

LOGGER = logging.getLogger(__name__)

IMG_SRC_PATTERN = re.compile(r"<img[^>]+src=[\"']([^\"']+)[\"'][^>]*>", re.IGNORECASE)
ABSOLUTE_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

# inline data URIs and tracking pixels
_EXCLUDED_MARKERS = ("data:", "1x1")
_META_IMAGE_KEYS = ("og:image", "twitter:image")


def normalize_image_url(url: str, base_url: str) -> str:
    """Turn ``url`` into an absolute URL using the page URL as base.

    References that cannot be resolved are returned untouched.
    """

    if ABSOLUTE_URL_PATTERN.match(url):
        return url

    try:
        if url.startswith("//"):
            scheme = urlparse(base_url).scheme
            return f"{scheme}:{url}" if scheme else url
        return urljoin(base_url, url)
    except ValueError as exc:
        LOGGER.debug("Could not resolve image reference %r against %s: %s", url, base_url, exc)
        return url


def extract_img_sources(html: str, base_url: str, limit: int = 10) -> List[str]:
    """Return up to ``limit`` normalised ``<img>`` sources in document order."""

    images: List[str] = []
    for match in IMG_SRC_PATTERN.finditer(html):
        if len(images) >= limit:
            break
        source = match.group(1)
        if any(marker in source for marker in _EXCLUDED_MARKERS):
            continue
        images.append(normalize_image_url(source, base_url))
    return images


def collect_images(html: str, base_url: str, limit: int = 10) -> List[str]:
    """Gather meta images followed by ``<img>`` sources, deduplicated in order.

    The two meta images are added ahead of the ``<img>`` scan and do not
    count towards ``limit``.
    """

    images: List[str] = []
    for key in _META_IMAGE_KEYS:
        value = extract_from_meta(html, key)
        if value:
            images.append(normalize_image_url(value, base_url))

    images.extend(extract_img_sources(html, base_url, limit=limit))
    return [image for image in dict.fromkeys(images) if image]
