"""Field extractors working directly on raw page markup.

Every extractor is a pure function of the HTML string. Fallback chains are
plain tuples of extractors tried in order until one returns a value.
"""
from __future__ import annotations

from functools import partial
import math
import re
from typing import Callable, Optional, Sequence

Extractor = Callable[[str], Optional[str]]

_HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&apos;", "'"),
)

_META_TEMPLATES = (
    r"<meta\s+property=[\"']{key}[\"']\s+content=[\"']([^\"']+)[\"']",
    r"<meta\s+name=[\"']{key}[\"']\s+content=[\"']([^\"']+)[\"']",
    r"<meta\s+content=[\"']([^\"']+)[\"']\s+property=[\"']{key}[\"']",
    r"<meta\s+content=[\"']([^\"']+)[\"']\s+name=[\"']{key}[\"']",
)

TITLE_TAG_PATTERN = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)

PRICE_PATTERNS = (
    re.compile(r"[$€£₹]\s*(\d+[.,]\d{2})", re.ASCII),
    re.compile(r"price[\"']?\s*:\s*[\"']?(\d+[.,]\d{2})[\"']?", re.IGNORECASE | re.ASCII),
    re.compile(r"(\d+[.,]\d{2})\s*[$€£₹]", re.ASCII),
    re.compile(r"\"price\"\s*:\s*\"(\d+[.,]\d{2})\"", re.ASCII),
    re.compile(r"data-price=[\"'](\d+[.,]\d{2})[\"']", re.ASCII),
)


def decode_html_entities(text: str) -> str:
    """Replace the handful of common named entities; anything else is kept."""

    for entity, char in _HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        return None
    return decode_html_entities(stripped)


def first_match(candidates: Sequence[Extractor], html: str) -> Optional[str]:
    """Return the first non-empty value produced by ``candidates``."""

    for candidate in candidates:
        value = candidate(html)
        if value:
            return value
    return None


def extract_from_meta(html: str, key: str) -> Optional[str]:
    """Return the decoded ``content`` of the ``<meta>`` tag named ``key``.

    Both ``property``/``name`` and both attribute orders are accepted. The
    patterns are tried in a fixed order and the first one that matches
    anywhere in the document wins.
    """

    escaped = re.escape(key)
    for template in _META_TEMPLATES:
        match = re.search(template.format(key=escaped), html, re.IGNORECASE)
        if match:
            value = _clean(match.group(1))
            if value:
                return value
    return None


def meta(key: str) -> Extractor:
    """Bind :func:`extract_from_meta` to ``key`` for use in a fallback chain."""

    return partial(extract_from_meta, key=key)


def extract_title_tag(html: str) -> Optional[str]:
    match = TITLE_TAG_PATTERN.search(html)
    if not match:
        return None
    return _clean(match.group(1))


TITLE_CHAIN = (meta("og:title"), meta("twitter:title"), meta("title"), extract_title_tag)
DESCRIPTION_CHAIN = (meta("og:description"), meta("description"), meta("twitter:description"))


def extract_title(html: str) -> Optional[str]:
    """Product name from Open Graph, Twitter card, generic meta, then ``<title>``."""

    return first_match(TITLE_CHAIN, html)


def extract_description(html: str) -> Optional[str]:
    return first_match(DESCRIPTION_CHAIN, html)


def parse_price(raw: str) -> Optional[float]:
    """Convert a matched ``12.34`` or ``12,34`` amount to a positive float."""

    try:
        price = float(raw.replace(",", ".", 1))
    except ValueError:
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


def extract_price(html: str) -> Optional[float]:
    """Scan the markup with :data:`PRICE_PATTERNS` and return the first valid amount.

    Only the first occurrence of each pattern is looked at. When that value
    is rejected the scan continues with the next pattern.
    """

    for pattern in PRICE_PATTERNS:
        match = pattern.search(html)
        if not match:
            continue
        price = parse_price(match.group(1))
        if price is not None:
            return price
    return None
