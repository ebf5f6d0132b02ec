"""HTTP retrieval of product pages."""
from __future__ import annotations

import logging
from time import monotonic
from typing import Optional

import requests

from .config import ScraperConfig
from .errors import FetchError

LOGGER = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
_CHUNK_SIZE = 1024


def fetch_page(url: str, config: Optional[ScraperConfig] = None) -> str:
    """Download the raw markup of ``url`` with a single bounded request.

    Only the user agent header is sent; cookies and credentials are never
    forwarded to the target site. ``config.timeout`` bounds the whole
    download, not just the gaps between bytes.
    """

    config = config or ScraperConfig()
    LOGGER.debug("Fetching %s (timeout=%ss)", url, config.timeout)
    deadline = monotonic() + config.timeout
    try:
        with requests.get(
            url,
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout,
            stream=True,
        ) as response:
            if not 200 <= response.status_code < 300:
                LOGGER.warning("Fetching %s returned HTTP %s", url, response.status_code)
                raise FetchError(f"HTTP {response.status_code}", cause="non2xx", status=response.status_code)
            body = _read_body(response, url, deadline, config)
            encoding = _charset(response)
    except requests.Timeout as exc:
        LOGGER.warning("Timed out fetching %s: %s", url, exc)
        raise FetchError(f"Timed out after {config.timeout:g}s", cause="timeout") from exc
    except requests.RequestException as exc:
        LOGGER.warning("Request for %s failed: %s", url, exc)
        raise FetchError(str(exc) or exc.__class__.__name__, cause="network") from exc

    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        LOGGER.debug("Unknown charset %r for %s, decoding as %s", encoding, url, DEFAULT_ENCODING)
        return body.decode(DEFAULT_ENCODING, errors="replace")


def _read_body(response: requests.Response, url: str, deadline: float, config: ScraperConfig) -> bytes:
    body = bytearray()
    for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
        if monotonic() > deadline:
            LOGGER.warning("Download of %s exceeded %ss", url, config.timeout)
            raise FetchError(f"Timed out after {config.timeout:g}s", cause="timeout")
        body.extend(chunk)
        if len(body) >= config.max_page_bytes:
            # metadata lives in the head of the document, a truncated page is still useful
            LOGGER.info("Truncating %s at %d bytes", url, config.max_page_bytes)
            del body[config.max_page_bytes:]
            break
    return bytes(body)


def _charset(response: requests.Response) -> str:
    """Charset announced by the server, UTF-8 when the headers are silent.

    ``requests`` falls back to ISO-8859-1 for any ``text/*`` type without a
    charset parameter, which garbles the UTF-8 most pages are served in.
    """

    content_type = response.headers.get("content-type", "")
    if "charset" in content_type.lower() and response.encoding:
        return response.encoding
    return DEFAULT_ENCODING
