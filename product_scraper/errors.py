"""Exceptions raised by the scraping pipeline."""
from __future__ import annotations

from typing import Optional


class ScrapeError(Exception):
    """Base class for failures that are reported back to the caller."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Message shown to API consumers."""

        return self.message


class ValidationError(ScrapeError):
    """The submitted URL is missing or malformed."""

    status_code = 400


class FetchError(ScrapeError):
    """The target page could not be retrieved.

    ``cause`` is one of ``"network"``, ``"timeout"`` or ``"non2xx"``; ``status``
    carries the HTTP status code for the latter.
    """

    CAUSES = ("network", "timeout", "non2xx")

    def __init__(self, message: str, cause: str = "network", status: Optional[int] = None) -> None:
        if cause not in self.CAUSES:
            raise ValueError(f"Unknown fetch failure cause: {cause}")
        super().__init__(message)
        self.cause = cause
        self.status = status

    @property
    def public_message(self) -> str:
        return f"Failed to scrape URL: {self.message}"
