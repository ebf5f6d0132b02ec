"""Shared data structures returned by the scraping pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ScrapedProduct:
    """Best-effort product metadata derived from a single page."""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    images: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.description is None and self.price is None and not self.images

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "images": list(self.images),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ScrapedProduct":
        """Rebuild a product from the JSON structure produced by :meth:`to_dict`."""

        price = payload.get("price")
        return cls(
            name=payload.get("name") or None,
            description=payload.get("description") or None,
            price=float(price) if price is not None else None,
            images=tuple(image for image in payload.get("images") or [] if image),
        )


@dataclass(frozen=True)
class ScrapeOutcome:
    """Result of scraping one URL as part of a batch."""

    url: Any
    product: Optional[ScrapedProduct] = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.product is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "success": self.ok,
            "data": self.product.to_dict() if self.product else None,
            "error": self.error,
            "statusCode": self.status_code,
        }
