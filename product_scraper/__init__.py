"""Product scraper package exposing the extraction pipeline."""
from .config import ScraperConfig, create_config, create_config_from_env
from .errors import FetchError, ScrapeError, ValidationError
from .models import ScrapedProduct, ScrapeOutcome
from .workflow import extract_product, scrape_many, scrape_url, validate_url

__all__ = [
    "FetchError",
    "ScrapeError",
    "ScrapeOutcome",
    "ScrapedProduct",
    "ScraperConfig",
    "ValidationError",
    "create_config",
    "create_config_from_env",
    "extract_product",
    "scrape_many",
    "scrape_url",
    "validate_url",
]
