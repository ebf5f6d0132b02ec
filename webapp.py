"""Flask based backend exposing the product scraper over HTTP."""
from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from product_scraper import (
    FetchError,
    ScrapeError,
    create_config_from_env,
    scrape_many,
    scrape_url,
)

LOGGER = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

app = Flask(__name__)
scraper_config = create_config_from_env()


def _error_response(status_code: int, message: str):
    return jsonify({"success": False, "statusCode": status_code, "statusMessage": message}), status_code


@app.errorhandler(ScrapeError)
def handle_scrape_error(exc: ScrapeError):
    if isinstance(exc, FetchError):
        LOGGER.warning("Scraping error (%s): %s", exc.cause, exc.message)
    return _error_response(exc.status_code, exc.public_message)


@app.route("/api/scrape-url", methods=["POST"])
def scrape_single():
    # The Authorization header belongs to the wishlist backend; it is accepted
    # here but never read.
    payload = request.get_json(silent=True) or {}
    url = payload.get("url") if isinstance(payload, dict) else None
    try:
        product = scrape_url(url, scraper_config)
    except ScrapeError:
        # left to handle_scrape_error so validation failures keep their 400
        raise
    except Exception as exc:  # pragma: no cover - runtime safeguard
        LOGGER.exception("Scraping %s failed unexpectedly", url)
        return _error_response(500, f"Failed to scrape URL: {exc}")
    return jsonify({"success": True, "data": product.to_dict()})


@app.route("/api/scrape-urls", methods=["POST"])
def scrape_batch():
    payload = request.get_json(silent=True) or {}
    urls = payload.get("urls") if isinstance(payload, dict) else None
    if not urls or not isinstance(urls, list):
        return _error_response(400, "URLs are required")
    if len(urls) > scraper_config.max_batch_size:
        return _error_response(400, "Too many URLs")

    outcomes = scrape_many(urls, scraper_config)
    failed = sum(1 for outcome in outcomes if not outcome.ok)
    if failed:
        LOGGER.info("Batch scrape finished with %d of %d failures", failed, len(outcomes))
    return jsonify({"success": True, "data": [outcome.to_dict() for outcome in outcomes]})


if __name__ == "__main__":
    app.run(debug=True)
