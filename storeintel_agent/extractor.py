"""
Client for the page-data extraction service.

The service loads a storefront in a browser, evaluates EXTRACTION_SCRIPT in the
page and returns whatever the script produced. We do not trust the shape of that
payload; normalize_snapshot() deals with it.
"""
from __future__ import annotations

import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)

EXTRACTOR_URL = os.getenv("STOREINTEL_EXTRACTOR_URL", "http://localhost:3000/api/mcp/puppeteer")
EXTRACT_TIMEOUT_MS = int(os.getenv("STOREINTEL_EXTRACT_TIMEOUT_MS", "20000"))

EXTRACTION_SCRIPT = """
const PRODUCT_SELECTOR = '[data-product-id], .product-item, .product-card';
const cards = Array.from(document.querySelectorAll(PRODUCT_SELECTOR));
const timing = performance.timing;
return {
  storeName: document.title || document.querySelector('h1')?.textContent,
  productCount: cards.length,
  hasEmailCapture: !!document.querySelector('input[type="email"], .email-signup, .newsletter'),
  hasReviews: !!document.querySelector('.reviews, .review, [data-reviews]'),
  hasChatWidget: !!document.querySelector('.chat-widget, #crisp-chatbox, .intercom-launcher'),
  hasUrgencyMessages: !!document.querySelector('.limited-time, .hurry, .only-left, .countdown'),
  hasGuarantees: !!document.querySelector('.guarantee, .money-back, .satisfaction'),
  socialProof: document.querySelectorAll('.testimonial, .customer-review').length,
  products: cards.slice(0, 20).map(item => ({
    title: item.querySelector('.product-title, .product-name, h3, h2')?.textContent?.trim(),
    price: item.querySelector('.price, .product-price, .money')?.textContent?.trim(),
    image: item.querySelector('img')?.src,
    url: item.querySelector('a')?.href,
    hasDiscount: !!item.querySelector('.sale, .discount, .was-price'),
  })),
  pageLoadTime: timing.loadEventEnd - timing.navigationStart,
  hasSSL: location.protocol === 'https:',
  mobileOptimized: !!document.querySelector('meta[name="viewport"]'),
};
"""


class ExtractionError(RuntimeError):
    pass


def extract_store_data(
    store_url: str,
    *,
    timeout_ms: int = EXTRACT_TIMEOUT_MS,
    endpoint: str = EXTRACTOR_URL,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """Ask the extraction service to evaluate the extraction script on store_url.

    Returns the raw `result` object (possibly empty). Raises ExtractionError on
    transport failures, non-2xx statuses and undecodable bodies; substituting an
    empty payload is the caller's decision.
    """
    payload = {"action": "evaluate", "url": store_url, "script": EXTRACTION_SCRIPT}
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout_ms / 1000, follow_redirects=True)
    try:
        res = client.post(endpoint, json=payload, headers={"accept": "application/json"})
        if res.status_code < 200 or res.status_code >= 300:
            raise ExtractionError(f"Extraction service returned HTTP {res.status_code}")
        body = res.json()
    except httpx.HTTPError as e:
        raise ExtractionError(f"Extraction request failed: {e}") from e
    except ValueError as e:
        raise ExtractionError(f"Extraction response is not JSON: {e}") from e
    finally:
        if owns_client:
            client.close()

    result = body.get("result") if isinstance(body, dict) else None
    if not isinstance(result, dict):
        logger.info("Extraction for %s returned no result object", store_url)
        return {}
    return result
