"""
Normalization of raw extraction payloads into a StoreSnapshot.

The extraction service runs a script inside somebody else's storefront, so its
output is whatever that page happened to yield: missing keys, strings where we
expect numbers, "unknown" where we expect booleans. Everything here degrades to
a default instead of raising.
"""
from __future__ import annotations

import math
from typing import Any

from .models import ProductListing, StoreSnapshot

# Upstream caps product extraction at 20 listings; enforce it here too.
MAX_PRODUCTS = 20

_TRUE_STRINGS = {"true", "yes", "1", "on"}

# snapshot field -> accepted payload keys, in priority order
_FLAG_KEYS: dict[str, tuple[str, ...]] = {
    "has_email_capture": ("hasEmailCapture", "has_email_capture"),
    "has_reviews": ("hasReviews", "has_reviews"),
    "has_chat_widget": ("hasChatWidget", "has_chat_widget"),
    "has_urgency_messages": ("hasUrgencyMessages", "has_urgency_messages"),
    "has_guarantees": ("hasGuarantees", "has_guarantees"),
    "has_ssl": ("hasSSL", "hasSsl", "has_ssl"),
    "mobile_optimized": ("mobileOptimized", "mobile_optimized"),
}


def _pick(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == value and value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def _as_count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def _as_ms(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    # A zero/negative timing means the load event never fired.
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    try:
        text = str(value).strip()
    except ValueError:
        # int too long to stringify (sys.get_int_max_str_digits)
        return None
    return text or None


def normalize_product(raw: Any) -> ProductListing | None:
    if not isinstance(raw, dict):
        return None
    return ProductListing(
        title=_as_text(_pick(raw, "title", "name")),
        price=_as_text(_pick(raw, "price")),
        image_url=_as_text(_pick(raw, "image", "imageUrl", "image_url")),
        page_url=_as_text(_pick(raw, "url", "pageUrl", "page_url")),
        has_discount=_as_bool(_pick(raw, "hasDiscount", "has_discount")),
    )


def _normalize_products(value: Any) -> list[ProductListing]:
    if not isinstance(value, list):
        return []
    products: list[ProductListing] = []
    for item in value:
        product = normalize_product(item)
        if product is None:
            continue
        products.append(product)
        if len(products) >= MAX_PRODUCTS:
            break
    return products


def normalize_snapshot(raw: Any) -> StoreSnapshot:
    """Coerce an arbitrary extraction payload into a fully populated snapshot.

    Accepts both the extraction script's camelCase keys and snake_case keys.
    Unknown keys are ignored; non-dict input yields the all-defaults snapshot.
    """
    if not isinstance(raw, dict):
        return StoreSnapshot()

    flags = {field: _as_bool(_pick(raw, *keys)) for field, keys in _FLAG_KEYS.items()}

    return StoreSnapshot(
        store_name=_as_text(_pick(raw, "storeName", "store_name")),
        product_count=_as_count(_pick(raw, "productCount", "product_count")),
        social_proof_count=_as_count(
            _pick(raw, "socialProofCount", "socialProof", "social_proof_count")
        ),
        page_load_time_ms=_as_ms(_pick(raw, "pageLoadTimeMs", "pageLoadTime", "page_load_time_ms")),
        products=_normalize_products(_pick(raw, "products")),
        **flags,
    )
