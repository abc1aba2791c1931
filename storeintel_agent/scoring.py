from __future__ import annotations

import math

from .models import Metrics, StoreSnapshot

# Point tables. These are business weights, not fitted values: changing any of
# them shifts every stored score.

# design
MOBILE_POINTS = 25
LOAD_UNDER_3S_POINTS = 25
LOAD_UNDER_2S_POINTS = 10
SSL_POINTS = 15
CHAT_POINTS = 10
DESIGN_EMAIL_POINTS = 15
DESIGN_REVIEWS_POINTS = 10

LOAD_OK_MS = 3000
LOAD_FAST_MS = 2000

# product: (minimum catalog size, points), highest tier first
CATALOG_TIERS: tuple[tuple[int, int], ...] = ((50, 30), (20, 20), (10, 10))
IMAGE_COVERAGE_POINTS = 30
DISCOUNT_MIX_POINTS = 20
DISCOUNT_MIX_RATIO = 0.2
# Extraction carries no description data yet; every store with listings gets this.
DESCRIPTION_CREDIT_POINTS = 20

# pricing
PRICING_BASE = 50
ANY_DISCOUNT_POINTS = 20
PRICE_RANGE_POINTS = 15
PRICE_RANGE_MIN_LISTINGS = 5
PRICING_URGENCY_POINTS = 15

# marketing
MARKETING_EMAIL_POINTS = 25
SOCIAL_PROOF_POINTS = 20
SOCIAL_PROOF_STRONG_POINTS = 10
SOCIAL_PROOF_STRONG_COUNT = 5
GUARANTEE_POINTS = 15
MARKETING_REVIEWS_POINTS = 15
MARKETING_URGENCY_POINTS = 15


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_score(score: float) -> int:
    return max(0, min(100, round_half_up(score)))


def calculate_design_score(snapshot: StoreSnapshot) -> int:
    score = 0
    if snapshot.mobile_optimized:
        score += MOBILE_POINTS

    load_ms = snapshot.page_load_time_ms
    if load_ms is not None and load_ms < LOAD_OK_MS:
        score += LOAD_UNDER_3S_POINTS
    if load_ms is not None and load_ms < LOAD_FAST_MS:
        score += LOAD_UNDER_2S_POINTS

    if snapshot.has_ssl:
        score += SSL_POINTS
    if snapshot.has_chat_widget:
        score += CHAT_POINTS
    if snapshot.has_email_capture:
        score += DESIGN_EMAIL_POINTS
    if snapshot.has_reviews:
        score += DESIGN_REVIEWS_POINTS
    return _clamp_score(score)


def calculate_product_score(snapshot: StoreSnapshot) -> int:
    score = 0.0
    for minimum, points in CATALOG_TIERS:
        if snapshot.product_count >= minimum:
            score += points
            break

    valid = [p for p in snapshot.products if p.is_valid]
    if valid:
        with_image = sum(1 for p in valid if p.image_url)
        score += IMAGE_COVERAGE_POINTS * (with_image / len(valid))

        discounted = sum(1 for p in valid if p.has_discount)
        if discounted / len(valid) > DISCOUNT_MIX_RATIO:
            score += DISCOUNT_MIX_POINTS

        score += DESCRIPTION_CREDIT_POINTS
    return _clamp_score(score)


def calculate_pricing_score(snapshot: StoreSnapshot) -> int:
    # Uses every extracted listing, valid or not.
    score = PRICING_BASE
    if any(p.has_discount for p in snapshot.products):
        score += ANY_DISCOUNT_POINTS
    if len(snapshot.products) > PRICE_RANGE_MIN_LISTINGS:
        score += PRICE_RANGE_POINTS
    if snapshot.has_urgency_messages:
        score += PRICING_URGENCY_POINTS
    return _clamp_score(score)


def calculate_marketing_score(snapshot: StoreSnapshot) -> int:
    score = 0
    if snapshot.has_email_capture:
        score += MARKETING_EMAIL_POINTS
    if snapshot.social_proof_count > 0:
        score += SOCIAL_PROOF_POINTS
    if snapshot.social_proof_count > SOCIAL_PROOF_STRONG_COUNT:
        score += SOCIAL_PROOF_STRONG_POINTS
    if snapshot.has_guarantees:
        score += GUARANTEE_POINTS
    if snapshot.has_reviews:
        score += MARKETING_REVIEWS_POINTS
    if snapshot.has_urgency_messages:
        score += MARKETING_URGENCY_POINTS
    return _clamp_score(score)


def calculate_metrics(snapshot: StoreSnapshot) -> Metrics:
    return Metrics(
        design_score=calculate_design_score(snapshot),
        product_score=calculate_product_score(snapshot),
        pricing_score=calculate_pricing_score(snapshot),
        marketing_score=calculate_marketing_score(snapshot),
    )
