import random

import pytest

from storeintel_agent.models import ProductListing, StoreSnapshot

FLAG_FIELDS = (
    "has_email_capture",
    "has_reviews",
    "has_chat_widget",
    "has_urgency_messages",
    "has_guarantees",
    "has_ssl",
    "mobile_optimized",
)


def random_snapshot(rng: random.Random) -> StoreSnapshot:
    products = [
        ProductListing(
            title=rng.choice([None, "", "Widget"]),
            price=rng.choice([None, "", "$9.99"]),
            image_url=rng.choice([None, "https://cdn.example/img.png"]),
            has_discount=rng.random() < 0.3,
        )
        for _ in range(rng.randint(0, 20))
    ]
    return StoreSnapshot(
        store_name=rng.choice([None, "Random Store"]),
        product_count=rng.choice([0, 5, 10, 19, 20, 49, 50, 101, 500]),
        social_proof_count=rng.randint(0, 12),
        page_load_time_ms=rng.choice([None, 500.0, 1999.0, 2000.0, 2999.0, 3000.0, 8000.0]),
        products=products,
        **{flag: rng.random() < 0.5 for flag in FLAG_FIELDS},
    )


@pytest.fixture
def random_snapshots():
    rng = random.Random(20240601)
    return [random_snapshot(rng) for _ in range(300)]


@pytest.fixture
def sample_payload():
    """Payload in the shape the extraction service returns for a healthy store."""
    return {
        "storeName": "Sample Store",
        "productCount": 47,
        "hasEmailCapture": True,
        "hasReviews": True,
        "hasChatWidget": False,
        "hasUrgencyMessages": True,
        "hasGuarantees": True,
        "socialProof": 8,
        "products": [
            {"title": "Premium Wireless Headphones", "price": "$99.99", "image": "https://img/1", "url": "#product1", "hasDiscount": True},
            {"title": "Smart Fitness Watch", "price": "$199.99", "image": "https://img/2", "url": "#product2", "hasDiscount": False},
            {"title": "Bluetooth Speaker", "price": "$79.99", "image": "https://img/3", "url": "#product3", "hasDiscount": True},
            {"title": "USB-C Fast Charger", "price": "$29.99", "image": "https://img/4", "url": "#product4", "hasDiscount": False},
            {"title": "Wireless Phone Stand", "price": "$39.99", "image": "https://img/5", "url": "#product5", "hasDiscount": True},
        ],
        "pageLoadTime": 1450,
        "hasSSL": True,
        "mobileOptimized": True,
    }
