from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable
from urllib.parse import urlparse

from .insights import generate_insights, identify_opportunities
from .models import AnalysisReport, StoreSnapshot
from .normalizer import normalize_snapshot
from .scoring import calculate_metrics, round_half_up

UNKNOWN_STORE = "Unknown Store"

_PLATFORM_SUFFIXES = (".myshopify.com",)


def ensure_scheme(raw: str) -> str:
    value = raw.strip()
    if not re.match(r"^[a-zA-Z][a-zA-Z\d+.-]*://", value):
        value = "https://" + value
    return value


def extract_store_name(store_url: str) -> str:
    """Derive a display name from the store's host.

    "https://www.acme.myshopify.com/collections" -> "acme"
    """
    try:
        hostname = urlparse(ensure_scheme(store_url or "")).hostname
    except ValueError:
        return UNKNOWN_STORE
    if not hostname:
        return UNKNOWN_STORE

    name = hostname
    for suffix in _PLATFORM_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    if name.startswith("www."):
        name = name[len("www."):]
    return name or UNKNOWN_STORE


def build_report(
    store_url: str,
    snapshot: StoreSnapshot,
    name_fallback: Callable[[str], str] = extract_store_name,
    now: datetime | None = None,
) -> AnalysisReport:
    metrics = calculate_metrics(snapshot)
    insights = generate_insights(snapshot, metrics)
    opportunities = identify_opportunities(snapshot, metrics)

    overall = round_half_up(sum(metrics.as_tuple()) / 4)
    store_name = snapshot.store_name or name_fallback(store_url)
    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    return AnalysisReport(
        store_url=store_url,
        store_name=store_name,
        overall_score=overall,
        metrics=metrics,
        insights=tuple(insights),
        opportunities=tuple(opportunities),
        products=tuple(snapshot.products),
        timestamp=timestamp,
    )


def analyze(store_url: str, raw_snapshot: Any) -> AnalysisReport:
    return build_report(store_url, normalize_snapshot(raw_snapshot))
