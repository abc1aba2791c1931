from __future__ import annotations

import logging
import os
import re

import httpx

from .models import AnalysisReport, KnowledgeEntity

logger = logging.getLogger(__name__)

MEMORY_URL = os.getenv("STOREINTEL_MEMORY_URL", "http://localhost:3000/api/mcp/memory")
MEMORY_TIMEOUT_MS = int(os.getenv("STOREINTEL_MEMORY_TIMEOUT_MS", "5000"))

ENTITY_PREFIX = "CompetitorStore_"
ENTITY_TYPE = "E-commerce Store"


def entity_name(store_name: str) -> str:
    return ENTITY_PREFIX + re.sub(r"\s+", "_", store_name or "")


def build_knowledge_entity(report: AnalysisReport) -> KnowledgeEntity:
    m = report.metrics
    observations = [
        f"Overall Score: {report.overall_score}/100",
        f"Design Score: {m.design_score}/100",
        f"Product Score: {m.product_score}/100",
        f"Pricing Score: {m.pricing_score}/100",
        f"Marketing Score: {m.marketing_score}/100",
        f"Analyzed: {report.timestamp}",
        f"URL: {report.store_url}",
        f"Product Count: {len(report.products)}",
        *report.insights,
        *report.opportunities,
    ]
    return KnowledgeEntity(
        name=entity_name(report.store_name),
        entity_type=ENTITY_TYPE,
        observations=observations,
    )


def store_report(
    report: AnalysisReport,
    *,
    endpoint: str = MEMORY_URL,
    timeout_ms: int = MEMORY_TIMEOUT_MS,
    client: httpx.Client | None = None,
) -> bool:
    """Persist a finished report in the knowledge store.

    Fire-and-forget: failures are logged and reported as False, never raised.
    """
    entity = build_knowledge_entity(report)
    payload = {"action": "create_entities", "entities": [entity.model_dump(by_alias=True)]}

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout_ms / 1000)
    try:
        res = client.post(endpoint, json=payload)
        if res.status_code < 200 or res.status_code >= 300:
            logger.warning("Failed to store %s in memory: HTTP %s %s", entity.name, res.status_code, res.text[:200])
            return False
        return True
    except httpx.HTTPError as e:
        logger.warning("Memory storage failed for %s: %s", entity.name, e)
        return False
    finally:
        if owns_client:
            client.close()
