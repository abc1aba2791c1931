from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from urllib.parse import urlparse

from fastapi import BackgroundTasks, FastAPI
from fastapi import HTTPException
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

from .analyzer import ensure_scheme, analyze
from .extractor import ExtractionError, extract_store_data
from .knowledge_store import store_report
from .models import AnalyzeRequest, AnalyzeResponse


# Load environment variables from the repo root .env (so collaborator URLs work in local dev)
_HERE = Path(__file__).resolve()
_REPO_ROOT = _HERE.parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

logging.basicConfig(level=os.getenv("STOREINTEL_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="StoreIntel Python Agent", version="0.1.0")

_ACCEPTED_HOST_MARKERS = ("myshopify.com", ".com", ".store", ".shop", ".co")


def _cors_allow_origins() -> list[str]:
    raw = os.getenv("STOREINTEL_CORS_ORIGINS", "").strip()
    if not raw:
        return ["http://localhost:3000"]
    return [o.strip() for o in raw.split(",") if o.strip()]


# For local dev, this defaults to allowing http://localhost:3000.
# In production, set STOREINTEL_CORS_ORIGINS to your deployed frontend origins.
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def is_accepted_store_url(raw: str) -> bool:
    try:
        parsed = urlparse(ensure_scheme(raw or ""))
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return False
    return any(marker in parsed.hostname for marker in _ACCEPTED_HOST_MARKERS)


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze_endpoint(req: AnalyzeRequest, background_tasks: BackgroundTasks):
    if not is_accepted_store_url(req.store_url):
        raise HTTPException(status_code=400, detail="Invalid store URL")

    logger.info("Starting analysis for: %s", req.store_url)
    timings: dict[str, int] = {}
    warnings: list[str] = []

    start = time.perf_counter()
    try:
        raw = extract_store_data(ensure_scheme(req.store_url), timeout_ms=req.timeout_ms)
    except ExtractionError as e:
        logger.warning("Data extraction failed for %s: %s", req.store_url, e)
        warnings.append("Extraction: unavailable (service error or timeout); scored with defaults")
        raw = {}
    timings["extract"] = int((time.perf_counter() - start) * 1000)

    start = time.perf_counter()
    try:
        report = analyze(req.store_url, raw)
    except Exception:
        logger.exception("Store analysis failed for %s", req.store_url)
        raise HTTPException(status_code=500, detail="Failed to analyze store. Please try again.")
    timings["score"] = int((time.perf_counter() - start) * 1000)

    if req.persist:
        background_tasks.add_task(store_report, report)

    return AnalyzeResponse(**report.model_dump(), timings_ms=timings, warnings=warnings)
