from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    store_url: str = Field(..., min_length=1)
    # Extraction runs a full page load upstream; callers can raise up to 60s.
    timeout_ms: int = Field(20000, ge=1000, le=60000)
    persist: bool = Field(True)


class ProductListing(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str | None = None
    price: str | None = None
    image_url: str | None = None
    page_url: str | None = None
    has_discount: bool = False

    @property
    def is_valid(self) -> bool:
        return bool(self.title and self.title.strip() and self.price and self.price.strip())


class StoreSnapshot(BaseModel):
    store_name: str | None = None
    product_count: int = Field(0, ge=0)

    has_email_capture: bool = False
    has_reviews: bool = False
    has_chat_widget: bool = False
    has_urgency_messages: bool = False
    has_guarantees: bool = False
    has_ssl: bool = False
    mobile_optimized: bool = False

    social_proof_count: int = Field(0, ge=0)
    page_load_time_ms: float | None = Field(None, ge=0)

    products: list[ProductListing] = Field(default_factory=list)


class Metrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    design_score: int = Field(..., ge=0, le=100)
    product_score: int = Field(..., ge=0, le=100)
    pricing_score: int = Field(..., ge=0, le=100)
    marketing_score: int = Field(..., ge=0, le=100)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.design_score, self.product_score, self.pricing_score, self.marketing_score)


class AnalysisReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    store_url: str
    store_name: str
    overall_score: int = Field(..., ge=0, le=100)
    metrics: Metrics
    insights: tuple[str, ...]
    opportunities: tuple[str, ...]

    # raw listings as extracted, invalid ones included
    products: tuple[ProductListing, ...]

    timestamp: str


class AnalyzeResponse(AnalysisReport):
    # metadata
    agent: str = "python"
    timings_ms: dict[str, int] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)


class KnowledgeEntity(BaseModel):
    name: str
    entity_type: str = Field("E-commerce Store", serialization_alias="entityType")
    observations: list[str]
