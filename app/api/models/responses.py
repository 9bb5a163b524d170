"""API response models."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

# === Score Models ===


class ScoreBreakdown(BaseModel):
    """Four sub-scores, each 0-25."""

    metadata: int = Field(..., ge=0, le=25)
    content: int = Field(..., ge=0, le=25)
    accessibility: int = Field(..., ge=0, le=25)
    links: int = Field(..., ge=0, le=25)


class BrokenLink(BaseModel):
    """Diagnostic entry for a problematic link."""

    href: str
    reason: Literal["placeholder", "empty", "suspected-broken"]
    text: str = ""
    component_id: str | None = None
    component_name: str | None = None


class AuditFinding(BaseModel):
    """Outcome of one scoring audit, with its recommended fix."""

    audit_id: str
    name: str
    category: str
    severity: Literal["critical", "warning", "info", "pass"]
    score: int = Field(..., ge=0)
    max_score: int
    passed: bool
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
    recommendation: str | None = None


class PageSummary(BaseModel):
    """Identity of the scanned page."""

    item_id: str
    name: str
    language: str
    path: str


class ScanResponse(BaseModel):
    """Result of a page scan."""

    page: PageSummary
    seo_score: int = Field(..., ge=0, le=100, description="Total SEO score (0-100)")
    grade: Literal["A+", "A", "B", "C", "D", "F"] = Field(..., description="Letter grade")
    breakdown: ScoreBreakdown
    issues: dict[str, Any] = Field(
        default_factory=dict, description="Issues present on the page, keyed by issue name"
    )
    page_data: dict[str, Any] = Field(
        default_factory=dict, description="Metadata, headings, text, images, links and metrics"
    )
    broken_links_details: list[BrokenLink] = Field(default_factory=list)
    audits: list[AuditFinding] = Field(
        default_factory=list, description="Per-audit findings, in scoring order"
    )


# === Semantic Item Models ===


class LinkPayload(BaseModel):
    text: str = ""
    url: str = ""
    title: str | None = None


class ImagePayload(BaseModel):
    alt: str = ""
    src: str = ""


class SemanticItem(BaseModel):
    """One classified field in document order."""

    id: str
    text: str
    category: str
    component_id: str
    component_name: str
    field_name: str
    datasource_item_id: str | None = None
    path: list[str]
    link: LinkPayload | None = None
    image: ImagePayload | None = None


class ItemsResponse(BaseModel):
    """Semantic items of a page."""

    page: PageSummary
    total: int = Field(..., ge=0)
    counts: dict[str, int] = Field(default_factory=dict, description="Item count per category")
    items: list[SemanticItem]


# === Health Models ===


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    timestamp: datetime
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual health check results"
    )
