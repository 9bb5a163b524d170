"""Health check endpoint."""
from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from app.api.models.responses import HealthResponse
from pagescan import __version__
from pagescan.audit import audit_registry
from pagescan.classifier.rules import DEFAULT_RULES

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check API health and service status.",
)
async def health_check() -> HealthResponse:
    """Return API health status."""
    checks = {
        "audits_registered": len(audit_registry.list_all()) > 0,
        "classifier_rules": bool(DEFAULT_RULES.name_exact),
    }
    overall_status = "healthy" if all(checks.values()) else "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
