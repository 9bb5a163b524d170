"""API Pydantic models."""
from app.api.models.errors import ErrorCodes, ErrorDetail, ErrorResponse
from app.api.models.requests import ItemsRequest, ScanRequest
from app.api.models.responses import (
    AuditFinding,
    HealthResponse,
    ItemsResponse,
    ScanResponse,
    SemanticItem,
)

__all__ = [
    "ScanRequest",
    "ItemsRequest",
    "ScanResponse",
    "AuditFinding",
    "ItemsResponse",
    "SemanticItem",
    "HealthResponse",
    "ErrorResponse",
    "ErrorDetail",
    "ErrorCodes",
]
