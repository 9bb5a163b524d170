"""API request models."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from pagescan.models.content import SemanticCategory


class ScanRequest(BaseModel):
    """Request body for a page scan."""

    page: dict[str, Any] = Field(
        ...,
        description="Pages context (with `pageInfo`) or Experience Edge response (with `item`)",
        examples=[{
            "pageInfo": {"id": "{A1B2}", "name": "home", "path": "/"},
            "components": [{"uid": "c1", "componentName": "Hero", "fields": {"Title": "Welcome"}}],
        }],
    )
    datasources: dict[str, dict[str, Any]] | None = Field(
        default=None,
        description="Already-fetched datasource items keyed by datasource reference",
    )

    @field_validator("page")
    @classmethod
    def validate_page_shape(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Require one of the recognized top-level keys."""
        if "pageInfo" in v or "item" in v:
            return v
        raise ValueError("page must contain either 'pageInfo' or 'item'")


class ItemsRequest(ScanRequest):
    """Request body for listing semantic items."""

    category: str | None = Field(
        default=None,
        description="Only return items of this semantic category",
        examples=["Heading"],
    )
    search: str | None = Field(
        default=None,
        max_length=200,
        description="Case-insensitive match on text, component, field or category",
    )

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str | None) -> str | None:
        if v is None or SemanticCategory.from_name(v) is not None:
            return v
        choices = ", ".join(c.value for c in SemanticCategory)
        raise ValueError(f"category must be one of: {choices}")
