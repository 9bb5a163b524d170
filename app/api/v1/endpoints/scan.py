"""Page scan and semantic item endpoints."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, status

from app.api.models.errors import ErrorCodes, ErrorResponse
from app.api.models.requests import ItemsRequest, ScanRequest
from app.api.models.responses import ItemsResponse, PageSummary, ScanResponse, SemanticItem
from pagescan.models.content import PageContent, SemanticCategory, SemanticTextItem
from pagescan.parser.extractor import filter_by_search
from pagescan.parser.tree_parser import LayoutError
from pagescan.report.formatter import build_report
from pagescan.scanner.content_scanner import scan_page_content
from pagescan.seo.pipeline import extract_items
from pagescan.seo.scorer import compute_seo_score

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scan"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Page layout could not be read"},
    422: {"description": "Request body failed validation"},
    500: {"model": ErrorResponse, "description": "Unexpected scoring failure"},
}


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse.build(code, message).model_dump(),
    )


def _load(body: ScanRequest) -> tuple[PageContent, list[SemanticTextItem]]:
    try:
        return extract_items(body.page, body.datasources)
    except LayoutError as e:
        raise _error(status.HTTP_400_BAD_REQUEST, ErrorCodes.INVALID_LAYOUT, str(e)) from e


def _summary(page: PageContent) -> PageSummary:
    return PageSummary(item_id=page.item_id, name=page.name, language=page.language, path=page.path)


@router.post(
    "/scan",
    response_model=ScanResponse,
    responses=_ERROR_RESPONSES,
    summary="Scan a page for SEO issues",
    description="""
Scan a page's component tree and score it.

Accepts either a Pages context (`pageInfo` plus one of `presentationDetails`,
`layout.rendered.sitecore.route.placeholders` or `components`) or an
Experience Edge item response. Datasource items the caller has already
fetched can be passed in `datasources` to fill in component fields.

**Score breakdown** (25 points each): metadata, content, accessibility, links.
""",
)
async def scan(body: ScanRequest) -> ScanResponse:
    """Scan a page and return its score, issues and extracted page data."""
    page, items = _load(body)
    try:
        result = compute_seo_score(scan_page_content(page, items))
    except Exception as e:
        logger.exception("Scoring failed for %s", page.name)
        raise _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCodes.INTERNAL_ERROR, "Scoring failed"
        ) from e
    logger.info("Scanned %s: %d/100", page.name, result.seo_score)
    return ScanResponse(**build_report(page, result))


@router.post(
    "/items",
    response_model=ItemsResponse,
    responses=_ERROR_RESPONSES,
    summary="List semantic items",
    description="Return the page's classified text items in document order, optionally filtered.",
)
async def items(body: ItemsRequest) -> ItemsResponse:
    """List a page's semantic items."""
    page, found = _load(body)

    found = filter_by_search(found, body.search)
    if body.category:
        wanted = SemanticCategory.from_name(body.category)
        found = [item for item in found if item.category is wanted]

    counts = Counter(item.category.value for item in found)
    return ItemsResponse(
        page=_summary(page),
        total=len(found),
        counts=dict(counts),
        items=[
            SemanticItem(
                id=item.id,
                text=item.text,
                category=item.category.value,
                component_id=item.metadata.component_id,
                component_name=item.metadata.component_name,
                field_name=item.metadata.field_name,
                datasource_item_id=item.metadata.datasource_item_id,
                path=list(item.path),
                link=asdict(item.link) if item.link else None,
                image=asdict(item.image) if item.image else None,
            )
            for item in found
        ],
    )
