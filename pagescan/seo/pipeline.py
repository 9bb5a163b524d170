"""End-to-end page scan: raw tree -> PageContent -> items -> PageData -> ScanResult."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pagescan.audit import AuditRegistry
from pagescan.classifier.rules import DEFAULT_RULES, ClassifierRules
from pagescan.models.content import PageContent, SemanticTextItem
from pagescan.models.seo import ScanResult
from pagescan.parser.datasource import enrich_with_datasources
from pagescan.parser.extractor import extract_semantic_items
from pagescan.parser.tree_parser import LayoutError, build_page_content, parse_edge_response
from pagescan.scanner.content_scanner import scan_page_content
from pagescan.seo.scorer import compute_seo_score

logger = logging.getLogger(__name__)

PageSource = PageContent | Mapping[str, Any]


def load_page(
    source: PageSource,
    datasources: Mapping[str, Mapping[str, Any]] | None = None,
    rules: ClassifierRules = DEFAULT_RULES,
) -> PageContent:
    """Normalize any accepted input into a PageContent.

    ``source`` may be a PageContent, a Pages context (has ``pageInfo``) or an
    Experience Edge response (has ``item``).

    Raises:
        LayoutError: If the input is not a recognized page shape
    """
    if isinstance(source, PageContent):
        page = source
    elif isinstance(source, Mapping) and "pageInfo" in source:
        page = build_page_content(source, rules)
    elif isinstance(source, Mapping) and "item" in source:
        page = parse_edge_response(source, rules)
        if page is None:
            raise LayoutError("Response has no item with an id")
    else:
        raise LayoutError("Input is neither a page context nor an item response")

    if datasources:
        page = enrich_with_datasources(page, datasources, rules)
    return page


def extract_items(
    source: PageSource,
    datasources: Mapping[str, Mapping[str, Any]] | None = None,
    rules: ClassifierRules = DEFAULT_RULES,
) -> tuple[PageContent, list[SemanticTextItem]]:
    page = load_page(source, datasources, rules)
    return page, extract_semantic_items(page)


def scan_page(
    source: PageSource,
    datasources: Mapping[str, Mapping[str, Any]] | None = None,
    *,
    rules: ClassifierRules = DEFAULT_RULES,
    registry: AuditRegistry | None = None,
) -> ScanResult:
    """Scan a page and score it.

    Args:
        source: PageContent, Pages context or Experience Edge response
        datasources: Already-fetched datasource items keyed by reference
        rules: Classification tables
        registry: Audits to run; defaults to the built-in SEO audits

    Returns:
        ScanResult for the page

    Raises:
        LayoutError: If the page cannot be built from ``source``
    """
    page, items = extract_items(source, datasources, rules)
    logger.info("Scanning %s: %d semantic items", page.name, len(items))
    page_data = scan_page_content(page, items)
    return compute_seo_score(page_data, registry)
