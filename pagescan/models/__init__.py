"""Data models shared by the scan pipeline."""
from pagescan.models.content import (
    ComponentMetadata,
    ComponentNode,
    FieldInfo,
    ImageData,
    LinkData,
    PageContent,
    SemanticCategory,
    SemanticTextItem,
)
from pagescan.models.seo import (
    BrokenLinkInfo,
    ComponentContent,
    ContentMetrics,
    PageData,
    PageHeadings,
    PageImage,
    PageLink,
    PageMetadata,
    ParagraphText,
    ReadabilityMetrics,
    ScanResult,
    ScoreBreakdown,
    SEOIssues,
)

__all__ = [
    "BrokenLinkInfo",
    "ComponentContent",
    "ComponentMetadata",
    "ComponentNode",
    "ContentMetrics",
    "FieldInfo",
    "ImageData",
    "LinkData",
    "PageContent",
    "PageData",
    "PageHeadings",
    "PageImage",
    "PageLink",
    "PageMetadata",
    "ParagraphText",
    "ReadabilityMetrics",
    "ScanResult",
    "ScoreBreakdown",
    "SEOIssues",
    "SemanticCategory",
    "SemanticTextItem",
]
