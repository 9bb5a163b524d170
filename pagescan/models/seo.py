"""Scan result models."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from pagescan.audit.base import AuditResult

BrokenLinkReason = Literal["placeholder", "empty", "suspected-broken"]


@dataclass
class PageMetadata:
    title: str | None = None
    description: str | None = None


@dataclass
class PageHeadings:
    h1: str | None = None
    h2: list[str] = field(default_factory=list)
    h3: list[str] = field(default_factory=list)
    all: list[str] = field(default_factory=list)


@dataclass
class PageImage:
    id: str
    src: str
    alt: str = ""
    component_id: str | None = None
    component_name: str | None = None
    field_name: str | None = None
    path: list[str] = field(default_factory=list)


@dataclass
class PageLink:
    href: str
    text: str = ""
    is_placeholder: bool = False
    is_broken: bool = False
    component_id: str | None = None
    component_name: str | None = None
    field_name: str | None = None
    path: list[str] = field(default_factory=list)


@dataclass
class ParagraphText:
    field_name: str
    text: str


@dataclass
class ComponentContent:
    """Page facts scoped to a single component."""
    component_id: str
    component_name: str
    path: list[str]
    headings: PageHeadings = field(default_factory=PageHeadings)
    paragraphs: list[ParagraphText] = field(default_factory=list)
    images: list[PageImage] = field(default_factory=list)
    links: list[PageLink] = field(default_factory=list)


@dataclass
class ReadabilityMetrics:
    """Flesch Reading Ease result."""
    score: int = 0
    grade: str = "N/A"
    sentences: int = 0
    words: int = 0
    syllables: int = 0
    average_words_per_sentence: float = 0
    average_syllables_per_word: float = 0


@dataclass
class ContentMetrics:
    word_count: int = 0
    character_count: int = 0
    paragraph_count: int = 0
    heading_count: int = 0
    link_count: int = 0
    image_count: int = 0
    readability: ReadabilityMetrics = field(default_factory=ReadabilityMetrics)


@dataclass
class PageData:
    """Everything the scorer needs to know about a page."""
    metadata: PageMetadata = field(default_factory=PageMetadata)
    headings: PageHeadings = field(default_factory=PageHeadings)
    text: str = ""
    images: list[PageImage] = field(default_factory=list)
    links: list[PageLink] = field(default_factory=list)
    word_count: int = 0
    components: list[ComponentContent] = field(default_factory=list)
    metrics: ContentMetrics = field(default_factory=ContentMetrics)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ScoreBreakdown:
    """Four sub-scores, each 0-25."""
    metadata: int = 0
    content: int = 0
    accessibility: int = 0
    links: int = 0

    @property
    def total(self) -> int:
        return round(self.metadata + self.content + self.accessibility + self.links)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SEOIssues:
    """Independent, non-exclusive issue flags."""
    missing_meta_description: bool = False
    title_too_long: bool = False
    description_too_long: bool = False
    missing_h1: bool = False
    short_content: bool = False
    low_readability: bool = False
    weak_alt_text: list[str] = field(default_factory=list)  # image ids
    missing_images: bool = False
    placeholder_links: list[str] = field(default_factory=list)  # hrefs
    broken_links: list[str] = field(default_factory=list)  # hrefs
    too_many_links: bool = False
    no_internal_links: bool = False

    def to_dict(self) -> dict:
        """Only the issues that are present."""
        return {name: value for name, value in asdict(self).items() if value}


@dataclass
class BrokenLinkInfo:
    href: str
    reason: BrokenLinkReason
    text: str = ""
    component_id: str | None = None
    component_name: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ScanResult:
    """Final output of a page scan."""
    seo_score: int
    breakdown: ScoreBreakdown
    issues: SEOIssues
    page_data: PageData
    broken_links_details: list[BrokenLinkInfo] = field(default_factory=list)
    audits: list[AuditResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "seo_score": self.seo_score,
            "breakdown": self.breakdown.to_dict(),
            "issues": self.issues.to_dict(),
            "page_data": self.page_data.to_dict(),
            "broken_links_details": [b.to_dict() for b in self.broken_links_details],
            "audits": [a.to_dict() for a in self.audits],
        }
