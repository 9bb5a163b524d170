"""Page content scanning.

Turns the ordered semantic items of a page into the facts the scorer works
from: metadata, headings, body text, images, links, per-component buckets
and content metrics. Each extraction step fails on its own; a broken step
logs and contributes an empty result instead of aborting the scan.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from typing import TypeVar
from urllib.parse import urlsplit

from pagescan.config.settings import ScannerSettings, settings
from pagescan.models.content import PageContent, SemanticCategory, SemanticTextItem
from pagescan.models.seo import (
    ComponentContent,
    ContentMetrics,
    PageData,
    PageHeadings,
    PageImage,
    PageLink,
    PageMetadata,
    ParagraphText,
)
from pagescan.parser.text_utils import count_words, extract_plain_text, strip_tags
from pagescan.scanner.readability import calculate_readability, tokenize

logger = logging.getLogger(__name__)

T = TypeVar("T")

_BODY_CATEGORIES = (SemanticCategory.PARAGRAPH, SemanticCategory.RICH_TEXT)
_TITLE_CATEGORIES = (SemanticCategory.HEADING, SemanticCategory.LABEL)

_ALT_RE = re.compile(r"Alt:\s*([^|]+)")
_SRC_RE = re.compile(r"Src:\s*(.+)$")
_LINK_URL_RE = re.compile(r"\[([^\]]+)\]$")
_LINK_TEXT_RE = re.compile(r"^([^\[(]+)")
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")
_UNSAFE_CHARS_RE = re.compile(r"[\s\x00-\x1f\x7f]")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")

RELATIVE_PREFIXES = ("/", "./", "../")
PLACEHOLDER_HREFS = ("#", "http://#")


def _guarded(label: str, step: Callable[[], T], default: Callable[[], T]) -> T:
    try:
        return step()
    except Exception:
        logger.warning("Scanner step %r failed; using an empty result", label, exc_info=True)
        return default()


def _is_marker(item: SemanticTextItem) -> bool:
    return item.text.strip() == settings.tree.empty_marker


# === Link helpers ===


def is_placeholder_href(href: str) -> bool:
    return href in PLACEHOLDER_HREFS or href.startswith("http://#") or not href.strip()


def _parses_as_url(href: str) -> bool:
    """Whether href is an absolute URL a browser would accept."""
    if not _SCHEME_RE.match(href):
        return False
    try:
        parts = urlsplit(href.strip())
    except ValueError:
        return False
    if parts.scheme.lower() in ("http", "https", "ftp", "ws", "wss"):
        return bool(parts.netloc) and not _UNSAFE_CHARS_RE.search(parts.netloc)
    return True


def detect_broken_link(href: str) -> bool:
    """Heuristic broken-link check, biased toward "not broken"."""
    if not href or not href.strip():
        return True
    if is_placeholder_href(href):
        return True
    if "javascript:void(0)" in href or "javascript:;" in href:
        return True
    if href.startswith(RELATIVE_PREFIXES):
        return False
    if _parses_as_url(href):
        return False
    # Plenty of valid relative paths have no leading slash
    return bool(_UNSAFE_CHARS_RE.search(href))


def parse_image_item(item: SemanticTextItem) -> PageImage | None:
    """Image facts for an Image item, or None when it has no src."""
    if item.image is not None:
        alt, src = item.image.alt.strip(), item.image.src.strip()
    else:
        alt_match = _ALT_RE.search(item.text)
        src_match = _SRC_RE.search(item.text)
        alt = alt_match.group(1).strip() if alt_match else ""
        src = src_match.group(1).strip() if src_match else ""

    if not src:
        return None
    return PageImage(
        id=item.id,
        alt=alt,
        src=src,
        component_id=item.metadata.component_id,
        component_name=item.metadata.component_name,
        field_name=item.metadata.field_name,
        path=list(item.path),
    )


def parse_link_item(item: SemanticTextItem) -> PageLink | None:
    """Link facts for a Link item, or None when it has no href."""
    if item.link is not None:
        href, text = item.link.url.strip(), item.link.text.strip()
    else:
        url_match = _LINK_URL_RE.search(item.text)
        text_match = _LINK_TEXT_RE.search(item.text)
        href = url_match.group(1).strip() if url_match else ""
        text = text_match.group(1).strip() if text_match else ""

    if not href:
        return None
    return PageLink(
        text=text,
        href=href,
        is_placeholder=is_placeholder_href(href),
        is_broken=detect_broken_link(href),
        component_id=item.metadata.component_id,
        component_name=item.metadata.component_name,
        field_name=item.metadata.field_name,
        path=list(item.path),
    )


# === Page-level extraction ===


def extract_metadata(
    page: PageContent,
    items: Sequence[SemanticTextItem],
    config: ScannerSettings | None = None,
) -> PageMetadata:
    config = config or settings.scanner
    metadata = PageMetadata()

    title_items = [
        item for item in items
        if "title" in item.metadata.field_name.lower()
        and item.category in _TITLE_CATEGORIES
        and not _is_marker(item)
    ]
    if title_items:
        meta_title = next((i for i in title_items if "meta" in i.metadata.field_name.lower()), None)
        metadata.title = (meta_title or title_items[0]).text.strip()
    else:
        metadata.title = page.name

    description_items = [
        item for item in items
        if any(key in item.metadata.field_name.lower() for key in ("description", "meta", "summary"))
        and item.category in _BODY_CATEGORIES
        and not _is_marker(item)
    ]
    if description_items:
        meta_desc = next((i for i in description_items if "meta" in i.metadata.field_name.lower()), None)
        if meta_desc is not None:
            metadata.description = extract_plain_text(meta_desc.text).strip()
        else:
            first = extract_plain_text(description_items[0].text).strip()
            metadata.description = first[:config.description_max_length]

    return metadata


def _heading_level(field_name: str) -> str | None:
    name = field_name.lower()
    if "h1" in name or name in ("title", "heading"):
        return "h1"
    if "h2" in name:
        return "h2"
    if "h3" in name:
        return "h3"
    return None


def extract_headings(items: Sequence[SemanticTextItem]) -> PageHeadings:
    """Assign heading levels from field-name hints.

    The first unhinted heading becomes the h1 when none is set yet; later
    unhinted headings are treated as h2.
    """
    headings = PageHeadings()

    for item in items:
        if item.category is not SemanticCategory.HEADING:
            continue
        text = extract_plain_text(item.text).strip()
        if not text:
            continue

        level = _heading_level(item.metadata.field_name)
        if level == "h1" or (level is None and headings.h1 is None):
            if headings.h1 is None:
                headings.h1 = text
        elif level == "h3":
            headings.h3.append(text)
        else:
            headings.h2.append(text)

        headings.all.append(text)

    return headings


def extract_text_content(
    items: Sequence[SemanticTextItem],
    config: ScannerSettings | None = None,
) -> str:
    """Body text: paragraph-like items joined with spaces."""
    config = config or settings.scanner
    paragraphs = []

    for item in items:
        is_body = item.category in _BODY_CATEGORIES or (
            item.category is SemanticCategory.OTHER and len(item.text) > config.other_min_length
        )
        if not is_body or _is_marker(item):
            continue
        text = extract_plain_text(item.text).strip()
        if len(text) > config.min_paragraph_length:
            paragraphs.append(text)

    return " ".join(paragraphs)


def _collect(items: Sequence[SemanticTextItem], category: SemanticCategory, parse: Callable) -> list:
    results = []
    for item in items:
        if item.category is not category:
            continue
        try:
            parsed = parse(item)
        except Exception:
            logger.warning("Could not parse %s item %s", category.value, item.id, exc_info=True)
            continue
        if parsed is not None:
            results.append(parsed)
    return results


def extract_images(items: Sequence[SemanticTextItem]) -> list[PageImage]:
    return _collect(items, SemanticCategory.IMAGE, parse_image_item)


def extract_links(items: Sequence[SemanticTextItem]) -> list[PageLink]:
    return _collect(items, SemanticCategory.LINK, parse_link_item)


def extract_component_content(
    items: Sequence[SemanticTextItem],
    config: ScannerSettings | None = None,
) -> list[ComponentContent]:
    """Group headings, paragraphs, images and links by owning component."""
    config = config or settings.scanner
    buckets: dict[str, ComponentContent] = {}

    for item in items:
        meta = item.metadata
        bucket = buckets.get(meta.component_id)
        if bucket is None:
            bucket = ComponentContent(
                component_id=meta.component_id,
                component_name=meta.component_name,
                path=list(item.path),
            )
            buckets[meta.component_id] = bucket

        try:
            if item.category is SemanticCategory.HEADING:
                text = extract_plain_text(item.text).strip()
                if not text:
                    continue
                bucket.headings.all.append(text)
                level = _heading_level(meta.field_name)
                if level == "h1":
                    if bucket.headings.h1 is None:
                        bucket.headings.h1 = text
                elif level == "h2":
                    bucket.headings.h2.append(text)
                elif level == "h3":
                    bucket.headings.h3.append(text)
            elif item.category in _BODY_CATEGORIES:
                text = extract_plain_text(item.text).strip()
                if len(text) > config.min_paragraph_length and not _is_marker(item):
                    bucket.paragraphs.append(ParagraphText(field_name=meta.field_name, text=text))
            elif item.category is SemanticCategory.IMAGE:
                image = parse_image_item(item)
                if image is not None:
                    bucket.images.append(image)
            elif item.category is SemanticCategory.LINK:
                link = parse_link_item(item)
                if link is not None:
                    bucket.links.append(link)
        except Exception:
            logger.warning("Could not bucket item %s", item.id, exc_info=True)

    return list(buckets.values())


def calculate_content_metrics(
    text: str,
    headings: PageHeadings,
    links: Sequence[PageLink],
    images: Sequence[PageImage],
) -> ContentMetrics:
    clean = strip_tags(text).strip()
    words, sentences = tokenize(clean)
    paragraphs = [p for p in _PARAGRAPH_SPLIT_RE.split(clean) if p.strip()]

    return ContentMetrics(
        word_count=len(words),
        character_count=len(clean),
        paragraph_count=len(paragraphs),
        heading_count=len(headings.all),
        link_count=len(links),
        image_count=len(images),
        readability=calculate_readability(clean, words, sentences),
    )


def scan_page_content(
    page: PageContent,
    items: Sequence[SemanticTextItem],
    config: ScannerSettings | None = None,
) -> PageData:
    """Derive page facts from the page's semantic items.

    Args:
        page: The page the items were extracted from
        items: Semantic items in document order
        config: Scanner thresholds; defaults to ``settings.scanner``

    Returns:
        PageData for the scorer
    """
    config = config or settings.scanner

    metadata = _guarded("metadata", lambda: extract_metadata(page, items, config), PageMetadata)
    headings = _guarded("headings", lambda: extract_headings(items), PageHeadings)
    text = _guarded("text", lambda: extract_text_content(items, config), str)
    images = _guarded("images", lambda: extract_images(items), list)
    links = _guarded("links", lambda: extract_links(items), list)
    components = _guarded("components", lambda: extract_component_content(items, config), list)
    metrics = _guarded(
        "metrics",
        lambda: calculate_content_metrics(text, headings, links, images),
        ContentMetrics,
    )

    return PageData(
        metadata=metadata,
        headings=headings,
        text=text,
        images=images,
        links=links,
        word_count=count_words(text),
        components=components,
        metrics=metrics,
    )
