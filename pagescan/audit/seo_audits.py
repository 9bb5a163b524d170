"""SEO audit implementations, one per score breakdown bucket."""
from __future__ import annotations

from typing import Any

from pagescan.audit.base import AuditResult, BaseAudit
from pagescan.config.settings import ScoringSettings, settings
from pagescan.models.seo import BrokenLinkInfo, PageData, PageLink
from pagescan.numbers import round_half_up
from pagescan.parser.text_utils import count_words
from pagescan.scanner.content_scanner import PLACEHOLDER_HREFS, RELATIVE_PREFIXES


class _ScoredAudit(BaseAudit):
    """Audit whose thresholds come from ScoringSettings."""

    def __init__(self, config: ScoringSettings | None = None):
        self._config = config

    @property
    def config(self) -> ScoringSettings:
        return self._config or settings.scoring


class MetadataAudit(_ScoredAudit):
    """Title and meta description presence and length."""

    @property
    def audit_id(self) -> str:
        return "seo.metadata"

    @property
    def name(self) -> str:
        return "Title & Meta Description"

    @property
    def category(self) -> str:
        return "metadata"

    @property
    def description(self) -> str:
        return "Checks that the page has a title and description of sensible length"

    def _length_credit(self, text: str, limit: int, credit: int) -> float:
        if not text:
            return 0
        if len(text) <= limit:
            return credit
        return max(0, credit - (len(text) - limit) * self.config.overflow_penalty_per_char)

    def run(self, page_data: PageData, **context: Any) -> AuditResult:
        cfg = self.config
        title = (page_data.metadata.title or "").strip()
        description = (page_data.metadata.description or "").strip()

        score = self._length_credit(title, cfg.title_max_length, cfg.title_credit)
        score += self._length_credit(description, cfg.description_max_length, cfg.description_credit)
        if title and description:
            score += cfg.both_present_bonus

        issues = {
            "missing_meta_description": not description,
            "title_too_long": len(title) > cfg.title_max_length,
            "description_too_long": len(description) > cfg.description_max_length,
        }

        if not description:
            message = "Page has no meta description"
            recommendation = "Add a meta description that summarizes the page"
        elif issues["title_too_long"] or issues["description_too_long"]:
            message = "Title or description exceeds the recommended length"
            recommendation = (
                f"Keep titles under {cfg.title_max_length} and descriptions under "
                f"{cfg.description_max_length} characters"
            )
        else:
            message = "Title and description are present"
            recommendation = None

        return self._result(
            round_half_up(score),
            cfg.max_sub_score,
            message,
            issues=issues,
            details={"title_length": len(title), "description_length": len(description)},
            recommendation=recommendation,
        )


class ContentAudit(_ScoredAudit):
    """H1 presence, body length and readability."""

    @property
    def audit_id(self) -> str:
        return "seo.content"

    @property
    def name(self) -> str:
        return "Content Basics"

    @property
    def category(self) -> str:
        return "content"

    @property
    def description(self) -> str:
        return "Checks for an H1 and enough readable body text"

    def run(self, page_data: PageData, **context: Any) -> AuditResult:
        cfg = self.config
        has_h1 = bool((page_data.headings.h1 or "").strip())
        words = page_data.word_count or count_words(page_data.text)
        readability = page_data.metrics.readability

        score = cfg.h1_credit if has_h1 else 0
        if words >= cfg.min_content_words:
            score += cfg.content_length_credit
        elif words > 0:
            score += round_half_up(words / cfg.min_content_words * cfg.content_length_credit)

        issues = {
            "missing_h1": not has_h1,
            "short_content": words < cfg.min_content_words,
            "low_readability": readability.score < cfg.min_readability_score,
        }

        if not has_h1:
            message = "Page has no H1 heading"
            recommendation = "Add a single descriptive H1 heading"
        elif issues["short_content"]:
            message = f"Body text has {words} words (recommended: {cfg.min_content_words}+)"
            recommendation = "Expand the body copy with useful detail"
        elif issues["low_readability"]:
            message = f"Readability score {readability.score} ({readability.grade})"
            recommendation = "Use shorter sentences and simpler words"
        else:
            message = f"H1 present and {words} words of body text"
            recommendation = None

        return self._result(
            score,
            cfg.max_sub_score,
            message,
            issues=issues,
            details={
                "word_count": words,
                "readability_score": readability.score,
                "readability_grade": readability.grade,
            },
            recommendation=recommendation,
        )


class AccessibilityAudit(_ScoredAudit):
    """Alt text coverage on images."""

    @property
    def audit_id(self) -> str:
        return "seo.accessibility"

    @property
    def name(self) -> str:
        return "Image Alt Text"

    @property
    def category(self) -> str:
        return "accessibility"

    @property
    def description(self) -> str:
        return "Checks that images carry descriptive alt text"

    def run(self, page_data: PageData, **context: Any) -> AuditResult:
        cfg = self.config
        images = page_data.images

        weak = [img.id for img in images if len((img.alt or "").strip()) < cfg.min_alt_length]
        issues = {"weak_alt_text": weak, "missing_images": not images}

        if not images:
            return self._result(
                cfg.max_sub_score,
                cfg.max_sub_score,
                "Page has no images",
                issues=issues,
                details={"image_count": 0},
                recommendation="Consider adding relevant images",
            )

        good = len(images) - len(weak)
        score = round_half_up(cfg.max_sub_score * good / len(images))

        return self._result(
            score,
            cfg.max_sub_score,
            f"{good}/{len(images)} images have descriptive alt text",
            issues=issues,
            details={"image_count": len(images), "weak_alt_count": len(weak)},
            recommendation=f"Write alt text of at least {cfg.min_alt_length} characters" if weak else None,
        )


def _is_placeholder(link: PageLink) -> bool:
    return link.is_placeholder or link.href in PLACEHOLDER_HREFS


def _diagnose(link: PageLink) -> BrokenLinkInfo | None:
    href = link.href or ""
    if not href.strip():
        reason = "empty"
        href = href or "empty"
    elif _is_placeholder(link):
        reason = "placeholder"
    elif link.is_broken:
        reason = "suspected-broken"
    else:
        return None
    return BrokenLinkInfo(
        href=href,
        reason=reason,
        text=link.text,
        component_id=link.component_id,
        component_name=link.component_name,
    )


class LinksAudit(_ScoredAudit):
    """Placeholder, broken and internal link checks."""

    @property
    def audit_id(self) -> str:
        return "seo.links"

    @property
    def name(self) -> str:
        return "Links"

    @property
    def category(self) -> str:
        return "links"

    @property
    def description(self) -> str:
        return "Checks for placeholder and broken links and for internal linking"

    def run(self, page_data: PageData, **context: Any) -> AuditResult:
        cfg = self.config
        links = page_data.links

        diagnostics = [d for d in map(_diagnose, links) if d is not None]
        placeholder = [d.href for d in diagnostics if d.reason == "placeholder"]
        broken = [d.href for d in diagnostics if d.reason != "placeholder"]

        healthy = [
            link for link in links
            if (link.href or "").strip() and not _is_placeholder(link) and not link.is_broken
        ]
        has_internal = any(link.href.startswith(RELATIVE_PREFIXES) for link in healthy)

        issues = {
            "placeholder_links": placeholder,
            "broken_links": broken,
            "too_many_links": len(links) > cfg.max_links,
            "no_internal_links": bool(links) and not has_internal,
        }

        if not links:
            score = cfg.max_sub_score
            message = "Page has no links"
        else:
            score = round_half_up(cfg.max_sub_score * len(healthy) / len(links))
            message = f"{len(healthy)}/{len(links)} links look valid"

        if diagnostics:
            recommendation = "Replace placeholder links and fix broken URLs"
        elif issues["no_internal_links"]:
            recommendation = "Link to related pages on the same site"
        else:
            recommendation = None

        return self._result(
            score,
            cfg.max_sub_score,
            message,
            issues=issues,
            broken_links=diagnostics,
            details={"link_count": len(links), "valid_count": len(healthy)},
            recommendation=recommendation,
        )


def default_audits(config: ScoringSettings | None = None) -> list[BaseAudit]:
    return [
        MetadataAudit(config),
        ContentAudit(config),
        AccessibilityAudit(config),
        LinksAudit(config),
    ]
