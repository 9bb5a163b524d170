"""SEO scoring: PageData in, ScanResult out."""
from __future__ import annotations

import logging
from dataclasses import fields

from pagescan.audit import AuditRegistry, AuditResult, audit_registry
from pagescan.config.settings import settings
from pagescan.models.seo import PageData, ScanResult, ScoreBreakdown, SEOIssues

logger = logging.getLogger(__name__)

BREAKDOWN_KEYS = tuple(f.name for f in fields(ScoreBreakdown))
_ISSUE_KEYS = frozenset(f.name for f in fields(SEOIssues))

_GRADES = (
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
)


def get_seo_grade(score: float) -> str:
    """Letter grade for a 0-100 score."""
    for threshold, grade in _GRADES:
        if score >= threshold:
            return grade
    return "F"


def get_score_label(score: float) -> str:
    """Coarse good/moderate/poor band used for display colouring."""
    if score >= 80:
        return "good"
    if score >= 60:
        return "moderate"
    return "poor"


def _merge_issues(results: list[AuditResult]) -> SEOIssues:
    merged: dict = {}
    for result in results:
        for key, value in result.issues.items():
            if key not in _ISSUE_KEYS:
                logger.debug("Audit %s reported unknown issue %r", result.audit_id, key)
                continue
            if isinstance(value, list):
                merged.setdefault(key, []).extend(value)
            else:
                merged[key] = merged.get(key, False) or bool(value)
    return SEOIssues(**merged)


def compute_seo_score(page_data: PageData, registry: AuditRegistry | None = None) -> ScanResult:
    """Score a page and collect its issues.

    Args:
        page_data: Output of the content scanner
        registry: Audits to run; defaults to the four built-in SEO audits

    Returns:
        ScanResult with the total score, breakdown, issue flags and
        broken-link diagnostics
    """
    registry = registry or audit_registry
    results = registry.run_all(page_data)

    cap = settings.scoring.max_sub_score
    sub_scores = dict.fromkeys(BREAKDOWN_KEYS, 0)
    for result in results:
        if result.category not in sub_scores:
            logger.debug("Audit %s has no breakdown bucket %r", result.audit_id, result.category)
            continue
        sub_scores[result.category] += result.score
    breakdown = ScoreBreakdown(**{k: max(0, min(cap, v)) for k, v in sub_scores.items()})

    return ScanResult(
        seo_score=breakdown.total,
        breakdown=breakdown,
        issues=_merge_issues(results),
        page_data=page_data,
        broken_links_details=[info for result in results for info in result.broken_links],
        audits=results,
    )
