"""Scoring and the end-to-end scan pipeline."""
from pagescan.seo.pipeline import extract_items, load_page, scan_page
from pagescan.seo.scorer import compute_seo_score, get_score_label, get_seo_grade

__all__ = [
    "compute_seo_score",
    "extract_items",
    "get_score_label",
    "get_seo_grade",
    "load_page",
    "scan_page",
]
