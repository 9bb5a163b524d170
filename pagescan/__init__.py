"""pagescan - SEO content scanner for headless CMS page trees."""
from pagescan.seo.pipeline import extract_items, load_page, scan_page

__version__ = "1.0.0"

__all__ = ["__version__", "extract_items", "load_page", "scan_page"]
