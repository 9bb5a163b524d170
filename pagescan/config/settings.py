"""Centralized configuration settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class TreeSettings:
    """Settings for component tree normalization."""
    max_depth: int = 32  # nested placeholder / children levels
    default_page_name: str = "Page"
    default_language: str = "en"
    empty_marker: str = "[Empty]"


@dataclass
class ScannerSettings:
    """Settings for page content scanning."""
    description_max_length: int = 165  # fallback descriptions are cut here
    min_paragraph_length: int = 10
    other_min_length: int = 50  # Other-category items count as body text above this


@dataclass
class ScoringSettings:
    """Settings for SEO scoring thresholds."""
    max_sub_score: int = 25

    title_max_length: int = 60
    title_credit: int = 10
    description_max_length: int = 165
    description_credit: int = 10
    both_present_bonus: int = 5
    overflow_penalty_per_char: float = 0.1

    h1_credit: int = 15
    min_content_words: int = 250
    content_length_credit: int = 10

    min_alt_length: int = 5
    min_readability_score: int = 60
    max_links: int = 100


@dataclass
class APISettings:
    """API-specific settings."""
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class Settings:
    """Main application settings container."""
    tree: TreeSettings = field(default_factory=TreeSettings)
    scanner: ScannerSettings = field(default_factory=ScannerSettings)
    scoring: ScoringSettings = field(default_factory=ScoringSettings)
    api: APISettings = field(default_factory=APISettings)

    # Application settings
    debug: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        """Load settings from environment variables."""
        self.debug = os.environ.get("PAGESCAN_DEBUG", "").lower() in ("true", "1", "yes")
        self.log_level = os.environ.get("PAGESCAN_LOG_LEVEL", self.log_level).upper()

        # Tree overrides
        if max_depth := os.environ.get("PAGESCAN_MAX_DEPTH"):
            self.tree.max_depth = int(max_depth)

        # API overrides
        if cors := os.environ.get("PAGESCAN_API_CORS_ORIGINS"):
            self.api.cors_origins = [o.strip() for o in cors.split(",")]


# Global settings instance
settings = Settings()
