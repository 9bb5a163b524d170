"""Rule tables for semantic field classification.

The tables are plain immutable data. ``DEFAULT_RULES`` is what the pipeline
uses; tests and callers can build their own ``ClassifierRules`` instead.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pagescan.models.content import SemanticCategory as C

Rule = tuple[C, re.Pattern[str]]


def _rules(*entries: tuple[C, str]) -> tuple[Rule, ...]:
    return tuple((category, re.compile(pattern, re.IGNORECASE)) for category, pattern in entries)


@dataclass(frozen=True)
class ClassifierRules:
    """Immutable classification tables.

    Attributes:
        templates: Owning-template name -> category
        field_types: Upstream field type name -> category
        name_exact: Whole-name patterns, checked before any suffix pattern
        name_suffix: Suffix patterns, checked when no whole-name pattern matched
        content_button: Call-to-action phrases
        content_patterns: Ordered content patterns checked after the CTA phrases
        paragraph_min_length: Values longer than this fall back to Paragraph
    """
    templates: Mapping[str, C] = field(default_factory=dict)
    field_types: Mapping[str, C] = field(default_factory=dict)
    name_exact: tuple[Rule, ...] = ()
    name_suffix: tuple[Rule, ...] = ()
    content_button: tuple[Rule, ...] = ()
    content_patterns: tuple[Rule, ...] = ()
    paragraph_min_length: int = 50


DEFAULT_RULES = ClassifierRules(
    templates=MappingProxyType({
        "Heading": C.HEADING,
        "Text": C.PARAGRAPH,
        "Rich Text": C.RICH_TEXT,
        "Link": C.LINK,
        "Image": C.IMAGE,
        "Button": C.BUTTON,
        "List": C.LIST,
    }),
    field_types=MappingProxyType({
        "Single-Line Text": C.LABEL,
        "Multi-Line Text": C.PARAGRAPH,
        "Rich Text": C.RICH_TEXT,
        "General Link": C.LINK,
        "Image": C.IMAGE,
        "Droplink": C.LABEL,
        "Droptree": C.LABEL,
        "Checklist": C.LIST,
        "Multilist": C.LIST,
        "Treelist": C.LIST,
    }),
    name_exact=_rules(
        (C.HEADING, r"^(title|heading|header|h[1-6]|pageTitle|sectionTitle)$"),
        (C.PARAGRAPH, r"^(text|content|body|description|paragraph|copy|summary|intro)$"),
        (C.RICH_TEXT, r"^(richText|html|markup|formattedText|wysiwyg|editor)$"),
        (C.LABEL, r"^(label|name|caption|tag|badge|category|type)$"),
        (C.LINK, r"^(link|url|href|cta|action|navigation|anchor)$"),
        (C.LINK, r"^link\d*$"),
        (C.BUTTON, r"^(button|cta|action|submit|call.*action)$"),
        (C.BUTTON, r"^button\d*$"),
        (C.IMAGE, r"^(image|img|picture|photo|thumbnail|banner|icon|media)$"),
        (C.LIST, r"^(list|items|collection|array|menu|options)$"),
    ),
    name_suffix=_rules(
        (C.HEADING, r"title$"),
        (C.HEADING, r"heading$"),
        (C.PARAGRAPH, r"text$"),
        (C.PARAGRAPH, r"description$"),
        (C.PARAGRAPH, r"content$"),
        (C.RICH_TEXT, r"richtext$"),
        (C.LABEL, r"label$"),
        (C.LABEL, r"name$"),
        (C.LINK, r"link$"),
        (C.LINK, r"url$"),
        (C.BUTTON, r"button$"),
        (C.BUTTON, r"cta$"),
        (C.IMAGE, r"image$"),
        (C.IMAGE, r"img$"),
        (C.LIST, r"list$"),
        (C.LIST, r"items$"),
    ),
    content_button=_rules(
        (C.BUTTON,
         r"^(buy|learn more|read more|get started|sign up|subscribe|download|shop now|add to cart|checkout)"
         r"(\s+\[.*\])?$"),
    ),
    content_patterns=_rules(
        (C.HEADING, r"^<h[1-6][^>]*>.*</h[1-6]>$"),
        (C.RICH_TEXT, r"<[^>]+>"),
        (C.RICH_TEXT, r"(&nbsp;|&lt;|&gt;|&amp;)"),
        (C.LINK, r"^https?://"),
        (C.LINK, r"^/[a-z0-9\-/]+$"),
        (C.LINK, r"\[https?://[^\]]+\]"),
        (C.LINK, r"\[[^\]]+\]"),
        (C.IMAGE, r"\.(jpg|jpeg|png|gif|svg|webp|bmp)(\?.*)?$"),
    ),
)

# Field names that carry structure rather than content.
SYSTEM_FIELD_NAMES = frozenset({
    "__typename",
    "id",
    "uid",
    "key",
    "name",
    "displayname",
    "componentname",
    "datasource",
    "datasourceid",
    "params",
    "parameters",
    "placeholders",
    "children",
    "template",
    "path",
    "parent",
    "created",
    "updated",
    "revision",
    "version",
})

LINK_FIELD_NAME = re.compile(r"^link\d*$", re.IGNORECASE)
DESCRIPTION_FIELD_NAME = re.compile(r"description|desc|text|content|body", re.IGNORECASE)
