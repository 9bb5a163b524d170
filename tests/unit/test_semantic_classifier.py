"""Unit tests for semantic field classification."""
from __future__ import annotations

import re

import pytest

from pagescan.classifier import (
    DEFAULT_RULES,
    ClassifierRules,
    classify_content,
    classify_field,
    classify_field_name,
    map_field_type_to_category,
)
from pagescan.models.content import SemanticCategory as C


class TestClassifyFieldName:
    """Tests for name-only classification."""

    @pytest.mark.parametrize("name, expected", [
        ("Title", C.HEADING),
        ("heading", C.HEADING),
        ("H2", C.HEADING),
        ("HeroTitle", C.HEADING),
        ("Description", C.PARAGRAPH),
        ("PromoText", C.PARAGRAPH),
        ("RichText", C.RICH_TEXT),
        ("wysiwyg", C.RICH_TEXT),
        ("Caption", C.LABEL),
        ("AuthorName", C.LABEL),
        ("Link", C.LINK),
        ("Link3", C.LINK),
        ("FooterUrl", C.LINK),
        ("Button2", C.BUTTON),
        ("SubmitButton", C.BUTTON),
        ("Thumbnail", C.IMAGE),
        ("HeroImage", C.IMAGE),
        ("Menu", C.LIST),
        ("RelatedItems", C.LIST),
    ])
    def test_known_names(self, name, expected):
        assert classify_field_name(name) is expected

    def test_unknown_name_is_other(self):
        """Names with no matching pattern fall through to Other."""
        assert classify_field_name("CustomData") is C.OTHER

    def test_empty_name_is_other(self):
        assert classify_field_name("") is C.OTHER

    def test_whole_name_match_beats_suffix(self):
        """RichText ends in 'text' but is still RichText, not Paragraph."""
        assert classify_field_name("RichText") is C.RICH_TEXT


class TestClassifyContent:
    """Tests for value-shape classification."""

    @pytest.mark.parametrize("value, expected", [
        ("<h2>Our story</h2>", C.HEADING),
        ("<p>Hello <b>world</b></p>", C.RICH_TEXT),
        ("Fish &amp; chips", C.RICH_TEXT),
        ("https://example.com/page", C.LINK),
        ("/products/shoes", C.LINK),
        ("Read the docs [https://example.com]", C.LINK),
        ("Learn more", C.BUTTON),
        ("Shop now [/sale]", C.BUTTON),
        ("banner.webp", C.IMAGE),
        ("photo.jpg?w=300", C.IMAGE),
    ])
    def test_patterns(self, value, expected):
        assert classify_content(value) is expected

    def test_no_match_returns_none(self):
        assert classify_content("Just some words") is None

    def test_blank_returns_none(self):
        assert classify_content("   ") is None
        assert classify_content(None) is None


class TestClassifyField:
    """Tests for the tiered classifier."""

    def test_template_wins(self):
        assert classify_field("Anything", "value", template_name="Heading") is C.HEADING

    def test_unknown_template_is_ignored(self):
        assert classify_field("Title", "Welcome", template_name="Article") is C.HEADING

    def test_category_name_as_type(self):
        assert classify_field("Whatever", "x", field_type="Link") is C.LINK

    def test_cms_type_table(self):
        assert classify_field("Whatever", "x", field_type="Rich Text") is C.RICH_TEXT
        assert classify_field("Whatever", "x", field_type="Droplink") is C.LABEL

    def test_unmapped_type_falls_through_to_name(self):
        assert classify_field("Title", "Welcome", field_type="unknown") is C.HEADING

    def test_markup_overrides_plain_name_guess(self):
        """A Paragraph-named field holding markup is RichText."""
        assert classify_field("Body", "<p>Hello</p>") is C.RICH_TEXT

    def test_link_name_is_not_overridden_by_markup(self):
        assert classify_field("CtaLink", "<b>Go</b>") is C.LINK

    def test_content_used_when_name_unknown(self):
        assert classify_field("Target", "https://example.com") is C.LINK

    def test_length_fallback(self):
        assert classify_field("Blurb", "a" * 51) is C.PARAGRAPH
        assert classify_field("Blurb", "a" * 50) is C.LABEL

    def test_non_string_value_is_coerced(self):
        assert classify_field("Count", 42) is C.LABEL

    @pytest.mark.parametrize("name, value, field_type, template", [
        ("", "", None, None),
        ("x", None, None, None),
        ("__weird", "<<<>>>", "???", ""),
        ("Title", "\x00\x01", "Image", None),
        ("🙂", "[", None, "Unknown"),
        ("Link", "]" * 500, "", None),
    ])
    def test_total_and_deterministic(self, name, value, field_type, template):
        """Every input yields one of the nine categories, the same one each time."""
        first = classify_field(name, value, field_type, template)
        second = classify_field(name, value, field_type, template)
        assert first in set(C)
        assert first is second


class TestInjectableRules:
    """Alternate rule sets are plain data."""

    def test_custom_name_rule(self):
        rules = ClassifierRules(name_exact=((C.LIST, re.compile(r"^tags$", re.IGNORECASE)),))
        assert classify_field_name("Tags", rules) is C.LIST
        assert classify_field_name("Tags") is C.OTHER

    def test_custom_type_table(self):
        rules = ClassifierRules(field_types={"Number": C.LABEL})
        assert map_field_type_to_category("Number", rules) is C.LABEL
        assert map_field_type_to_category("Number") is C.OTHER

    def test_default_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_RULES.templates["Heading"] = C.OTHER  # type: ignore[index]
