"""Unit tests for the content scanner."""
from __future__ import annotations

import pytest

from pagescan.models.content import ImageData, LinkData, PageContent
from pagescan.models.content import SemanticCategory as C
from pagescan.scanner import content_scanner
from pagescan.scanner.content_scanner import (
    detect_broken_link,
    extract_component_content,
    extract_headings,
    extract_images,
    extract_links,
    extract_metadata,
    extract_text_content,
    is_placeholder_href,
    scan_page_content,
)

PAGE = PageContent(item_id="1", name="Fallback Name", language="en", path="/")


class TestMetadata:
    """Tests for title and description selection."""

    def test_meta_title_preferred(self, item_factory):
        items = [
            item_factory("Page Heading", C.HEADING, "Title"),
            item_factory("Meta Title", C.LABEL, "MetaTitle"),
        ]
        assert extract_metadata(PAGE, items).title == "Meta Title"

    def test_first_title_candidate(self, item_factory):
        items = [
            item_factory("First", C.HEADING, "HeroTitle"),
            item_factory("Second", C.HEADING, "CardTitle"),
        ]
        assert extract_metadata(PAGE, items).title == "First"

    def test_title_falls_back_to_page_name(self, item_factory):
        items = [item_factory("Not a title", C.PARAGRAPH, "Body")]
        assert extract_metadata(PAGE, items).title == "Fallback Name"

    def test_title_must_be_heading_or_label(self, item_factory):
        items = [item_factory("/about", C.LINK, "TitleLink")]
        assert extract_metadata(PAGE, items).title == "Fallback Name"

    def test_fallback_description_truncated(self, item_factory):
        items = [item_factory("x" * 200, C.PARAGRAPH, "Description")]
        assert len(extract_metadata(PAGE, items).description) == 165

    def test_meta_description_verbatim(self, item_factory):
        items = [
            item_factory("Summary text", C.PARAGRAPH, "Summary"),
            item_factory("y" * 200, C.PARAGRAPH, "MetaDescription"),
        ]
        assert extract_metadata(PAGE, items).description == "y" * 200

    def test_empty_marker_ignored(self, item_factory):
        items = [item_factory("[Empty]", C.PARAGRAPH, "Description")]
        assert extract_metadata(PAGE, items).description is None


class TestHeadings:
    """Tests for heading level assignment."""

    def test_hints(self, item_factory):
        items = [
            item_factory("Sub", C.HEADING, "H2Heading"),
            item_factory("Main", C.HEADING, "Title"),
            item_factory("Minor", C.HEADING, "h3"),
        ]
        headings = extract_headings(items)
        assert headings.h1 == "Main"
        assert headings.h2 == ["Sub"]
        assert headings.h3 == ["Minor"]
        assert headings.all == ["Sub", "Main", "Minor"]

    def test_first_unhinted_becomes_h1(self, item_factory):
        items = [
            item_factory("Promo", C.HEADING, "PromoTitle"),
            item_factory("Another", C.HEADING, "Tagline"),
        ]
        headings = extract_headings(items)
        assert headings.h1 == "Promo"
        assert headings.h2 == ["Another"]

    def test_second_h1_only_in_all(self, item_factory):
        items = [
            item_factory("One", C.HEADING, "Heading"),
            item_factory("Two", C.HEADING, "Heading"),
        ]
        headings = extract_headings(items)
        assert headings.h1 == "One"
        assert headings.h2 == []
        assert headings.all == ["One", "Two"]

    def test_non_heading_items_ignored(self, item_factory):
        headings = extract_headings([item_factory("Title text", C.LABEL, "Title")])
        assert headings.h1 is None
        assert headings.all == []


class TestBodyText:
    def test_paragraph_and_rich_text(self, item_factory):
        items = [
            item_factory("First paragraph here.", C.PARAGRAPH, "Text"),
            item_factory("Second rich text here.", C.RICH_TEXT, "Body"),
            item_factory("Heading is not body", C.HEADING, "Title"),
        ]
        assert extract_text_content(items) == "First paragraph here. Second rich text here."

    def test_short_candidates_dropped(self, item_factory):
        items = [
            item_factory("0123456789", C.PARAGRAPH, "Text"),
            item_factory("01234567890", C.PARAGRAPH, "Copy"),
        ]
        assert extract_text_content(items) == "01234567890"

    def test_long_other_items_included(self, item_factory):
        long_other = "o" * 51
        items = [
            item_factory(long_other, C.OTHER, "Data"),
            item_factory("o" * 50, C.OTHER, "More"),
        ]
        assert extract_text_content(items) == long_other

    def test_empty_marker_excluded(self, item_factory):
        assert extract_text_content([item_factory("[Empty]", C.PARAGRAPH, "Description")]) == ""


class TestImages:
    def test_compound_text_with_blank_alt(self, item_factory):
        (image,) = extract_images([item_factory("Alt:  | Src: photo.jpg", C.IMAGE, "Image")])
        assert image.alt == ""
        assert image.src == "photo.jpg"

    def test_structured_payload(self, item_factory):
        item = item_factory(
            "ignored", C.IMAGE, "Image", image=ImageData(alt="A | pipe", src="/p.jpg"),
        )
        (image,) = extract_images([item])
        assert image.alt == "A | pipe"
        assert image.component_id == "comp-1"

    def test_no_src_discarded(self, item_factory):
        assert extract_images([item_factory("[Image field - no src]", C.IMAGE, "Image")]) == []
        assert extract_images([item_factory("Alt: Only alt", C.IMAGE, "Image")]) == []


class TestLinks:
    def test_compound_text(self, item_factory):
        (link,) = extract_links([item_factory("Read more [/news]", C.LINK, "Link")])
        assert link.text == "Read more"
        assert link.href == "/news"
        assert not link.is_placeholder
        assert not link.is_broken

    def test_compound_text_with_title(self, item_factory):
        (link,) = extract_links([item_factory("Docs (Reference) [https://example.com]", C.LINK, "Link")])
        assert link.text == "Docs"
        assert link.href == "https://example.com"

    def test_structured_payload(self, item_factory):
        item = item_factory("x", C.LINK, "Link", link=LinkData(text="A [b]", url="/a"))
        (link,) = extract_links([item])
        assert link.text == "A [b]"
        assert link.href == "/a"

    def test_no_href_discarded(self, item_factory):
        assert extract_links([item_factory("Just text", C.LINK, "Link")]) == []

    @pytest.mark.parametrize("href", ["#", "http://#", "http://#section"])
    def test_placeholders(self, item_factory, href):
        (link,) = extract_links([item_factory(f"Go [{href}]", C.LINK, "Link")])
        assert link.is_placeholder
        assert is_placeholder_href(href)


class TestBrokenLinkDetection:
    """Heuristic is biased toward "not broken"."""

    @pytest.mark.parametrize("href", [
        "/about",
        "./sibling",
        "../parent",
        "https://example.com/page?q=1",
        "mailto:someone@example.com",
        "tel:+15551234",
        "about-us",
        "products/shoes",
    ])
    def test_valid(self, href):
        assert detect_broken_link(href) is False

    @pytest.mark.parametrize("href", [
        "",
        "   ",
        "#",
        "http://#",
        "javascript:void(0)",
        "javascript:;",
        "about us",
        "http://exa mple.com",
    ])
    def test_broken(self, href):
        assert detect_broken_link(href) is True


class TestComponentBuckets:
    def test_grouped_by_component(self, item_factory):
        items = [
            item_factory("Hero heading", C.HEADING, "Title", component_id="hero", component_name="Hero"),
            item_factory("Hero body copy text", C.PARAGRAPH, "Text", component_id="hero", component_name="Hero"),
            item_factory("More [/more]", C.LINK, "Link", component_id="cta", component_name="Cta"),
        ]
        hero, cta = extract_component_content(items)
        assert hero.component_id == "hero"
        assert hero.headings.h1 == "Hero heading"
        assert [p.text for p in hero.paragraphs] == ["Hero body copy text"]
        assert [link.href for link in cta.links] == ["/more"]

    def test_unhinted_heading_only_in_all(self, item_factory):
        (bucket,) = extract_component_content([item_factory("Promo", C.HEADING, "PromoTitle")])
        assert bucket.headings.h1 is None
        assert bucket.headings.all == ["Promo"]


class TestScanPageContent:
    def test_metrics(self, item_factory):
        items = [
            item_factory("Main", C.HEADING, "Title"),
            item_factory("The cat sat on the mat. It was happy.", C.PARAGRAPH, "Text"),
            item_factory("Home [/]", C.LINK, "Link"),
            item_factory("Alt: Cat photo | Src: cat.jpg", C.IMAGE, "Image"),
        ]
        data = scan_page_content(PAGE, items)
        assert data.word_count == 9
        assert data.metrics.word_count == 9
        assert data.metrics.heading_count == 1
        assert data.metrics.link_count == 1
        assert data.metrics.image_count == 1
        assert data.metrics.paragraph_count == 1
        assert data.metrics.readability.sentences == 2

    def test_failing_step_does_not_abort(self, item_factory, monkeypatch, caplog):
        def boom(items):
            raise RuntimeError("boom")

        monkeypatch.setattr(content_scanner, "extract_images", boom)
        items = [
            item_factory("Main", C.HEADING, "Title"),
            item_factory("Alt: Cat photo | Src: cat.jpg", C.IMAGE, "Image"),
        ]
        data = scan_page_content(PAGE, items)
        assert data.images == []
        assert data.headings.h1 == "Main"
        assert "images" in caplog.text

    def test_empty_items(self):
        data = scan_page_content(PAGE, [])
        assert data.metadata.title == "Fallback Name"
        assert data.text == ""
        assert data.metrics.readability.grade == "N/A"
