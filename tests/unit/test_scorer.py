"""Unit tests for SEO scoring and issue detection."""
from __future__ import annotations

import pytest

from pagescan.audit import AuditRegistry, MetadataAudit
from pagescan.models.content import PageContent
from pagescan.models.content import SemanticCategory as C
from pagescan.models.seo import (
    PageData,
    PageHeadings,
    PageImage,
    PageLink,
    PageMetadata,
)
from pagescan.scanner.content_scanner import (
    detect_broken_link,
    is_placeholder_href,
    scan_page_content,
)
from pagescan.seo.scorer import compute_seo_score, get_score_label, get_seo_grade

_PAGE = PageContent(item_id="1", name="p", language="en", path="/")


def _links(*hrefs: str) -> list[PageLink]:
    return [
        PageLink(href=h, is_placeholder=is_placeholder_href(h), is_broken=detect_broken_link(h))
        for h in hrefs
    ]


class TestMetadataScore:
    """Tests for the metadata sub-score."""

    def test_title_only(self):
        """Title "Welcome" and no description: title credit, no bonus."""
        result = compute_seo_score(PageData(metadata=PageMetadata(title="Welcome", description="")))
        assert result.breakdown.metadata == 10
        assert result.issues.missing_meta_description

    def test_both_present(self):
        result = compute_seo_score(PageData(metadata=PageMetadata(title="Welcome", description="A page.")))
        assert result.breakdown.metadata == 25

    def test_long_title_penalty(self):
        result = compute_seo_score(PageData(metadata=PageMetadata(title="t" * 70)))
        assert result.breakdown.metadata == 9
        assert result.issues.title_too_long

    def test_long_description_penalty(self):
        result = compute_seo_score(PageData(metadata=PageMetadata(title="Ok", description="d" * 175)))
        assert result.breakdown.metadata == 24
        assert result.issues.description_too_long

    def test_penalty_floors_at_zero(self):
        result = compute_seo_score(PageData(metadata=PageMetadata(title="t" * 500)))
        assert result.breakdown.metadata == 0

    def test_whitespace_only_is_missing(self):
        result = compute_seo_score(PageData(metadata=PageMetadata(title="  ", description="  ")))
        assert result.breakdown.metadata == 0


class TestContentScore:
    def test_exactly_250_words_gets_full_credit(self, word_body):
        text = word_body(250)
        data = PageData(headings=PageHeadings(h1="Main"), text=text, word_count=250)
        result = compute_seo_score(data)
        assert result.breakdown.content == 25
        assert not result.issues.short_content

    def test_partial_credit(self, word_body):
        data = PageData(text=word_body(125), word_count=125)
        result = compute_seo_score(data)
        assert result.breakdown.content == 5
        assert result.issues.missing_h1
        assert result.issues.short_content

    def test_word_count_derived_from_text(self, word_body):
        result = compute_seo_score(PageData(text=word_body(250)))
        assert result.breakdown.content == 10

    def test_low_readability_flag(self):
        result = compute_seo_score(PageData())
        assert result.issues.low_readability


class TestAccessibilityScore:
    def test_no_images(self):
        result = compute_seo_score(PageData())
        assert result.breakdown.accessibility == 25
        assert result.issues.missing_images

    def test_single_image_without_alt(self, item_factory):
        items = [item_factory("Alt:  | Src: photo.jpg", C.IMAGE, "Image")]
        page = scan_page_content(_PAGE, items)
        result = compute_seo_score(page)
        assert result.breakdown.accessibility == 0
        assert result.issues.weak_alt_text == ["comp-1-Image"]

    def test_proportional(self):
        images = [
            PageImage(id="a", src="a.jpg", alt="Good alt"),
            PageImage(id="b", src="b.jpg", alt="Good alt too"),
            PageImage(id="c", src="c.jpg", alt="tiny"),
        ]
        result = compute_seo_score(PageData(images=images))
        assert result.breakdown.accessibility == 17
        assert result.issues.weak_alt_text == ["c"]


class TestLinksScore:
    """Tests for link scoring and diagnostics."""

    def test_no_links(self):
        result = compute_seo_score(PageData())
        assert result.breakdown.links == 25
        assert not result.issues.no_internal_links

    def test_placeholder_links_flagged(self, item_factory):
        items = [
            item_factory("Home [#]", C.LINK, "Link1"),
            item_factory("Other [http://#]", C.LINK, "Link2"),
        ]
        page = scan_page_content(_PAGE, items)
        assert all(link.is_placeholder for link in page.links)

        result = compute_seo_score(page)
        assert result.issues.placeholder_links == ["#", "http://#"]
        assert result.issues.broken_links == []
        assert result.breakdown.links == 0
        assert [d.reason for d in result.broken_links_details] == ["placeholder", "placeholder"]

    def test_half_valid_rounds_up(self):
        result = compute_seo_score(PageData(links=_links("/ok", "#")))
        assert result.breakdown.links == 13

    def test_broken_diagnostics(self):
        links = _links("/fine", "bad link", "javascript:void(0)")
        links[1].text = "Bad"
        links[1].component_name = "Footer"
        result = compute_seo_score(PageData(links=links))
        assert result.issues.broken_links == ["bad link", "javascript:void(0)"]
        info = result.broken_links_details[0]
        assert (info.href, info.reason, info.text, info.component_name) == (
            "bad link", "suspected-broken", "Bad", "Footer",
        )

    def test_empty_href_diagnostic(self):
        result = compute_seo_score(PageData(links=[PageLink(href="", is_broken=True)]))
        assert result.issues.broken_links == ["empty"]
        assert result.broken_links_details[0].reason == "empty"

    def test_no_internal_links(self):
        result = compute_seo_score(PageData(links=_links("https://example.com")))
        assert result.issues.no_internal_links

    def test_internal_link_present(self):
        result = compute_seo_score(PageData(links=_links("https://example.com", "../up")))
        assert not result.issues.no_internal_links

    def test_too_many_links(self):
        result = compute_seo_score(PageData(links=_links(*[f"/p{i}" for i in range(101)])))
        assert result.issues.too_many_links
        assert result.breakdown.links == 25


class TestTotals:
    def test_total_is_sum_and_bounded(self, word_body):
        data = PageData(
            metadata=PageMetadata(title="Welcome", description="A page."),
            headings=PageHeadings(h1="Main"),
            text=word_body(300),
            word_count=300,
        )
        result = compute_seo_score(data)
        b = result.breakdown
        assert result.seo_score == b.metadata + b.content + b.accessibility + b.links
        assert result.seo_score == 100
        for value in (b.metadata, b.content, b.accessibility, b.links):
            assert 0 <= value <= 25

    def test_empty_page(self):
        result = compute_seo_score(PageData())
        assert result.seo_score == 50
        assert 0 <= result.seo_score <= 100

    def test_issues_dict_only_has_present_issues(self):
        result = compute_seo_score(PageData(metadata=PageMetadata(title="Welcome")))
        issues = result.to_dict()["issues"]
        assert issues["missing_meta_description"] is True
        assert "title_too_long" not in issues
        assert "weak_alt_text" not in issues

    def test_audit_results_carried(self):
        result = compute_seo_score(PageData(metadata=PageMetadata(title="Welcome")))
        assert [a.audit_id for a in result.audits] == [
            "seo.metadata", "seo.content", "seo.accessibility", "seo.links",
        ]
        metadata = result.audits[0]
        assert metadata.score == result.breakdown.metadata
        assert metadata.recommendation == "Add a meta description that summarizes the page"
        assert result.to_dict()["audits"][0]["severity"] == "critical"

    def test_custom_registry(self):
        registry = AuditRegistry()
        registry.register(MetadataAudit())
        result = compute_seo_score(PageData(metadata=PageMetadata(title="Welcome")), registry)
        assert result.breakdown.metadata == 10
        assert result.breakdown.links == 0
        assert result.seo_score == 10


class TestGrades:
    @pytest.mark.parametrize("score, grade", [
        (100, "A+"), (90, "A+"), (89, "A"), (80, "A"), (79, "B"),
        (70, "B"), (60, "C"), (59, "D"), (50, "D"), (49, "F"), (0, "F"),
    ])
    def test_seo_grade(self, score, grade):
        assert get_seo_grade(score) == grade

    def test_score_label(self):
        assert get_score_label(85) == "good"
        assert get_score_label(60) == "moderate"
        assert get_score_label(10) == "poor"
