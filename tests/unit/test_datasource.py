"""Unit tests for datasource collection and enrichment."""
from __future__ import annotations

from pagescan.models.content import SemanticCategory as C
from pagescan.parser.datasource import collect_datasource_ids, enrich_with_datasources
from pagescan.parser.tree_parser import build_page_content


class TestCollectDatasourceIds:
    def test_renderings_page(self, landing_context):
        page = build_page_content(landing_context)
        assert collect_datasource_ids(page) == ["local:/Data/Hero Banner"]

    def test_component_page(self, about_context):
        page = build_page_content(about_context)
        assert collect_datasource_ids(page) == ["local:/Data/Hero 1"]

    def test_non_local_and_duplicates_ignored(self):
        context = {"pageInfo": {"id": "1"}, "components": [
            {"uid": "a", "componentName": "A", "dataSource": "local:/Data/X"},
            {"uid": "b", "componentName": "B", "dataSource": "local:/Data/X"},
            {"uid": "c", "componentName": "C", "dataSource": "{GUID-1234}"},
        ]}
        assert collect_datasource_ids(build_page_content(context)) == ["local:/Data/X"]


class TestEnrichWithDatasources:
    """Tests for merging fetched datasource items into the tree."""

    def test_fields_replaced(self, landing_context, landing_datasources):
        page = enrich_with_datasources(build_page_content(landing_context), landing_datasources)
        hero = page.components[0]
        assert [f.name for f in hero.fields] == ["Title", "Description", "Image"]
        assert hero.fields[0].category is C.HEADING
        assert hero.fields[1].value == "[Empty]"
        assert hero.fields[2].image.alt == "Rocket launch"

    def test_children_appended(self, landing_context, landing_datasources):
        page = enrich_with_datasources(build_page_content(landing_context), landing_datasources)
        (slide,) = page.components[0].children
        assert slide.id == "r-hero-child-0"
        assert slide.type == "DatasourceChild"
        assert slide.name == "Slide 1"
        assert slide.path == ["landing", "Hero Banner", "Slide 1"]
        assert slide.fields[0].category is C.PARAGRAPH

    def test_input_page_untouched(self, landing_context, landing_datasources):
        page = build_page_content(landing_context)
        enrich_with_datasources(page, landing_datasources)
        assert [f.name for f in page.components[0].fields] == ["DataSource"]
        assert page.components[0].children == []

    def test_unknown_datasource_left_alone(self, landing_context):
        page = build_page_content(landing_context)
        enriched = enrich_with_datasources(page, {"local:/Data/Other": {"fields": []}})
        assert enriched.components[0].fields == page.components[0].fields

    def test_no_datasources_returns_same_page(self, landing_context):
        page = build_page_content(landing_context)
        assert enrich_with_datasources(page, {}) is page

    def test_malformed_child_skipped(self, landing_context):
        page = enrich_with_datasources(build_page_content(landing_context), {
            "local:/Data/Hero Banner": {"fields": [], "children": ["bad", {"fields": {"Text": "Second child copy"}}]},
        })
        (child,) = page.components[0].children
        assert child.id == "r-hero-child-1"
        assert child.name == "Item 2"
