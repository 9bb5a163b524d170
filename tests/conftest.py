"""Shared test fixtures and configuration."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from pagescan.models.content import (
    ComponentMetadata,
    ImageData,
    LinkData,
    PageContent,
    SemanticCategory,
    SemanticTextItem,
)

PAGES_DIR = Path(__file__).parent / "fixtures" / "pages"


def load_fixture(name: str) -> dict:
    """Load a JSON page fixture by file name."""
    return json.loads((PAGES_DIR / name).read_text(encoding="utf-8"))


def make_item(
    text: str,
    category: SemanticCategory,
    field_name: str = "Field",
    *,
    component_id: str = "comp-1",
    component_name: str = "Block",
    link: LinkData | None = None,
    image: ImageData | None = None,
) -> SemanticTextItem:
    """Build a SemanticTextItem without going through the tree parser."""
    return SemanticTextItem(
        id=f"{component_id}-{field_name}",
        text=text,
        category=category,
        metadata=ComponentMetadata(
            component_name=component_name,
            component_id=component_id,
            field_name=field_name,
        ),
        path=("Page", component_name),
        link=link,
        image=image,
    )


def words(count: int) -> str:
    """A body of exactly ``count`` words split into short sentences."""
    return " ".join("word." if (i + 1) % 10 == 0 else "word" for i in range(count))


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def about_context() -> dict:
    """Component-array page with a hero, a nested CTA and a rich text block."""
    return load_fixture("about_components.json")


@pytest.fixture
def home_context() -> dict:
    """Placeholder-layout page with placeholder and broken links."""
    return load_fixture("home_placeholders.json")


@pytest.fixture
def landing_context() -> dict:
    """Renderings-layout page whose content lives in a datasource."""
    return load_fixture("landing_renderings.json")


@pytest.fixture
def landing_datasources() -> dict:
    return load_fixture("landing_datasources.json")


@pytest.fixture
def news_response() -> dict:
    """Experience Edge item response without a rendered route."""
    return load_fixture("news_edge.json")


@pytest.fixture
def empty_page() -> PageContent:
    return PageContent(item_id="{0}", name="Empty", language="en", path="/empty")


@pytest.fixture
def nested_context() -> dict:
    """Three levels of nesting through placeholders and children arrays."""
    return {
        "pageInfo": {"id": "{N}", "name": "nested"},
        "components": [
            {
                "uid": "outer",
                "componentName": "Container",
                "fields": {"Heading": "Outer heading"},
                "placeholders": {
                    "column-left": [
                        {
                            "uid": "middle",
                            "componentName": "Column",
                            "fields": {"Label": "Middle label"},
                            "children": [
                                {
                                    "uid": "inner",
                                    "componentName": "Teaser",
                                    "displayName": "Teaser Card",
                                    "fields": {"Text": "Innermost paragraph text for the teaser."},
                                }
                            ],
                        }
                    ],
                    "column-right": [
                        {"uid": "right", "componentName": "Image", "fields": {}},
                    ],
                },
            },
            {"uid": "after", "componentName": "Footer", "fields": {"Copy": "Footer copy"}},
        ],
    }


@pytest.fixture
def item_factory():
    """Factory for SemanticTextItems; see ``make_item``."""
    return make_item


@pytest.fixture
def word_body():
    """Factory for a body of exactly N words; see ``words``."""
    return words


@pytest.fixture
def page_fixture():
    """Loader for JSON page fixtures by file name."""
    return load_fixture
