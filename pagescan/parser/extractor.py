"""Flatten a component tree into classified text items."""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from pagescan.models.content import (
    ComponentMetadata,
    ComponentNode,
    FieldInfo,
    PageContent,
    SemanticCategory,
    SemanticTextItem,
)
from pagescan.parser.text_utils import extract_plain_text


def create_semantic_text_item(
    field: FieldInfo,
    metadata: ComponentMetadata,
    path: Sequence[str],
) -> SemanticTextItem:
    plain = extract_plain_text(field.value)
    return SemanticTextItem(
        id=f"{metadata.component_id}-{field.name}",
        text=plain or field.value,
        category=field.category,
        metadata=metadata,
        path=tuple(path),
        link=field.link,
        image=field.image,
    )


def extract_semantic_items(page: PageContent) -> list[SemanticTextItem]:
    """Return one item per (component, field) in document order.

    A component's own fields come before those of its children; children
    keep their placeholder order. Paths start at the page name.
    """
    items: list[SemanticTextItem] = []
    # (component, parent path), popped in document order
    stack: list[tuple[ComponentNode, tuple[str, ...]]] = [
        (component, (page.name,)) for component in reversed(page.components)
    ]

    while stack:
        component, parent_path = stack.pop()
        path = (*parent_path, component.name)

        for field in component.fields:
            metadata = ComponentMetadata(
                component_name=component.component_name,
                component_id=component.id,
                field_name=field.name,
                datasource_item_id=component.datasource_id,
                rendering_placeholder=component.placeholder,
                params=component.params,
            )
            items.append(create_semantic_text_item(field, metadata, path))

        stack.extend((child, path) for child in reversed(component.children))

    return items


def filter_by_search(items: Iterable[SemanticTextItem], query: str | None) -> list[SemanticTextItem]:
    """Case-insensitive match on text, component name, field name or category."""
    items = list(items)
    if not query or not query.strip():
        return items

    needle = query.lower()
    return [
        item for item in items
        if needle in item.text.lower()
        or needle in item.metadata.component_name.lower()
        or needle in item.metadata.field_name.lower()
        or needle in item.category.value.lower()
    ]


def group_by_category(items: Iterable[SemanticTextItem]) -> dict[SemanticCategory, list[SemanticTextItem]]:
    grouped: dict[SemanticCategory, list[SemanticTextItem]] = {category: [] for category in SemanticCategory}
    for item in items:
        grouped[item.category].append(item)
    return grouped
