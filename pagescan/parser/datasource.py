"""Merge already-fetched datasource items into a component tree.

Fetching is the caller's job; these helpers only say which datasources a
page references and fold the fetched records back into the tree.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from pagescan.classifier.rules import DEFAULT_RULES, ClassifierRules
from pagescan.models.content import ComponentNode, PageContent
from pagescan.parser.field_parser import normalize_fields
from pagescan.parser.tree_parser import iter_components

logger = logging.getLogger(__name__)

LOCAL_PREFIX = "local:"


def collect_datasource_ids(page: PageContent) -> list[str]:
    """Page-relative (``local:``) datasource references, first-seen order."""
    seen: dict[str, None] = {}
    for component in iter_components(page.components):
        ds = component.datasource_id
        if ds and ds.startswith(LOCAL_PREFIX):
            seen.setdefault(ds, None)
    return list(seen)


def _child_components(
    component: ComponentNode,
    children: list[Any],
    rules: ClassifierRules,
) -> list[ComponentNode]:
    nodes = []
    for index, child in enumerate(children):
        if not isinstance(child, Mapping):
            logger.warning("Skipping malformed datasource child %d of %s", index, component.id)
            continue
        name = str(child.get("name") or f"Item {index + 1}")
        nodes.append(ComponentNode(
            id=f"{component.id}-child-{index}",
            name=name,
            component_name=name,
            type="DatasourceChild",
            datasource_id=child.get("path"),
            fields=normalize_fields(child.get("fields"), rules=rules),
            children=[],
            path=[*component.path, name],
        ))
    return nodes


def _enrich(
    component: ComponentNode,
    datasources: Mapping[str, Mapping[str, Any]],
    rules: ClassifierRules,
) -> ComponentNode:
    fields = component.fields
    children = list(component.children)

    datasource = datasources.get(component.datasource_id) if component.datasource_id else None
    if isinstance(datasource, Mapping):
        try:
            fields = normalize_fields(datasource.get("fields"), rules=rules)
            extra = datasource.get("children")
            if isinstance(extra, list) and extra:
                children.extend(_child_components(component, extra, rules))
            logger.debug(
                "Enriched %s from %s with %d fields",
                component.name, datasource.get("path", component.datasource_id), len(fields),
            )
        except Exception:
            logger.warning("Failed to enrich %s from its datasource", component.id, exc_info=True)
            fields = component.fields
            children = list(component.children)

    return replace(
        component,
        fields=fields,
        children=[_enrich(child, datasources, rules) for child in children],
    )


def enrich_with_datasources(
    page: PageContent,
    datasources: Mapping[str, Mapping[str, Any]],
    rules: ClassifierRules = DEFAULT_RULES,
) -> PageContent:
    """Return a copy of the page whose components carry their datasource fields.

    Args:
        page: Page built from a layout that only references datasources
        datasources: Datasource reference -> fetched item, each with
            ``fields`` (records or a mapping) and optional ``children``
        rules: Classification tables

    Returns:
        New PageContent; the input page is left untouched
    """
    if not datasources:
        return page
    return replace(page, components=[_enrich(c, datasources, rules) for c in page.components])
