"""Component tree normalization.

A page context arrives in one of three layout encodings:

- ``RenderingsLayout``: ``pageInfo.presentationDetails`` with device rendering lists
- ``PlaceholderLayout``: ``layout.rendered.sitecore.route.placeholders``
- ``ComponentArrayLayout``: a pre-built ``components`` array

Each is detected by its own predicate and parsed by its own parser. They are
tried in that order and the first one that yields components wins.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pagescan.classifier.rules import DEFAULT_RULES, ClassifierRules
from pagescan.config.settings import settings
from pagescan.models.content import ComponentNode, FieldInfo, PageContent, SemanticCategory
from pagescan.parser.field_parser import normalize_fields

logger = logging.getLogger(__name__)


class LayoutError(ValueError):
    """Raised when a page context has no usable root item."""


@dataclass(frozen=True)
class RenderingsLayout:
    page_name: str
    devices: tuple[Mapping[str, Any], ...]


@dataclass(frozen=True)
class PlaceholderLayout:
    page_name: str
    placeholders: Mapping[str, Any]


@dataclass(frozen=True)
class ComponentArrayLayout:
    page_name: str
    components: tuple[Any, ...]


LayoutVariant = RenderingsLayout | PlaceholderLayout | ComponentArrayLayout


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key that holds something truthy."""
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


# === Variant detection ===


def _detect_renderings(context: Mapping[str, Any], page_name: str) -> RenderingsLayout | None:
    details = _dig(context, "pageInfo", "presentationDetails")
    if not details:
        return None

    if isinstance(details, str):
        try:
            details = json.loads(details)
        except json.JSONDecodeError:
            logger.warning("presentationDetails is not valid JSON; skipping renderings layout")
            return None

    devices = _dig(details, "devices")
    if not isinstance(devices, list):
        return None
    return RenderingsLayout(
        page_name=page_name,
        devices=tuple(d for d in devices if isinstance(d, Mapping)),
    )


def _detect_placeholders(context: Mapping[str, Any], page_name: str) -> PlaceholderLayout | None:
    placeholders = _dig(context, "layout", "rendered", "sitecore", "route", "placeholders")
    if not isinstance(placeholders, Mapping):
        return None
    return PlaceholderLayout(page_name=page_name, placeholders=placeholders)


def _detect_component_array(context: Mapping[str, Any], page_name: str) -> ComponentArrayLayout | None:
    components = context.get("components")
    if not isinstance(components, list):
        return None
    return ComponentArrayLayout(page_name=page_name, components=tuple(components))


_DETECTORS: tuple[Callable[[Mapping[str, Any], str], LayoutVariant | None], ...] = (
    _detect_renderings,
    _detect_placeholders,
    _detect_component_array,
)


def detect_layouts(context: Mapping[str, Any], page_name: str) -> list[LayoutVariant]:
    """Return every layout encoding present in the context, in priority order."""
    variants = []
    for detect in _DETECTORS:
        variant = detect(context, page_name)
        if variant is not None:
            variants.append(variant)
    return variants


# === Node parsing ===


class _NodeParser:
    """Recursive raw-node parser with depth and cycle guards."""

    def __init__(self, rules: ClassifierRules, max_depth: int):
        self.rules = rules
        self.max_depth = max_depth

    def parse_many(
        self,
        raws: Sequence[Any],
        parent_path: list[str],
        placeholder_key: str | None = None,
        depth: int = 0,
        ancestry: frozenset[int] = frozenset(),
    ) -> list[ComponentNode]:
        nodes = []
        for index, raw in enumerate(raws):
            try:
                node = self.parse_component(raw, parent_path, index, placeholder_key, depth, ancestry)
            except Exception:
                logger.warning(
                    "Failed to parse component %d in %r", index, placeholder_key or "children",
                    exc_info=True,
                )
                continue
            if node is not None:
                nodes.append(node)
        return nodes

    def parse_component(
        self,
        raw: Any,
        parent_path: list[str],
        index: int,
        placeholder_key: str | None = None,
        depth: int = 0,
        ancestry: frozenset[int] = frozenset(),
    ) -> ComponentNode | None:
        if not isinstance(raw, Mapping):
            raise TypeError(f"component must be an object, got {type(raw).__name__}")
        if id(raw) in ancestry:
            logger.warning("Cycle detected at component %d under %s; skipping", index, " > ".join(parent_path))
            return None

        component_name = str(_first(raw, "componentName", "name", "displayName") or f"Component-{index}")
        component_id = str(_first(raw, "uid", "id", "key") or f"{placeholder_key or 'comp'}-{index}")
        name = str(raw.get("displayName") or component_name)
        path = [*parent_path, name]

        children: list[ComponentNode] = []
        has_nested = isinstance(raw.get("placeholders"), Mapping) or isinstance(raw.get("children"), list)
        if has_nested and depth + 1 > self.max_depth:
            logger.warning("Maximum depth %d reached at %s; children skipped", self.max_depth, " > ".join(path))
        elif has_nested:
            inner = ancestry | {id(raw)}
            nested = raw.get("placeholders")
            if isinstance(nested, Mapping):
                for key, value in nested.items():
                    if isinstance(value, list):
                        children.extend(self.parse_many(value, path, key, depth + 1, inner))
            if isinstance(raw.get("children"), list):
                children.extend(self.parse_many(raw["children"], path, None, depth + 1, inner))

        datasource = _first(raw, "dataSource", "datasourceId")
        return ComponentNode(
            id=component_id,
            name=name,
            component_name=component_name,
            type=str(raw.get("componentName") or "Component"),
            datasource_id=str(datasource) if datasource else None,
            placeholder=placeholder_key,
            params=_first(raw, "params", "parameters"),
            fields=normalize_fields(raw.get("fields"), rules=self.rules),
            children=children,
            path=path,
        )


def component_name_from_datasource(datasource_path: str | None) -> str:
    """``"local:/Data/HeroST/HeroST 1"`` -> ``"HeroST 1"``."""
    if not datasource_path:
        return ""
    clean = datasource_path.removeprefix("local:")
    return clean.split("/")[-1]


def _parse_rendering(rendering: Mapping[str, Any], index: int, parent_path: list[str]) -> ComponentNode:
    datasource = str(rendering.get("dataSource") or "")
    component_name = (
        component_name_from_datasource(datasource)
        or rendering.get("renderingName")
        or f"Component {index + 1}"
    )

    fields = []
    if datasource:
        # The datasource reference stays visible until the fields are fetched
        fields.append(FieldInfo(
            name="DataSource",
            value=datasource,
            type="Reference",
            category=SemanticCategory.LABEL,
        ))

    return ComponentNode(
        id=str(rendering.get("instanceId") or rendering.get("id") or f"rendering-{index}"),
        name=component_name,
        component_name=component_name,
        type="Rendering",
        datasource_id=datasource or None,
        placeholder=rendering.get("placeholderKey") or "main",
        params=rendering.get("parameters") or {},
        fields=fields,
        children=[],
        path=[*parent_path, component_name],
    )


def _parse_renderings(layout: RenderingsLayout, parser: _NodeParser) -> list[ComponentNode]:
    components = []
    for device in layout.devices:
        renderings = device.get("renderings")
        if not isinstance(renderings, list):
            continue
        for index, rendering in enumerate(renderings):
            try:
                components.append(_parse_rendering(rendering, index, [layout.page_name]))
            except Exception:
                logger.warning("Failed to parse rendering %d", index, exc_info=True)
    return components


def _parse_placeholders(layout: PlaceholderLayout, parser: _NodeParser) -> list[ComponentNode]:
    components = []
    for key, value in layout.placeholders.items():
        if isinstance(value, list):
            components.extend(parser.parse_many(value, [layout.page_name], key))
    return components


def _parse_component_array(layout: ComponentArrayLayout, parser: _NodeParser) -> list[ComponentNode]:
    return parser.parse_many(layout.components, [layout.page_name])


_LAYOUT_PARSERS: dict[type, Callable[[Any, _NodeParser], list[ComponentNode]]] = {
    RenderingsLayout: _parse_renderings,
    PlaceholderLayout: _parse_placeholders,
    ComponentArrayLayout: _parse_component_array,
}


def parse_layout(
    layout: LayoutVariant,
    rules: ClassifierRules = DEFAULT_RULES,
    max_depth: int | None = None,
) -> list[ComponentNode]:
    """Parse one layout variant into root components."""
    parser = _NodeParser(rules, settings.tree.max_depth if max_depth is None else max_depth)
    return _LAYOUT_PARSERS[type(layout)](layout, parser)


def build_page_content(
    context: Mapping[str, Any],
    rules: ClassifierRules = DEFAULT_RULES,
    max_depth: int | None = None,
) -> PageContent:
    """Build a PageContent from a Pages-style context.

    Args:
        context: Mapping with ``pageInfo`` and one of the layout encodings
        rules: Classification tables used for every field
        max_depth: Nesting limit; defaults to ``settings.tree.max_depth``

    Returns:
        PageContent with the components of the first layout that yields any

    Raises:
        LayoutError: If the context has no page info or the page has no id
    """
    page_info = context.get("pageInfo") if isinstance(context, Mapping) else None
    if not isinstance(page_info, Mapping):
        raise LayoutError("No page info available in context")
    if not page_info.get("id"):
        raise LayoutError("Page info has no item id")

    page_name = page_info.get("name") or settings.tree.default_page_name
    components: list[ComponentNode] = []

    for layout in detect_layouts(context, page_name):
        components = parse_layout(layout, rules, max_depth)
        if components:
            logger.debug("Using %s with %d root components", type(layout).__name__, len(components))
            break

    return PageContent(
        item_id=str(page_info["id"]),
        name=page_name,
        language=page_info.get("language") or settings.tree.default_language,
        path=page_info.get("path") or "/",
        components=components,
    )


# === Experience Edge responses ===


def _parse_item(
    item: Mapping[str, Any],
    parent_path: list[str],
    rules: ClassifierRules,
    max_depth: int,
    depth: int = 0,
) -> ComponentNode:
    template_name = _dig(item, "template", "name")
    name = str(item.get("name") or "Item")
    path = [*parent_path, name]

    children = []
    results = _dig(item, "children", "results")
    if isinstance(results, list) and results:
        if depth + 1 > max_depth:
            logger.warning("Maximum depth %d reached at %s; child items skipped", max_depth, " > ".join(path))
        else:
            for child in results:
                try:
                    children.append(_parse_item(child, path, rules, max_depth, depth + 1))
                except Exception:
                    logger.warning("Failed to parse child item of %s", name, exc_info=True)

    return ComponentNode(
        id=str(item.get("id") or ""),
        name=name,
        component_name=template_name or "Item",
        type=template_name or "Item",
        datasource_id=str(item["id"]) if item.get("id") else None,
        fields=normalize_fields(item.get("fields"), template_name=template_name, rules=rules),
        children=children,
        path=path,
    )


def parse_edge_response(
    response: Mapping[str, Any],
    rules: ClassifierRules = DEFAULT_RULES,
    max_depth: int | None = None,
) -> PageContent | None:
    """Build a PageContent from an Experience Edge style response.

    Uses the rendered route placeholders when present and otherwise treats
    the item itself (with its child items) as the component tree. Returns
    None when the response has no item.
    """
    item = response.get("item") if isinstance(response, Mapping) else None
    if not isinstance(item, Mapping) or not item.get("id"):
        return None

    depth_limit = settings.tree.max_depth if max_depth is None else max_depth
    page_name = str(item.get("name") or settings.tree.default_page_name)
    route = _dig(response, "layout", "item", "rendered", "sitecore", "route")

    components: list[ComponentNode] = []
    placeholders = _dig(route, "placeholders")
    if isinstance(placeholders, Mapping):
        components = parse_layout(PlaceholderLayout(page_name, placeholders), rules, depth_limit)

    if not components:
        components = [_parse_item(item, [page_name], rules, depth_limit)]

    route_name = _dig(route, "name")
    return PageContent(
        item_id=str(item["id"]),
        name=page_name,
        language=response.get("language") or settings.tree.default_language,
        path=str(item.get("path") or "/"),
        components=components,
        route_name=route_name if isinstance(route_name, str) else None,
    )


# === Tree helpers ===


def iter_components(components: Sequence[ComponentNode]) -> Iterator[ComponentNode]:
    """Yield components depth-first, parents before children."""
    stack = list(reversed(components))
    while stack:
        component = stack.pop()
        yield component
        stack.extend(reversed(component.children))


def flatten_component_tree(components: Sequence[ComponentNode]) -> list[ComponentNode]:
    return list(iter_components(components))


def find_component_by_id(components: Sequence[ComponentNode], component_id: str) -> ComponentNode | None:
    for component in iter_components(components):
        if component.id == component_id:
            return component
    return None


def get_component_breadcrumb(component: ComponentNode) -> str:
    return " > ".join(component.path)
