"""Component tree and semantic item models."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class SemanticCategory(str, Enum):
    """Content-purpose tag assigned to every field."""
    HEADING = "Heading"
    PARAGRAPH = "Paragraph"
    RICH_TEXT = "RichText"
    LABEL = "Label"
    LINK = "Link"
    BUTTON = "Button"
    IMAGE = "Image"
    LIST = "List"
    OTHER = "Other"

    @classmethod
    def from_name(cls, name: str) -> SemanticCategory | None:
        """Return the category whose value equals ``name``, if any."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class LinkData:
    """Decoded link payload of a field."""
    text: str = ""
    url: str = ""
    title: str | None = None

    def display_text(self) -> str:
        """Render as ``text (title) [url]``, the form shown to editors."""
        parts = []
        if self.text:
            parts.append(self.text)
        if self.title:
            parts.append(f"({self.title})")
        if self.url.strip():
            parts.append(f"[{self.url}]")
        return " ".join(parts)


@dataclass(frozen=True)
class ImageData:
    """Decoded image payload of a field."""
    alt: str = ""
    src: str = ""

    def display_text(self) -> str:
        """Render as ``Alt: x | Src: y``."""
        parts = []
        if self.alt:
            parts.append(f"Alt: {self.alt}")
        if self.src:
            parts.append(f"Src: {self.src}")
        return " | ".join(parts)


@dataclass
class FieldInfo:
    """A single normalized component field."""
    name: str
    value: str
    type: str
    category: SemanticCategory
    link: LinkData | None = None
    image: ImageData | None = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["category"] = self.category.value
        return d


@dataclass
class ComponentNode:
    """A rendered component and its nested children.

    Attributes:
        id: Rendering uid or a positional fallback
        name: Display name
        component_name: Component (rendering) name
        type: Upstream component type
        datasource_id: Backing datasource reference
        placeholder: Layout slot the component renders into
        params: Rendering parameters
        fields: Ordered normalized fields
        children: Ordered child components
        path: Breadcrumb from the page name down to this component
    """
    id: str
    name: str
    component_name: str
    type: str
    datasource_id: str | None = None
    placeholder: str | None = None
    params: dict[str, Any] | None = None
    fields: list[FieldInfo] = field(default_factory=list)
    children: list[ComponentNode] = field(default_factory=list)
    path: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "component_name": self.component_name,
            "type": self.type,
            "datasource_id": self.datasource_id,
            "placeholder": self.placeholder,
            "params": self.params,
            "fields": [f.to_dict() for f in self.fields],
            "children": [c.to_dict() for c in self.children],
            "path": list(self.path),
        }


@dataclass
class PageContent:
    """A page and its root components."""
    item_id: str
    name: str
    language: str
    path: str
    components: list[ComponentNode] = field(default_factory=list)
    route_name: str | None = None

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "language": self.language,
            "path": self.path,
            "route_name": self.route_name,
            "components": [c.to_dict() for c in self.components],
        }


@dataclass(frozen=True)
class ComponentMetadata:
    """Where a semantic item came from."""
    component_name: str
    component_id: str
    field_name: str
    datasource_item_id: str | None = None
    rendering_placeholder: str | None = None
    params: dict[str, Any] | None = None


@dataclass(frozen=True)
class SemanticTextItem:
    """One classified (component, field) pair in document order."""
    id: str
    text: str
    category: SemanticCategory
    metadata: ComponentMetadata
    path: tuple[str, ...]
    link: LinkData | None = None
    image: ImageData | None = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["category"] = self.category.value
        d["path"] = list(self.path)
        return d
