"""Field normalization for upstream component data."""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup

from pagescan.classifier.rules import (
    DEFAULT_RULES,
    DESCRIPTION_FIELD_NAME,
    LINK_FIELD_NAME,
    SYSTEM_FIELD_NAMES,
    ClassifierRules,
)
from pagescan.classifier.semantic_classifier import classify_field
from pagescan.config.settings import settings
from pagescan.models.content import FieldInfo, ImageData, LinkData
from pagescan.parser.text_utils import is_substantial_content

logger = logging.getLogger(__name__)

IMAGE_WITHOUT_SRC = "[Image field - no src]"


@dataclass
class _Decoded:
    value: str
    type: str = "unknown"
    link: LinkData | None = None
    image: ImageData | None = None


def is_system_field(field_name: str) -> bool:
    """True for structural/system field names that carry no content."""
    lowered = field_name.lower()
    return lowered in SYSTEM_FIELD_NAMES or lowered.startswith("__")


def is_link_field_name(field_name: str) -> bool:
    return bool(LINK_FIELD_NAME.match(field_name)) or "link" in field_name.lower()


def parse_link_markup(markup: str | None) -> LinkData | None:
    """Parse the ``<Link text="..." url="..." title="..."/>`` field encoding.

    Returns None when the string is not link markup or carries neither text
    nor url.
    """
    if not markup or not isinstance(markup, str) or not markup.strip().startswith("<Link"):
        return None

    soup = BeautifulSoup(markup, "lxml")
    tag = soup.find("link")
    if tag is None:
        return None

    text = (tag.get("text") or "").strip()
    url = (tag.get("url") or "").strip()
    title = (tag.get("title") or "").strip() or None

    if not text and not url:
        return None
    return LinkData(text=text, url=url, title=title)


def _link_from_object(obj: Mapping[str, Any]) -> LinkData:
    text = obj.get("text") or obj.get("textValue") or obj.get("linkText") or ""
    url = obj.get("href") or obj.get("url") or obj.get("linkUrl") or ""
    title = obj.get("title") or None
    return LinkData(text=str(text), url=str(url), title=str(title) if title else None)


def _image_from_object(obj: Mapping[str, Any]) -> ImageData:
    alt = obj.get("alt") or obj.get("altText") or ""
    src = obj.get("src") or ""
    return ImageData(alt=str(alt), src=str(src))


def _unwrap(raw: Mapping[str, Any]) -> Any:
    """Return the payload of a field object.

    Handles ``{"value": ...}``, ``{"jsonValue": ...}`` and
    ``{"jsonValue": {"value": ...}}`` as well as bare objects.
    """
    if "jsonValue" in raw and raw["jsonValue"] not in (None, ""):
        inner = raw["jsonValue"]
        if isinstance(inner, Mapping) and "value" in inner:
            return inner["value"]
        return inner
    if "value" in raw:
        return raw["value"]
    return raw


def _decode(field_name: str, raw: Any) -> _Decoded | None:
    """Decode one raw field value. Returns None when the field is to be dropped."""
    if raw is None:
        return _Decoded(value="")

    if isinstance(raw, str):
        link = parse_link_markup(raw)
        if link is not None:
            return _Decoded(value=link.display_text(), type="Link", link=link)
        return _Decoded(value=raw)

    if not isinstance(raw, Mapping):
        if isinstance(raw, (list, tuple)):
            return _Decoded(value=json.dumps(raw, sort_keys=True, default=str), type="JSON")
        return _Decoded(value=str(raw))

    # Link markup in a string value wins over whatever the object says
    value_str = raw.get("value") if isinstance(raw.get("value"), str) else None
    markup_link = parse_link_markup(value_str)
    payload = _unwrap(raw)
    declared_type = raw.get("type") if isinstance(raw.get("type"), str) else None
    link_by_name = is_link_field_name(field_name)

    if markup_link is not None or (
        isinstance(payload, Mapping)
        and (link_by_name or "href" in payload or "url" in payload)
    ):
        link = markup_link or _link_from_object(payload)
        if link.text or link.url:
            return _Decoded(value=link.display_text(), type="Link", link=link)
        # Nothing to link to; keep the raw object visible
        return _Decoded(value=json.dumps(payload, sort_keys=True, default=str), type="JSON")

    if isinstance(payload, Mapping) and ("src" in payload or "image" in field_name.lower()):
        image = _image_from_object(payload)
        if image.alt or image.src:
            return _Decoded(value=image.display_text(), type="Image", image=image)
        if "image" in field_name.lower():
            logger.debug("Image field %r has no src", field_name)
            return _Decoded(value=IMAGE_WITHOUT_SRC, type="Image")
        return None

    if isinstance(payload, str):
        return _Decoded(value=payload, type=declared_type or "unknown")

    if (payload is raw or payload is None) and isinstance(raw.get("editable"), str):
        return _Decoded(value=raw["editable"], type="RichText")

    if payload is None:
        return _Decoded(value="", type=declared_type or "unknown")

    if isinstance(payload, (int, float, bool)):
        return _Decoded(value=str(payload), type=declared_type or "unknown")

    return _Decoded(value=json.dumps(payload, sort_keys=True, default=str), type="JSON")


def normalize_field(
    field_name: str,
    raw: Any,
    template_name: str | None = None,
    rules: ClassifierRules = DEFAULT_RULES,
) -> FieldInfo | None:
    """Normalize one upstream field, or return None to drop it.

    Empty values are dropped except for link and image fields, which are
    always kept so editors can see them, and description-like fields, which
    are kept with the empty marker.
    """
    if is_system_field(field_name):
        return None

    decoded = _decode(field_name, raw)
    if decoded is None:
        return None

    if decoded.type not in ("Link", "Image") and not is_substantial_content(decoded.value):
        if not DESCRIPTION_FIELD_NAME.search(field_name):
            return None
        decoded.value = settings.tree.empty_marker

    category = classify_field(field_name, decoded.value, decoded.type, template_name, rules)
    return FieldInfo(
        name=field_name,
        value=decoded.value,
        type=decoded.type,
        category=category,
        link=decoded.link,
        image=decoded.image,
    )


def normalize_fields(
    fields: Mapping[str, Any] | Iterable[Mapping[str, Any]] | None,
    template_name: str | None = None,
    rules: ClassifierRules = DEFAULT_RULES,
) -> list[FieldInfo]:
    """Normalize a field bag into ordered FieldInfo records.

    Accepts either a ``name -> value`` mapping (layout service shape) or a
    list of ``{"name", "value", "jsonValue"}`` records (GraphQL item shape).
    A field that fails to parse is logged and skipped.
    """
    if not fields:
        return []

    if isinstance(fields, Mapping):
        entries = list(fields.items())
    else:
        entries = []
        for record in fields:
            if isinstance(record, Mapping) and isinstance(record.get("name"), str):
                entries.append((record["name"], record))
            else:
                logger.warning("Skipping malformed field record: %r", record)

    result: list[FieldInfo] = []
    for field_name, raw in entries:
        try:
            info = normalize_field(str(field_name), raw, template_name, rules)
        except Exception:
            logger.warning("Failed to parse field %r", field_name, exc_info=True)
            continue
        if info is not None:
            result.append(info)
    return result
