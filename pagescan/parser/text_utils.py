"""Plain-text helpers shared by the extractor and scanner."""
from __future__ import annotations

import re

_SCRIPT_RE = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)
_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_PARAGRAPH_END_RE = re.compile(r"</p>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def extract_plain_text(html: str | None) -> str:
    """Strip markup from a field value and normalize its whitespace."""
    if not html:
        return ""

    text = _SCRIPT_RE.sub("", html)
    text = _STYLE_RE.sub("", text)
    text = _BREAK_RE.sub("\n", text)
    text = _PARAGRAPH_END_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)

    for entity, char in _ENTITIES:
        text = text.replace(entity, char)

    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_tags(text: str) -> str:
    """Replace every tag with a space."""
    return _TAG_RE.sub(" ", text)


def is_substantial_content(content: str | None) -> bool:
    """True when the value still has text once tags are removed."""
    if not content:
        return False
    return bool(_TAG_RE.sub("", content).strip())


def count_words(text: str | None) -> int:
    if not text or not text.strip():
        return 0
    return len(strip_tags(text).split())
