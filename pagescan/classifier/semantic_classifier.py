"""Semantic classification of component fields."""
from __future__ import annotations

from pagescan.classifier.rules import DEFAULT_RULES, ClassifierRules
from pagescan.models.content import SemanticCategory

_DIRECT_FROM_NAME = (SemanticCategory.LINK, SemanticCategory.BUTTON)


def classify_field_name(field_name: str, rules: ClassifierRules = DEFAULT_RULES) -> SemanticCategory:
    """Classify a field by its name alone.

    Whole-name patterns of every category are tried before any suffix
    pattern, so ``RichText`` is RichText rather than a ``*text`` Paragraph.
    """
    if not field_name:
        return SemanticCategory.OTHER

    for rule_set in (rules.name_exact, rules.name_suffix):
        for category, pattern in rule_set:
            if pattern.search(field_name):
                return category

    return SemanticCategory.OTHER


def classify_content(content: str | None, rules: ClassifierRules = DEFAULT_RULES) -> SemanticCategory | None:
    """Classify a field by the shape of its value.

    Returns None when nothing about the value is distinctive.
    """
    if not content or not content.strip():
        return None

    for category, pattern in rules.content_button:
        if pattern.search(content):
            return category

    for category, pattern in rules.content_patterns:
        if pattern.search(content):
            return category

    return None


def map_field_type_to_category(field_type: str, rules: ClassifierRules = DEFAULT_RULES) -> SemanticCategory:
    """Map an upstream CMS field type to a category."""
    return rules.field_types.get(field_type, SemanticCategory.OTHER)


def classify_field(
    field_name: str,
    field_value: str | None,
    field_type: str | None = None,
    template_name: str | None = None,
    rules: ClassifierRules = DEFAULT_RULES,
) -> SemanticCategory:
    """Classify a field from all available signals.

    Args:
        field_name: Field name as delivered upstream
        field_value: Raw (possibly markup) value
        field_type: Declared upstream type or an already-known category name
        template_name: Name of the owning template, if known
        rules: Classification tables

    Returns:
        Exactly one SemanticCategory
    """
    if field_value is None:
        value = ""
    elif isinstance(field_value, str):
        value = field_value
    else:
        value = str(field_value)

    # Template name is the strongest signal
    if template_name and template_name in rules.templates:
        return rules.templates[template_name]

    if field_type:
        direct = SemanticCategory.from_name(field_type)
        if direct is not None:
            return direct

        type_category = map_field_type_to_category(field_type, rules)
        if type_category is not SemanticCategory.OTHER:
            return type_category

    name_category = classify_field_name(field_name or "", rules)
    content_category = classify_content(value, rules)

    if name_category is not SemanticCategory.OTHER:
        if name_category in _DIRECT_FROM_NAME:
            return name_category
        # Markup in the value beats a plain-text name guess
        if content_category is SemanticCategory.RICH_TEXT:
            return SemanticCategory.RICH_TEXT
        return name_category

    if content_category is not None:
        return content_category

    if len(value) > rules.paragraph_min_length:
        return SemanticCategory.PARAGRAPH
    return SemanticCategory.LABEL
