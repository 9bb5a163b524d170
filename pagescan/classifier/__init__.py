"""Semantic field classification."""
from pagescan.classifier.rules import DEFAULT_RULES, ClassifierRules
from pagescan.classifier.semantic_classifier import (
    classify_content,
    classify_field,
    classify_field_name,
    map_field_type_to_category,
)

__all__ = [
    "ClassifierRules",
    "DEFAULT_RULES",
    "classify_content",
    "classify_field",
    "classify_field_name",
    "map_field_type_to_category",
]
