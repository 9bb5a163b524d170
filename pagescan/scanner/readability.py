"""Flesch Reading Ease.

Score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words),
rounded and clamped to 0-100.
"""
from __future__ import annotations

import re
from collections.abc import Sequence

from pagescan.models.seo import ReadabilityMetrics
from pagescan.numbers import round_half_up
from pagescan.parser.text_utils import strip_tags

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")

_GRADE_BANDS = (
    (90, "5th grade"),
    (80, "6th grade"),
    (70, "7th grade"),
    (60, "8th-9th grade"),
    (50, "10th-12th grade"),
    (30, "College"),
)


def count_syllables(word: str) -> int:
    """Rough English syllable count."""
    lower = word.lower().strip()
    if len(lower) <= 3:
        return 1

    # Silent trailing e
    stem = lower[:-1] if lower.endswith("e") else lower
    groups = _VOWEL_GROUP_RE.findall(stem)
    if not groups:
        return 1

    syllables = len(groups)
    if lower.endswith("le") and len(lower) > 2:
        syllables += 1
    return max(1, syllables)


def get_readability_grade(score: float) -> str:
    for threshold, grade in _GRADE_BANDS:
        if score >= threshold:
            return grade
    return "College graduate"


def tokenize(text: str) -> tuple[list[str], list[str]]:
    """Split tag-stripped text into words and non-empty sentences."""
    clean = strip_tags(text or "").strip()
    words = clean.split()
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(clean) if s.strip()]
    return words, sentences


def calculate_readability(
    text: str,
    words: Sequence[str] | None = None,
    sentences: Sequence[str] | None = None,
) -> ReadabilityMetrics:
    """Compute Flesch Reading Ease for body text.

    Args:
        text: Body text (tags are stripped)
        words: Pre-tokenized words, if the caller already has them
        sentences: Pre-split sentences, if the caller already has them

    Returns:
        ReadabilityMetrics; all zeros with grade "N/A" when there are no
        words or no sentences
    """
    if words is None or sentences is None:
        words, sentences = tokenize(text)

    if not words or not sentences:
        return ReadabilityMetrics()

    total_syllables = sum(count_syllables(word) for word in words)
    words_per_sentence = len(words) / len(sentences)
    syllables_per_word = total_syllables / len(words)

    score = round_half_up(206.835 - 1.015 * words_per_sentence - 84.6 * syllables_per_word)
    score = max(0, min(100, score))

    return ReadabilityMetrics(
        score=score,
        grade=get_readability_grade(score),
        sentences=len(sentences),
        words=len(words),
        syllables=total_syllables,
        average_words_per_sentence=round_half_up(words_per_sentence, 1),
        average_syllables_per_word=round_half_up(syllables_per_word, 2),
    )
