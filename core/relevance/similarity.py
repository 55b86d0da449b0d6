#!/usr/bin/env python3
"""
Similarity Scorer - Jaccard similarity between token sets.
"""

from typing import Iterable

from core.relevance.models import RelevanceTier
from core.relevance.tokenizer import tokenize

HIGH_TIER_THRESHOLD = 0.1
MEDIUM_TIER_THRESHOLD = 0.05


def jaccard_similarity(tokens1: Iterable[str], tokens2: Iterable[str]) -> float:
    """
    Calculate the Jaccard index of two token sequences.

    Duplicates collapse before comparison. Two empty inputs score 0.0.

    Args:
        tokens1: First token sequence
        tokens2: Second token sequence

    Returns:
        |A ∩ B| / |A ∪ B| in [0.0, 1.0]
    """
    set1 = set(tokens1)
    set2 = set(tokens2)
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)


def text_similarity(text1: str, text2: str) -> float:
    """Tokenize both texts and return their Jaccard similarity."""
    return jaccard_similarity(tokenize(text1), tokenize(text2))


def relevance_tier(
    score: float,
    high_threshold: float = HIGH_TIER_THRESHOLD,
    medium_threshold: float = MEDIUM_TIER_THRESHOLD
) -> RelevanceTier:
    """Bucket a search score into high, medium or low."""
    if score > high_threshold:
        return RelevanceTier.HIGH
    if score > medium_threshold:
        return RelevanceTier.MEDIUM
    return RelevanceTier.LOW
