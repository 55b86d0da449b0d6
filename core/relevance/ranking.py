#!/usr/bin/env python3
"""
Ranking - Filter, order and truncate scored results.
"""

from typing import List, Optional, Sequence, TypeVar

T = TypeVar('T')


def rank(results: Sequence[T], floor: float = 0.0, limit: Optional[int] = None) -> List[T]:
    """
    Keep results scoring strictly above floor, sorted by score descending.

    The sort is stable, so results with equal scores stay in the order they
    were retrieved.

    Args:
        results: Objects exposing a numeric ``score`` attribute
        floor: Exclusive minimum score
        limit: Maximum number of results to return, or None for all

    Returns:
        Ranked list of at most ``limit`` results.
    """
    kept = [result for result in results if result.score > floor]
    kept.sort(key=lambda result: result.score, reverse=True)
    if limit is not None:
        kept = kept[:max(limit, 0)]
    return kept


def bounded(requested: Optional[int], default: int, maximum: int) -> int:
    """Resolve a caller-requested count against a default and a hard maximum."""
    if requested is None:
        return default
    return max(1, min(requested, maximum))
