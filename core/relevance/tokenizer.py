#!/usr/bin/env python3
"""
Tokenizer - Normalize free text into comparable word tokens.

Three tokenizations are used by the relevance core:
- tokenize(): word-boundary split with stop-word and length filtering (search)
- keyword_tokens(): crude whitespace split, long tokens only (job matching)
- query_terms(): whitespace split of a query (snippet extraction)
"""

import re
from collections import Counter
from typing import Dict, FrozenSet, List

STOP_WORDS: FrozenSet[str] = frozenset({
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by'
})

# Tokens of this length or shorter are dropped by tokenize().
MIN_TOKEN_LENGTH = 2
# Keywords must be strictly longer than this for job matching.
MIN_KEYWORD_LENGTH = 3
# Query terms must be strictly longer than this for snippet scoring.
MIN_QUERY_TERM_LENGTH = 2

_WORD_SEPARATOR = re.compile(r'\W+')


def tokenize(text: str) -> List[str]:
    """
    Lower-case text and split it into filtered word tokens.

    Args:
        text: Arbitrary input text (may be empty).

    Returns:
        Tokens in original order, duplicates kept, with stop words and
        tokens of length <= 2 removed.
    """
    if not text:
        return []
    return [
        token for token in _WORD_SEPARATOR.split(text.lower())
        if len(token) > MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def keyword_tokens(text: str) -> List[str]:
    """Whitespace-split keywords longer than 3 characters, in order, with duplicates."""
    if not text:
        return []
    return [word for word in text.lower().split() if len(word) > MIN_KEYWORD_LENGTH]


def query_terms(query: str) -> List[str]:
    """Whitespace-split query words longer than 2 characters."""
    if not query:
        return []
    return [word for word in query.lower().split() if len(word) > MIN_QUERY_TERM_LENGTH]


def term_frequencies(text: str) -> Dict[str, float]:
    """
    Build a normalized term-frequency profile of a document.

    Each filtered token maps to its count divided by the total number of
    filtered tokens. Empty input yields an empty profile.
    """
    tokens = tokenize(text)
    if not tokens:
        return {}
    total = len(tokens)
    return {term: count / total for term, count in Counter(tokens).items()}
