#!/usr/bin/env python3
"""
Snippet Extractor - Pick the resume sentences most relevant to a query.
"""

import re
from typing import List

from core.relevance.tokenizer import query_terms

MIN_SENTENCE_LENGTH = 10

_SENTENCE_BOUNDARY = re.compile(r'[.!?]+')


def split_sentences(text: str) -> List[str]:
    """Split text on sentence punctuation, keeping fragments longer than 10 characters."""
    if not text:
        return []
    return [
        fragment for fragment in _SENTENCE_BOUNDARY.split(text)
        if len(fragment.strip()) > MIN_SENTENCE_LENGTH
    ]


def score_sentence(sentence: str, terms: List[str]) -> float:
    """
    Fraction of query terms that appear in the sentence.

    A term is present when it contains, or is contained in, any of the
    sentence's whitespace-separated lower-cased words.
    """
    if not terms:
        return 0.0
    words = sentence.lower().split()
    hits = sum(
        1 for term in terms
        if any(term in word or word in term for word in words)
    )
    return hits / len(terms)


def extract_snippets(text: str, query: str, k: int = 3) -> List[str]:
    """
    Return up to k trimmed sentences from text ranked by query overlap.

    Sentences with equal scores keep their order of appearance.

    Args:
        text: Document text
        query: Free-text query
        k: Maximum number of snippets

    Returns:
        List of at most k non-empty sentences.
    """
    if k <= 0:
        return []

    terms = query_terms(query)
    scored = [
        (score_sentence(sentence, terms), sentence.strip())
        for sentence in split_sentences(text)
    ]
    scored.sort(key=lambda item: item[0], reverse=True)

    return [sentence for _, sentence in scored[:k] if sentence]
