#!/usr/bin/env python3
"""
Keyword Overlap Matcher - Score a resume against a job by keyword containment.

A job keyword counts as matched when any resume keyword contains it or is
contained in it, so "develop" matches "developer" and "python" matches
"python,". Repeated job keywords are counted every time they occur, which
inflates the score for jobs that repeat a term. This is kept for parity
with stored historical scores.
"""

from typing import List

from core.relevance.models import KeywordMatch, Recommendation, MAX_EVIDENCE_KEYWORDS
from core.relevance.tokenizer import keyword_tokens

STRONG_THRESHOLD = 0.3
MODERATE_THRESHOLD = 0.1


def _is_matched(keyword: str, resume_keywords: List[str]) -> bool:
    return any(keyword in candidate or candidate in keyword for candidate in resume_keywords)


def match_keywords(
    job_text: str,
    resume_text: str,
    evidence_limit: int = MAX_EVIDENCE_KEYWORDS
) -> KeywordMatch:
    """
    Compute the asymmetric keyword overlap between job text and resume text.

    Args:
        job_text: Combined job title, description and requirements
        resume_text: Extracted resume content
        evidence_limit: Maximum number of matched/missing keywords to report

    Returns:
        KeywordMatch with the raw (unrounded) score, the first matched job
        keywords and the first unmatched job keywords, both in job order.
    """
    job_keywords = keyword_tokens(job_text)
    resume_keywords = keyword_tokens(resume_text)

    if not job_keywords:
        return KeywordMatch(score=0.0)

    matched: List[str] = []
    missing: List[str] = []
    for keyword in job_keywords:
        if _is_matched(keyword, resume_keywords):
            matched.append(keyword)
        else:
            missing.append(keyword)

    limit = min(evidence_limit, MAX_EVIDENCE_KEYWORDS)
    return KeywordMatch(
        score=len(matched) / len(job_keywords),
        matched=matched[:limit],
        missing=missing[:limit]
    )


def recommendation_for(
    score: float,
    strong_threshold: float = STRONG_THRESHOLD,
    moderate_threshold: float = MODERATE_THRESHOLD
) -> Recommendation:
    """Bucket a match score into strong, moderate or weak."""
    if score > strong_threshold:
        return Recommendation.STRONG
    if score > moderate_threshold:
        return Recommendation.MODERATE
    return Recommendation.WEAK
