#!/usr/bin/env python3
"""
Relevance Models - Data structures for search and match results.

Documents are plain Python objects detached from the ORM session, so the
relevance core can run after the unit of work has closed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

MAX_EVIDENCE_KEYWORDS = 5


class Role(str, Enum):
    """Caller role resolved by the authentication layer."""
    USER = "user"
    RECRUITER = "recruiter"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> List[str]:
        return [role.value for role in cls]


class RelevanceTier(str, Enum):
    """Relevance bucket for free-text search results."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Recommendation(str, Enum):
    """Recommendation bucket for job-to-resume matches."""
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


def _check_score(score: float) -> None:
    if not (0.0 <= score <= 1.0):
        raise ValueError(f"score must be within [0, 1], got {score}")


@dataclass(frozen=True)
class Document:
    """A stored resume as seen by the relevance core."""
    id: int
    text: str
    owner_id: Optional[int] = None
    label: str = ""
    owner_name: Optional[str] = None
    uploaded_at: Optional[datetime] = None


@dataclass(frozen=True)
class JobDocument:
    """A job posting as seen by the relevance core."""
    id: int
    title: str
    description: str
    requirements: Optional[str] = None

    @property
    def combined_text(self) -> str:
        """Title, description and requirements joined for keyword matching."""
        return f"{self.title} {self.description} {self.requirements or ''}"


@dataclass(frozen=True)
class SearchQuery:
    """Free-text query plus the number of results requested."""
    text: str
    k: int = 3

    def __post_init__(self):
        if self.k < 1:
            raise ValueError(f"k must be at least 1, got {self.k}")


@dataclass
class SearchResult:
    """
    Jaccard-scored search hit with supporting snippets.

    redacted_snippets are cut from the PII-redacted text, never redacted
    after the cut.
    """
    document: Document
    score: float
    tier: RelevanceTier
    snippets: List[str] = field(default_factory=list)
    redacted_snippets: List[str] = field(default_factory=list)

    def __post_init__(self):
        _check_score(self.score)


@dataclass
class KeywordMatch:
    """Outcome of keyword overlap between a job and a single resume."""
    score: float
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    def __post_init__(self):
        _check_score(self.score)
        if len(self.matched) > MAX_EVIDENCE_KEYWORDS or len(self.missing) > MAX_EVIDENCE_KEYWORDS:
            raise ValueError(
                f"evidence lists are capped at {MAX_EVIDENCE_KEYWORDS} keywords"
            )


@dataclass
class MatchResult:
    """Keyword-overlap match of a resume against a job."""
    document: Document
    score: float
    recommendation: Recommendation
    evidence: List[str] = field(default_factory=list)
    missing_requirements: List[str] = field(default_factory=list)

    def __post_init__(self):
        _check_score(self.score)
        if len(self.evidence) > MAX_EVIDENCE_KEYWORDS:
            raise ValueError(f"evidence is capped at {MAX_EVIDENCE_KEYWORDS} keywords")
        if len(self.missing_requirements) > MAX_EVIDENCE_KEYWORDS:
            raise ValueError(
                f"missing_requirements is capped at {MAX_EVIDENCE_KEYWORDS} keywords"
            )
