#!/usr/bin/env python3
"""
Database-backed audit sink for ranked search and match results.
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from core.relevance import AuditSink, MatchResult, SearchResult
from database.repositories import MatchRepository, SearchQueryRepository

logger = logging.getLogger(__name__)


def search_result_to_dict(result: SearchResult, redact: bool = False) -> Dict[str, Any]:
    snippets = list(result.redacted_snippets if redact else result.snippets)
    return {
        "resume_id": result.document.id,
        "filename": result.document.label,
        "uploader": result.document.owner_name,
        "similarity_score": result.score,
        "snippets": snippets,
        "relevance": result.tier.value,
    }


def match_result_to_dict(result: MatchResult) -> Dict[str, Any]:
    return {
        "resume_id": result.document.id,
        "filename": result.document.label,
        "uploader": result.document.owner_name,
        "match_score": result.score,
        "evidence": list(result.evidence),
        "missing_requirements": list(result.missing_requirements),
        "recommendation": result.recommendation.value,
    }


class DatabaseAuditSink(AuditSink):
    """
    Writes search history and match results through the request session.

    Each record is committed on its own. On failure the session is rolled
    back and the error re-raised for the pipeline to log.
    """

    def __init__(self, db: Session):
        self.db = db
        self.searches = SearchQueryRepository(db)
        self.matches = MatchRepository(db)

    def record_search(self, query: str, results: List[SearchResult], user_id: Optional[int] = None) -> None:
        # History is visible across accounts, so snippets are stored redacted
        entries = [search_result_to_dict(result, redact=True) for result in results]
        try:
            self.searches.log_query(query, entries, user_id=user_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def record_matches(self, job_id: int, results: List[MatchResult]) -> None:
        try:
            count = self.matches.save_matches(job_id, results)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Stored {count} matches for job {job_id}")
