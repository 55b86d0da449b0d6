#!/usr/bin/env python3
"""
Relevance Pipeline - Orchestrates search and match over candidate resumes.

Both flows follow the same shape:
1. load candidates from the document source
2. score every candidate and collect evidence
3. drop candidates at or below the relevance floor
4. stable sort by score descending
5. truncate to the bounded count
6. hand the ranked list to the audit sink (failures are logged, not raised)
"""

import logging
from typing import List, Optional

from core.config_loader import RelevanceConfig
from core.relevance.interfaces import AuditSink, DocumentSource
from core.relevance.keywords import match_keywords, recommendation_for
from core.relevance.models import (
    Document, JobDocument, MatchResult, SearchQuery, SearchResult
)
from core.relevance.ranking import bounded, rank
from core.relevance.redaction import redact_pii
from core.relevance.similarity import relevance_tier, text_similarity
from core.relevance.snippets import extract_snippets

logger = logging.getLogger(__name__)


class RelevancePipeline:
    """Rank resumes against free-text queries or job postings."""

    def __init__(
        self,
        source: DocumentSource,
        audit: Optional[AuditSink] = None,
        config: Optional[RelevanceConfig] = None
    ):
        self.source = source
        self.audit = audit
        self.config = config or RelevanceConfig()

    # Search

    def score_document(self, document: Document, query: str) -> SearchResult:
        """Score a single document against a query and extract snippets."""
        cfg = self.config.search
        score = text_similarity(document.text, query)
        return SearchResult(
            document=document,
            score=score,
            tier=relevance_tier(score, cfg.high_threshold, cfg.medium_threshold),
            snippets=extract_snippets(document.text, query, cfg.snippets_per_result),
            redacted_snippets=extract_snippets(redact_pii(document.text), query, cfg.snippets_per_result)
        )

    def search(
        self,
        query: SearchQuery,
        owner_id: Optional[int] = None,
        user_id: Optional[int] = None
    ) -> List[SearchResult]:
        """
        Rank candidate resumes by Jaccard similarity to the query.

        Args:
            query: Query text and requested result count
            owner_id: Restrict candidates to this uploader (None = all)
            user_id: Caller recorded alongside the audit entry

        Returns:
            At most min(k, max_k) results scoring above the relevance floor.
        """
        cfg = self.config.search
        limit = bounded(query.k, cfg.default_k, cfg.max_k)

        documents = self.source.list_documents(owner_id=owner_id)
        scored = [self.score_document(document, query.text) for document in documents]
        results = rank(scored, floor=cfg.relevance_floor, limit=limit)

        logger.info(
            f"Search over {len(documents)} resumes returned {len(results)} results (k={limit})"
        )

        if self.audit is not None:
            try:
                self.audit.record_search(query.text, results, user_id=user_id)
            except Exception as e:
                logger.error(f"Failed to record search query: {e}", exc_info=True)

        return results

    # Match

    def score_match(self, job: JobDocument, document: Document) -> MatchResult:
        """Score a single resume against a job by keyword overlap."""
        cfg = self.config.match
        keyword_match = match_keywords(
            job.combined_text, document.text, evidence_limit=cfg.evidence_limit
        )
        score = keyword_match.score
        if cfg.score_precision is not None:
            score = round(score, cfg.score_precision)
        return MatchResult(
            document=document,
            score=score,
            recommendation=recommendation_for(
                keyword_match.score, cfg.strong_threshold, cfg.moderate_threshold
            ),
            evidence=keyword_match.matched,
            missing_requirements=keyword_match.missing
        )

    def match(self, job: JobDocument, top_n: Optional[int] = None) -> List[MatchResult]:
        """
        Rank every stored resume against a job posting.

        Args:
            job: The job to match
            top_n: Requested number of matches (bounded by max_top_n)

        Returns:
            Matches with a positive reported score, best first.
        """
        cfg = self.config.match
        limit = bounded(top_n, cfg.default_top_n, cfg.max_top_n)

        documents = self.source.list_documents()
        scored = [self.score_match(job, document) for document in documents]
        results = rank(scored, floor=0.0, limit=limit)

        logger.info(
            f"Matched job {job.id} against {len(documents)} resumes: {len(results)} kept (top_n={limit})"
        )

        if self.audit is not None and results:
            try:
                self.audit.record_matches(job.id, results)
            except Exception as e:
                logger.error(f"Failed to store matches for job {job.id}: {e}", exc_info=True)

        return results
