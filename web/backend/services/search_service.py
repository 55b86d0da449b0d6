#!/usr/bin/env python3
"""
Search service - free-text questions over stored resumes.
"""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from core.config_loader import RelevanceConfig
from core.relevance import RelevancePipeline, Role, SearchQuery, can_view_pii, search_scope
from database.repositories import ResumeRepository, SearchQueryRepository
from ..models.requests import SearchRequest
from ..models.responses import (
    SearchHistoryItem,
    SearchHistoryResponse,
    SearchResponse,
    SearchResultItem,
    SearchStatsResponse,
    TopQuery
)
from ..utils import next_offset, safe_datetime_iso, utc_now_iso
from .audit_sink import DatabaseAuditSink, search_result_to_dict
from .auth_service import require_field

logger = logging.getLogger(__name__)


class SearchService:
    """Service for resume search, search history and search statistics."""

    def __init__(self, db: Session, config: Optional[RelevanceConfig] = None):
        self.db = db
        self.config = config or RelevanceConfig()
        self.resumes = ResumeRepository(db)
        self.searches = SearchQueryRepository(db)
        self.pipeline = RelevancePipeline(
            source=self.resumes,
            audit=DatabaseAuditSink(db),
            config=self.config
        )

    def search(self, user: TokenClaims, request: SearchRequest) -> SearchResponse:
        """
        Rank the resumes visible to the caller against the query.

        Plain users search only their own uploads. Snippets are redacted for
        callers without PII access.

        Raises:
            ValidationException: Query missing or blank (FIELD_REQUIRED, field "query").
        """
        query = require_field(request.query, "query")
        k = request.k if request.k is not None else self.config.search.default_k

        results = self.pipeline.search(
            SearchQuery(text=query, k=k),
            owner_id=search_scope(Role(user.role), user.user_id),
            user_id=user.user_id
        )

        redact = not can_view_pii(user.role)
        items = [SearchResultItem(**search_result_to_dict(result, redact=redact)) for result in results]

        return SearchResponse(
            query=query,
            results=items,
            total_found=len(items),
            search_timestamp=utc_now_iso()
        )

    def history(self, user: TokenClaims, limit: int, offset: int) -> SearchHistoryResponse:
        """Past queries, newest first. Plain users see only their own."""
        user_filter = user.user_id if user.role == Role.USER else None
        rows, total = self.searches.list_history(limit=limit, offset=offset, user_id=user_filter)

        items = [
            SearchHistoryItem(
                id=row.id,
                query=row.query,
                results=row.results or [],
                user_id=row.user_id,
                searched_at=safe_datetime_iso(row.created_at)
            )
            for row in rows
        ]
        return SearchHistoryResponse(items=items, next_offset=next_offset(offset, limit, total), total=total)

    def stats(self) -> SearchStatsResponse:
        return SearchStatsResponse(
            total_searches=self.searches.count(),
            total_resumes=self.resumes.count(),
            top_queries=[
                TopQuery(query=query, frequency=frequency)
                for query, frequency in self.searches.top_queries(limit=5)
            ],
            generated_at=utc_now_iso()
        )
