#!/usr/bin/env python3
"""
Search endpoints - ask questions over stored resumes.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from ..config import get_config
from ..dependencies import get_current_user, get_db, get_idempotent_request, require_roles
from ..services.search_service import SearchService
from ..services.idempotency_service import IdempotencyService, IdempotentRequest, user_scope
from ..models.requests import SearchRequest
from ..models.responses import SearchHistoryResponse, SearchResponse, SearchStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ask", tags=["search"])


@router.post("", response_model=SearchResponse)
def search_resumes(
    body: SearchRequest,
    idempotent: Optional[IdempotentRequest] = Depends(get_idempotent_request),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Rank resumes by similarity to a free-text query.

    Each result carries a relevance tier and up to two supporting snippets.
    Users search only their own resumes.
    """
    service = SearchService(db, config=get_config().relevance)
    return IdempotencyService(db).run(
        idempotent,
        lambda: service.search(current_user, body),
        scope=user_scope(current_user)
    )


@router.get("/history", response_model=SearchHistoryResponse)
def search_history(
    limit: int = Query(default=10, ge=1, le=100, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Rows to skip"),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return SearchService(db, config=get_config().relevance).history(current_user, limit=limit, offset=offset)


@router.get("/stats", response_model=SearchStatsResponse)
def search_stats(
    current_user: TokenClaims = Depends(require_roles("admin")),
    db: Session = Depends(get_db)
):
    """Search volume and most frequent queries. Admin only."""
    return SearchService(db, config=get_config().relevance).stats()
