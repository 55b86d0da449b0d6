#!/usr/bin/env python3
"""
Job endpoints - manage postings and match resumes against them.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from ..config import get_config
from ..dependencies import get_current_user, get_db, get_idempotent_request, require_roles
from ..services.job_service import JobService
from ..services.match_service import MatchService
from ..services.idempotency_service import IdempotencyService, IdempotentRequest, user_scope
from ..models.requests import JobCreateRequest, JobUpdateRequest, MatchRequest
from ..models.responses import (
    DeleteResponse,
    JobListResponse,
    JobResponse,
    JobUpdateResponse,
    MatchJobResponse,
    StoredMatchListResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])

recruiter_or_admin = require_roles("recruiter", "admin")


@router.post("", response_model=JobResponse, status_code=201)
def create_job(
    body: JobCreateRequest,
    idempotent: Optional[IdempotentRequest] = Depends(get_idempotent_request),
    current_user: TokenClaims = Depends(recruiter_or_admin),
    db: Session = Depends(get_db)
):
    """Create a job posting. Recruiters and admins only."""
    service = JobService(db)
    return IdempotencyService(db).run(
        idempotent,
        lambda: service.create_job(current_user, body),
        scope=user_scope(current_user),
        status_code=201
    )


@router.get("", response_model=JobListResponse)
def list_jobs(
    limit: int = Query(default=10, ge=1, le=100, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Rows to skip"),
    company: Optional[str] = Query(default=None, description="Substring filter on company"),
    location: Optional[str] = Query(default=None, description="Substring filter on location"),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List job postings newest first."""
    return JobService(db).list_jobs(limit=limit, offset=offset, company=company, location=location)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(
    job_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return JobService(db).get_job(job_id)


@router.patch("/{job_id}", response_model=JobUpdateResponse)
def update_job(
    job_id: int,
    body: JobUpdateRequest,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update selected fields of a job.

    Only the creator or an admin may update a job.
    """
    return JobService(db).update_job(current_user, job_id, body)


@router.delete("/{job_id}", response_model=DeleteResponse)
def delete_job(
    job_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a job and its stored matches. Creator or admin only."""
    return JobService(db).delete_job(current_user, job_id)


@router.post("/{job_id}/match", response_model=MatchJobResponse)
def match_job(
    job_id: int,
    body: Optional[MatchRequest] = None,
    idempotent: Optional[IdempotentRequest] = Depends(get_idempotent_request),
    current_user: TokenClaims = Depends(recruiter_or_admin),
    db: Session = Depends(get_db)
):
    """
    Rank every stored resume against the job by keyword overlap.

    Returns matches with evidence (job keywords found in the resume) and
    missing requirements, best first. Results are stored for later review.
    """
    service = MatchService(db, config=get_config().relevance)
    top_n = body.top_n if body is not None else None
    return IdempotencyService(db).run(
        idempotent,
        lambda: service.match_job(job_id, top_n=top_n),
        scope=user_scope(current_user)
    )


@router.get("/{job_id}/matches", response_model=StoredMatchListResponse)
def get_job_matches(
    job_id: int,
    limit: int = Query(default=10, ge=1, le=100, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Rows to skip"),
    current_user: TokenClaims = Depends(recruiter_or_admin),
    db: Session = Depends(get_db)
):
    """Stored matches for a job, highest score first."""
    return MatchService(db, config=get_config().relevance).get_matches(job_id, limit=limit, offset=offset)
