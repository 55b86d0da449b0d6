#!/usr/bin/env python3
"""
Application endpoints - apply to jobs and review applications.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from ..dependencies import get_current_user, get_db, get_idempotent_request, require_roles
from ..services.application_service import ApplicationService
from ..services.idempotency_service import IdempotencyService, IdempotentRequest, user_scope
from ..models.requests import ApplicationCreateRequest, ApplicationStatusRequest
from ..models.responses import (
    ApplicationCreatedResponse,
    ApplicationDetailResponse,
    ApplicationListResponse,
    ApplicationStatusResponse,
    MyApplicationListResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])

recruiter_or_admin = require_roles("recruiter", "admin")


@router.post("", response_model=ApplicationCreatedResponse, status_code=201)
def apply_to_job(
    body: ApplicationCreateRequest,
    idempotent: Optional[IdempotentRequest] = Depends(get_idempotent_request),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Apply to a job with one of your resumes.

    One application per job per account.
    """
    service = ApplicationService(db)
    return IdempotencyService(db).run(
        idempotent,
        lambda: service.apply(current_user, body),
        scope=user_scope(current_user),
        status_code=201
    )


@router.get("", response_model=ApplicationListResponse)
def list_applications(
    limit: int = Query(default=10, ge=1, le=100, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Rows to skip"),
    status: Optional[str] = Query(default=None, description="Filter by status"),
    job_id: Optional[int] = Query(default=None, description="Filter by job"),
    current_user: TokenClaims = Depends(recruiter_or_admin),
    db: Session = Depends(get_db)
):
    """
    List applications newest first. Recruiters and admins only.

    Recruiters see applications for the jobs they created.
    """
    return ApplicationService(db).list_applications(
        current_user, limit=limit, offset=offset, status=status, job_id=job_id
    )


@router.get("/my-applications", response_model=MyApplicationListResponse)
def my_applications(
    limit: int = Query(default=10, ge=1, le=100, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Rows to skip"),
    status: Optional[str] = Query(default=None, description="Filter by status"),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ApplicationService(db).my_applications(current_user, limit=limit, offset=offset, status=status)


@router.patch("/{application_id}/status", response_model=ApplicationStatusResponse)
def update_application_status(
    application_id: int,
    body: ApplicationStatusRequest,
    current_user: TokenClaims = Depends(recruiter_or_admin),
    db: Session = Depends(get_db)
):
    """Move an application to pending, reviewing, accepted or rejected."""
    return ApplicationService(db).update_status(current_user, application_id, body)


@router.get("/{application_id}", response_model=ApplicationDetailResponse)
def get_application(
    application_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get one application with the job and resume text.

    Visible to the applicant, the recruiter who posted the job and admins.
    """
    return ApplicationService(db).get_application(current_user, application_id)
