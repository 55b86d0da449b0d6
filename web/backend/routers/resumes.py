#!/usr/bin/env python3
"""
Resume endpoints - upload, browse and remove resumes.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from ..config import get_config
from ..dependencies import get_current_user, get_db, get_idempotent_request
from ..services.resume_service import ResumeService
from ..services.idempotency_service import IdempotencyService, IdempotentRequest, user_scope
from ..models.responses import (
    DeleteResponse,
    ResumeDetailResponse,
    ResumeListResponse,
    ResumeUploadResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resumes", tags=["resumes"])


@router.post("", response_model=ResumeUploadResponse, status_code=201)
def upload_resume(
    resume: Optional[UploadFile] = File(None),
    idempotent: Optional[IdempotentRequest] = Depends(get_idempotent_request),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Upload a resume file.
    Supports: .pdf, .docx, .doc, .txt (up to 10 MB)

    The file is processed in memory - never written to disk. Only the
    extracted text is stored.
    """
    service = ResumeService(db, uploads=get_config().uploads)

    def handler():
        if resume is None:
            return service.upload(current_user, None, b"")
        return service.upload(current_user, resume.filename, resume.file.read(), resume.content_type)

    return IdempotencyService(db).run(idempotent, handler, scope=user_scope(current_user), status_code=201)


@router.get("", response_model=ResumeListResponse)
def list_resumes(
    limit: int = Query(default=10, ge=1, le=100, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Rows to skip"),
    q: Optional[str] = Query(default=None, description="Substring filter on content or filename"),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List resumes newest first.

    Users see only their own uploads; recruiters and admins see all.
    """
    return ResumeService(db).list_resumes(current_user, limit=limit, offset=offset, search=q)


@router.get("/{resume_id}", response_model=ResumeDetailResponse)
def get_resume(
    resume_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get one resume with its full text.

    E-mail addresses and phone numbers are redacted unless the caller is a
    recruiter or admin.
    """
    return ResumeService(db).get_resume(current_user, resume_id)


@router.delete("/{resume_id}", response_model=DeleteResponse)
def delete_resume(
    resume_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ResumeService(db).delete_resume(current_user, resume_id)
